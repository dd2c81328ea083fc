"""Path helpers for resolving ``source`` directives."""

from pathlib import Path
from typing import Optional, Union


def canonical_parent(path: Union[Path, str]) -> Path:
    """Return the resolved directory containing ``path``."""
    return Path(path).resolve().parent


def resolve_source_path(
    target: Union[Path, str],
    including_file: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Resolve the target of a ``source`` directive.

    Relative targets are taken relative to the directory of the file that
    holds the directive, not the process working directory. Absolute targets
    are returned resolved as-is.

    Args:
        target: Path text from the ``source`` directive.
        including_file: File containing the directive. When None (text parsed
            without a file), the working directory is used.

    Returns:
        Absolute, resolved path of the file to parse.

    Examples:
        >>> resolve_source_path("drivers/Kconfig", Path("/src/Kconfig"))
        PosixPath('/src/drivers/Kconfig')
    """
    target = Path(target)
    if target.is_absolute():
        return target.resolve()
    if including_file is None:
        return (Path.cwd() / target).resolve()
    return (canonical_parent(including_file) / target).resolve()
