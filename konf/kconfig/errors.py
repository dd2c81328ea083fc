"""Exception hierarchy for Kconfig parsing.

I/O failures are not wrapped: reading a missing file raises the built-in
``FileNotFoundError`` and any other read/write failure surfaces as ``OSError``.
Only grammar violations are reported through the classes below.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class KconfigError(Exception):
    """Base class for errors raised while processing Kconfig sources."""

    pass


class KconfigSyntaxError(KconfigError):
    """Source file violates the Kconfig grammar.

    Parsing aborts on the first syntax error; no partial result is returned.

    Attributes:
        category: Short, stable description of what went wrong
            (e.g. ``"invalid name for config"``).
        path: File being parsed when the error occurred, if known.
        line: 1-based line number of the offending token, if known.
    """

    def __init__(
        self,
        category: str,
        path: Optional[Path] = None,
        line: Optional[int] = None,
    ) -> None:
        self.category = category
        self.path = path
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.path is None:
            return self.category
        if self.line is None:
            return f"{self.path}: {self.category}"
        return f"{self.path}:{self.line}: {self.category}"


class SourceCycleError(KconfigSyntaxError):
    """A ``source`` directive re-enters a file that is still being parsed."""

    def __init__(
        self,
        chain: Sequence[Path],
        path: Optional[Path] = None,
        line: Optional[int] = None,
    ) -> None:
        self.chain = list(chain)
        super().__init__("cyclic source", path=path, line=line)

    def _format(self) -> str:
        base = super()._format()
        if not self.chain:
            return base
        return f"{base} ({' -> '.join(str(p) for p in self.chain)})"


__all__ = ["KconfigError", "KconfigSyntaxError", "SourceCycleError"]
