"""State file commands: defconfig and olddefconfig.

``defconfig`` writes a state file holding only declared defaults.
``olddefconfig`` starts from defaults, overlays an existing state file and
writes the merged result, so symbols added since the state file was last
written pick up their defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from konf.cli.common import COMMAND_ERRORS, apply_state, load_kconfig

logger = logging.getLogger("konf.cli.defconfig")


def _write_state(args, input_path: Optional[str]) -> int:
    try:
        kconfig, settings = load_kconfig(args)
    except COMMAND_ERRORS as err:
        logger.error("failed to parse %s: %s", args.kconfig, err)
        return 1

    output = Path(args.output)
    try:
        apply_state(kconfig, settings, defaults=True, state_path=input_path)
        kconfig.write_config(output, encoding=settings.encoding, prefix=settings.config_prefix)
    except COMMAND_ERRORS as err:
        logger.error("failed to update %s: %s", output, err)
        return 1

    logger.info("Configuration written to %s", output)
    return 0


def defconfig_command(args) -> int:
    """Execute defconfig command.

    Args:
        args: Parsed command-line arguments containing ``kconfig`` and
            ``output``.

    Returns:
        int: Exit code.
    """
    return _write_state(args, None)


def olddefconfig_command(args) -> int:
    """Execute olddefconfig command.

    Reads ``args.input`` (defaults to ``args.output``) when it exists; a
    missing input behaves like defconfig.

    Returns:
        int: Exit code.
    """
    input_path = getattr(args, "input", None) or args.output
    if not Path(input_path).exists():
        logger.warning("%s not found, using defaults only", input_path)
        input_path = None
    return _write_state(args, input_path)
