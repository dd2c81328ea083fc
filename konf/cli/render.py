"""Render command implementation."""

from __future__ import annotations

import logging

from rich.console import Console

from konf.cli.common import COMMAND_ERRORS, apply_state, load_kconfig

logger = logging.getLogger("konf.cli.render")


def render_command(args, console: Console | None = None) -> int:
    """Execute render command.

    Args:
        args: Parsed command-line arguments containing:
            - kconfig: Kconfig file to parse
            - defaults: Apply declared defaults before rendering
            - load: Optional state file to overlay

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console(soft_wrap=True)
    try:
        kconfig, settings = load_kconfig(args)
    except COMMAND_ERRORS as err:
        logger.error("failed to parse %s: %s", args.kconfig, err)
        return 1

    try:
        apply_state(kconfig, settings, getattr(args, "defaults", False), getattr(args, "load", None))
    except COMMAND_ERRORS as err:
        logger.error("failed to load %s: %s", args.load, err)
        return 1

    console.print(
        kconfig.render(indent=settings.indent_unit),
        end="",
        markup=False,
        highlight=False,
    )
    return 0
