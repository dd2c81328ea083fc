"""List command: tabulate every variable with its type and values."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from konf.cli.common import COMMAND_ERRORS, apply_state, load_kconfig
from konf.kconfig import KConfig

logger = logging.getLogger("konf.cli.listing")


def build_table(kconfig: KConfig) -> Table:
    """Build a table of name, type, default and current value per variable."""
    table = Table(title=kconfig.name)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Default")
    table.add_column("Current")
    table.add_column("Prompt")

    current = kconfig.snapshot_values()
    for name, var in kconfig.vars.items():
        value = current[name]
        table.add_row(
            name,
            var.ty.keyword if var.ty else "-",
            escape(str(var.default)) if var.default is not None else "-",
            escape(str(value)) if value is not None else "-",
            escape(var.desc or ""),
        )
    return table


def list_command(args, console: Console | None = None) -> int:
    """Execute list command.

    Returns:
        int: Exit code.
    """
    console = console or Console()
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

    console.print(build_table(kconfig))
    return 0
