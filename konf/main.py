"""Main CLI entry point for konf.

Provides commands: render, defconfig, olddefconfig, list
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from konf.cli.defconfig import defconfig_command, olddefconfig_command
from konf.cli.listing import list_command
from konf.cli.render import render_command


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def _add_kconfig_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "kconfig",
        nargs="?",
        default="Kconfig",
        help="Top-level Kconfig file (default: Kconfig)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="konf",
        description="konf - Kconfig parser and configuration state tool",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional tool settings. Can be a path to a TOML/JSON file "
            "(e.g. konf.toml) or an inline TOML/JSON string. When omitted, "
            "built-in defaults are used."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser(
        "render",
        help="Parse a Kconfig tree and print it in canonical form",
    )
    _add_kconfig_argument(render_parser)
    render_parser.add_argument(
        "--defaults",
        action="store_true",
        help="Apply declared defaults as current values before rendering",
    )
    render_parser.add_argument(
        "--load",
        help="State file (.config) whose values are shown as current values",
    )

    # Defconfig command
    defconfig_parser = subparsers.add_parser(
        "defconfig",
        help="Write a state file holding the declared defaults",
    )
    _add_kconfig_argument(defconfig_parser)
    defconfig_parser.add_argument(
        "-o",
        "--output",
        default=".config",
        help="Output state file (default: .config)",
    )

    # Olddefconfig command
    old_parser = subparsers.add_parser(
        "olddefconfig",
        help="Update an existing state file, defaulting any new symbols",
    )
    _add_kconfig_argument(old_parser)
    old_parser.add_argument(
        "-i",
        "--input",
        help="Existing state file to read (default: the output file)",
    )
    old_parser.add_argument(
        "-o",
        "--output",
        default=".config",
        help="Output state file (default: .config)",
    )

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="Show every symbol with its type, default and current value",
    )
    _add_kconfig_argument(list_parser)
    list_parser.add_argument(
        "--defaults",
        action="store_true",
        help="Apply declared defaults before listing",
    )
    list_parser.add_argument(
        "--load",
        help="State file (.config) to load before listing",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "render":
        return render_command(args)
    elif args.command == "defconfig":
        return defconfig_command(args)
    elif args.command == "olddefconfig":
        return olddefconfig_command(args)
    elif args.command == "list":
        return list_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
