"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from konf.config import KonfSettings, load_settings
from konf.kconfig import KConfig, KconfigError, parse_file

logger = logging.getLogger("konf.cli.common")

# Failures a command reports and turns into exit code 1.
COMMAND_ERRORS = (KconfigError, OSError, ValidationError, ValueError, TypeError)


def load_command_settings(args) -> KonfSettings:
    """Load settings named by the global ``-c/--config`` option."""
    return load_settings(getattr(args, "config", None))


def load_kconfig(args) -> Tuple[KConfig, KonfSettings]:
    """Parse the Kconfig file named by ``args.kconfig``.

    Raises:
        KconfigError: On a syntax error.
        OSError: If the file or a sourced file cannot be read.
    """
    settings = load_command_settings(args)
    path = Path(args.kconfig)
    logger.debug("Parsing Kconfig: %s", path)
    return parse_file(path, settings), settings


def apply_state(
    kconfig: KConfig,
    settings: KonfSettings,
    defaults: bool = False,
    state_path: Optional[str] = None,
) -> None:
    """Load defaults and/or an existing state file into the KConfig."""
    if defaults:
        kconfig.load_defaults()
    if state_path:
        kconfig.load_config(state_path, encoding=settings.encoding, prefix=settings.config_prefix)
