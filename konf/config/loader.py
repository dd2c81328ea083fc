"""Helpers for loading tool settings from TOML/JSON sources.

This module provides a single entry point `load_settings` that accepts
various settings sources:

* None -> default KonfSettings
* dict -> KonfSettings.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

TOML documents may hold the settings at the top level or under a ``[konf]``
table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from konf.config.schema import KonfSettings

logger = logging.getLogger("konf.config.loader")

SettingsSource = Union[str, Path, Dict[str, Any], None]


def _parse_toml(text: str) -> Dict[str, Any]:
    """Parse TOML text into a dict.

    Uses stdlib tomllib on Python 3.11+ and `tomli` on older interpreters.
    """
    try:
        import tomllib  # type: ignore[attr-defined]
    except ImportError:  # pragma: no cover - Python <3.11 path
        import tomli as tomllib  # type: ignore[import-not-found,no-redef]
    return tomllib.loads(text)


def load_settings(source: SettingsSource) -> KonfSettings:
    """Load KonfSettings from various settings sources.

    Args:
        source: One of:
            * None: returns default settings
            * dict: treated as already-parsed settings mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        KonfSettings instance.

    Raises:
        ValueError: If the document is not a mapping.
        TypeError: If the source type is unsupported.
        pydantic.ValidationError: If a setting is invalid.
    """
    if source is None:
        logger.debug("No settings source provided; using defaults")
        return KonfSettings()

    if isinstance(source, dict):
        logger.debug("Loading settings from provided dict")
        return KonfSettings.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        try:
            is_file = path.is_file()
        except OSError:
            # Inline documents can exceed the platform's file name limit
            is_file = False

        if is_file:
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                stripped = text.lstrip()
                fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading settings from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading settings from inline %s string", fmt)

        if fmt == "json":
            data = json.loads(text)
        else:
            data = _parse_toml(text)

        if not isinstance(data, dict):
            raise ValueError("Top-level settings must be a mapping/dict")

        if isinstance(data.get("konf"), dict):
            data = data["konf"]

        return KonfSettings.from_dict(data)

    raise TypeError(f"Unsupported settings source type: {type(source)!r}")


__all__ = ["SettingsSource", "load_settings"]
