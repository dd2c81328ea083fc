"""Settings schema using Pydantic for validation.

Settings tune how Kconfig files are read and how state files and rendered
sources are written. Invalid values are rejected at load time with a
``pydantic.ValidationError``.
"""

import codecs
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

DEFAULT_NAME = "configuration"


class KonfSettings(BaseModel):
    """Top-level tool settings.

    Attributes:
        default_name: Display name used when no ``mainmenu`` is present.
        encoding: Text encoding for Kconfig, state and rendered files.
        indent: Renderer indentation width in spaces per nesting level.
        config_prefix: Name prefix used in persisted state files.
        detect_source_cycles: Reject ``source`` chains that re-enter a file
            still being parsed.
    """

    default_name: str = DEFAULT_NAME
    encoding: str = "utf-8"
    indent: int = Field(default=4, ge=1, le=16)
    config_prefix: str = "CONFIG_"
    detect_source_cycles: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("config_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefix must be a non-empty upper-case identifier fragment."""
        if not v:
            raise ValueError("config_prefix must not be empty")
        if not all(c.isupper() or c.isdigit() or c == "_" for c in v):
            raise ValueError(f"Invalid config_prefix '{v}': use A-Z, 0-9 and '_'")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Encoding must be known to the codecs registry."""
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding '{v}'") from exc
        return v

    @property
    def indent_unit(self) -> str:
        return " " * self.indent

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KonfSettings":
        """Create settings from a dictionary.

        Raises:
            ValidationError: If settings are invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
