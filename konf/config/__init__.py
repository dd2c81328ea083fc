"""Settings schema and loading for konf."""

from .schema import KonfSettings
from .loader import load_settings

__all__ = [
    "KonfSettings",
    "load_settings",
]
