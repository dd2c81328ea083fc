"""Line codec for persisted configuration state (``.config`` files).

Every line carries at most one setting, in one of two shapes::

    # CONFIG_FOO is not set
    CONFIG_FOO=<value>

Lines of any other shape decode to nothing and are skipped by the loader.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional, Tuple

from .values import Type, Value, parse_literal

CONFIG_PREFIX = "CONFIG_"

_NOT_SET_RE = re.compile(r"#\s*(?P<name>\S+)\s+is not set")
_ASSIGN_RE = re.compile(r"(?P<name>[^\s=#]+)=(?P<value>.*)")


def _strip_prefix(name: str, prefix: str) -> Optional[str]:
    if not name.startswith(prefix) or len(name) == len(prefix):
        return None
    return name[len(prefix):]


def decode_line(
    line: str,
    types: Optional[Mapping[str, Optional[Type]]] = None,
    prefix: str = CONFIG_PREFIX,
) -> Optional[Tuple[str, Value]]:
    """Decode one persisted-state line.

    Args:
        line: Raw line; surrounding whitespace is ignored.
        types: Optional mapping of variable name to declared type. A declared
            ``string`` type lets the value be read verbatim instead of through
            the literal grammar.
        prefix: Name prefix every setting carries (``CONFIG_``).

    Returns:
        ``(name, value)`` with the prefix removed, or None when the line is
        blank, a plain comment, malformed, or carries an unparseable value.
    """
    text = line.strip()
    if not text:
        return None

    match = _NOT_SET_RE.fullmatch(text)
    if match:
        name = _strip_prefix(match.group("name"), prefix)
        if name is None:
            return None
        return name, Value.of_bool(False)

    match = _ASSIGN_RE.fullmatch(text)
    if match is None:
        return None
    name = _strip_prefix(match.group("name"), prefix)
    if name is None:
        return None
    ty = types.get(name) if types is not None else None
    value = parse_literal(match.group("value").strip(), ty)
    if value is None:
        return None
    return name, value


def encode_line(name: str, value: Optional[Value], prefix: str = CONFIG_PREFIX) -> str:
    """Encode a variable's current value as one persisted-state line.

    Absent values and ``n`` are written in the "is not set" form.
    """
    if value is None or value == Value.of_bool(False):
        return f"# {prefix}{name} is not set"
    return f"{prefix}{name}={value.render()}"


__all__ = ["CONFIG_PREFIX", "decode_line", "encode_line"]
