"""Typed values of Kconfig variables.

A ``Value`` is a tagged union over the four variable types. The tag always
matches the payload: ``Bool`` holds a ``bool``, ``Int`` a signed 64-bit
integer, ``Hex`` an unsigned 64-bit integer and ``String`` text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
HEX_MAX = 2**64 - 1

HEX_LITERAL_RE = re.compile(r"0[xX][0-9a-fA-F]+")
INT_LITERAL_RE = re.compile(r"-?[0-9]+")
STRING_LITERAL_RE = re.compile(r'"((?:\\.|[^"\\])*)"')

_ESCAPE_RE = re.compile(r"\\(.)")


class Type(Enum):
    """Declared type of a config variable, keyed by its source keyword."""

    BOOL = "bool"
    INT = "int"
    HEX = "hex"
    STRING = "string"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["Type"]:
        """Map a type keyword to its Type, or None if it is not one."""
        try:
            return cls(keyword)
        except ValueError:
            return None

    @property
    def keyword(self) -> str:
        return self.value


Payload = Union[bool, int, str]


@dataclass(frozen=True)
class Value:
    """A typed literal.

    Use the ``of_*`` constructors; direct construction validates that the
    payload fits the tag and raises ``TypeError``/``ValueError`` otherwise.
    """

    ty: Type
    data: Payload

    def __post_init__(self) -> None:
        if self.ty is Type.BOOL:
            if not isinstance(self.data, bool):
                raise TypeError(f"bool value requires a bool payload, got {self.data!r}")
        elif self.ty is Type.INT:
            if isinstance(self.data, bool) or not isinstance(self.data, int):
                raise TypeError(f"int value requires an int payload, got {self.data!r}")
            if not INT_MIN <= self.data <= INT_MAX:
                raise ValueError(f"int value out of 64-bit range: {self.data}")
        elif self.ty is Type.HEX:
            if isinstance(self.data, bool) or not isinstance(self.data, int):
                raise TypeError(f"hex value requires an int payload, got {self.data!r}")
            if not 0 <= self.data <= HEX_MAX:
                raise ValueError(f"hex value out of unsigned 64-bit range: {self.data}")
        elif not isinstance(self.data, str):
            raise TypeError(f"string value requires a str payload, got {self.data!r}")

    @classmethod
    def of_bool(cls, flag: bool) -> "Value":
        return cls(Type.BOOL, flag)

    @classmethod
    def of_int(cls, number: int) -> "Value":
        return cls(Type.INT, number)

    @classmethod
    def of_hex(cls, number: int) -> "Value":
        return cls(Type.HEX, number)

    @classmethod
    def of_string(cls, text: str) -> "Value":
        return cls(Type.STRING, text)

    def render(self) -> str:
        """Render the value in its canonical persisted form.

        ``y``/``n`` for booleans, plain decimal for ints, ``0x`` followed by
        lowercase digits for hex, and strings verbatim.
        """
        if self.ty is Type.BOOL:
            return "y" if self.data else "n"
        if self.ty is Type.HEX:
            return f"0x{self.data:x}"
        return str(self.data)

    def __str__(self) -> str:
        return self.render()


def unescape(text: str) -> str:
    """Resolve backslash escapes inside a quoted string body."""
    return _ESCAPE_RE.sub(r"\1", text)


def quote(text: str) -> str:
    """Wrap text in double quotes, escaping backslashes and quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_literal(text: str, ty: Optional[Type] = None) -> Optional[Value]:
    """Parse a literal in the shared default/persisted-state grammar.

    Accepts ``y``, ``n``, decimal integers, ``0x`` hex integers and quoted
    strings. When ``ty`` is ``Type.STRING`` the text is taken verbatim,
    quotes included, since strings are persisted unquoted.

    Args:
        text: Literal text, already stripped of surrounding whitespace.
        ty: Declared type of the receiving variable, if known.

    Returns:
        The parsed Value, or None when the text is not a valid literal.
    """
    if ty is Type.STRING:
        return Value.of_string(text)

    if text == "y":
        return Value.of_bool(True)
    if text == "n":
        return Value.of_bool(False)
    try:
        if HEX_LITERAL_RE.fullmatch(text):
            return Value.of_hex(int(text, 16))
        if INT_LITERAL_RE.fullmatch(text):
            return Value.of_int(int(text, 10))
    except ValueError:
        # Out of range for the 64-bit payload
        return None
    match = STRING_LITERAL_RE.fullmatch(text)
    if match:
        return Value.of_string(unescape(match.group(1)))
    return None


__all__ = [
    "HEX_MAX",
    "INT_MAX",
    "INT_MIN",
    "Type",
    "Value",
    "parse_literal",
    "quote",
    "unescape",
]
