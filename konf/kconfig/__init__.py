"""Kconfig parsing package.

This package contains the building blocks of the Kconfig toolchain:
- tokens: tokenizer and one-token-lookahead stream
- values: variable types and typed literals
- model: variables, menus and the KConfig aggregate
- parser: recursive-descent parser resolving ``source`` includes
- codec: persisted-state (``.config``) line codec
- render: pretty-printer back to Kconfig syntax
"""

from .codec import CONFIG_PREFIX, decode_line, encode_line
from .errors import KconfigError, KconfigSyntaxError, SourceCycleError
from .model import DEFAULT_NAME, Entry, KConfig, Menu, SubMenu, Variable, VariableRef
from .parser import KconfigParser, parse_file, parse_text
from .render import render
from .values import Type, Value, parse_literal

__all__ = [
    "CONFIG_PREFIX",
    "DEFAULT_NAME",
    "Entry",
    "KConfig",
    "KconfigError",
    "KconfigParser",
    "KconfigSyntaxError",
    "Menu",
    "SourceCycleError",
    "SubMenu",
    "Type",
    "Value",
    "Variable",
    "VariableRef",
    "decode_line",
    "encode_line",
    "parse_file",
    "parse_literal",
    "parse_text",
    "render",
]
