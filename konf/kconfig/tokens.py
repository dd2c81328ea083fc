"""Tokenizer for Kconfig source text.

Splits source text into classified tokens. Keywords carry no payload; names,
strings, numbers and type keywords carry their decoded value. Whitespace and
``#`` comments produce no tokens. Input that matches no token rule produces a
single ``ERROR`` token and ends the stream, so the parser can never silently
skip unrecognized text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Union

from .values import Type, unescape


class TokenKind(Enum):
    MAINMENU = auto()
    SOURCE = auto()
    MENU = auto()
    ENDMENU = auto()
    CONFIG = auto()
    DEFAULT = auto()
    YES = auto()
    NO = auto()
    EQUALS = auto()
    NAME = auto()
    STRING = auto()
    TYPE = auto()
    NUMBER = auto()
    ERROR = auto()


KEYWORDS = {
    "mainmenu": TokenKind.MAINMENU,
    "source": TokenKind.SOURCE,
    "menu": TokenKind.MENU,
    "endmenu": TokenKind.ENDMENU,
    "config": TokenKind.CONFIG,
    "default": TokenKind.DEFAULT,
    "y": TokenKind.YES,
    "n": TokenKind.NO,
}


TOKEN_RE = re.compile(
    r"""
    (?P<skip>[ \t\r\n\f]+|\#[^\n]*)     # whitespace and line comments
    |"(?P<string>(?:\\.|[^"\\\n])*)"    # double-quoted string with escapes
    |(?P<number>0[xX][0-9a-fA-F]+|-?[0-9]+)
    |(?P<name>[A-Z_][A-Z0-9_]*)         # config identifier
    |(?P<word>[a-z]+)                   # keyword, y/n or type keyword
    |(?P<equals>=)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    """A classified token.

    Attributes:
        kind: Token classification.
        value: Decoded payload: the identifier for NAME, the unquoted text for
            STRING, the literal text for NUMBER, the Type for TYPE, and the
            offending text for ERROR. None for keywords.
        line: 1-based line number where the token starts.
    """

    kind: TokenKind
    value: Union[str, Type, None] = None
    line: int = 0

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.name.lower()
        if isinstance(self.value, Type):
            return self.value.keyword
        return str(self.value)


def tokenize(text: str) -> Iterator[Token]:
    """Yield tokens for the given source text.

    Args:
        text: Complete Kconfig source text.

    Yields:
        Tokens in source order. After an ERROR token nothing more is yielded.
    """
    pos = 0
    line = 1
    end = len(text)
    while pos < end:
        match = TOKEN_RE.match(text, pos)
        if match is None:
            bad = re.match(r"\S+", text[pos:])
            yield Token(TokenKind.ERROR, bad.group(0) if bad else text[pos], line)
            return

        kind = match.lastgroup
        lexeme = match.group(0)
        if kind == "string":
            yield Token(TokenKind.STRING, unescape(match.group("string")), line)
        elif kind == "number":
            yield Token(TokenKind.NUMBER, lexeme, line)
        elif kind == "name":
            yield Token(TokenKind.NAME, lexeme, line)
        elif kind == "equals":
            yield Token(TokenKind.EQUALS, None, line)
        elif kind == "word":
            keyword = KEYWORDS.get(lexeme)
            ty = Type.from_keyword(lexeme)
            if keyword is not None:
                yield Token(keyword, None, line)
            elif ty is not None:
                yield Token(TokenKind.TYPE, ty, line)
            else:
                yield Token(TokenKind.ERROR, lexeme, line)
                return

        line += lexeme.count("\n")
        pos = match.end()


class TokenStream:
    """Token iterator with one token of lookahead."""

    def __init__(self, tokens: Iterator[Token]):
        self._tokens = tokens
        self._lookahead: Optional[Token] = None

    @classmethod
    def from_text(cls, text: str) -> "TokenStream":
        return cls(tokenize(text))

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it, or None at the end."""
        if self._lookahead is None:
            self._lookahead = next(self._tokens, None)
        return self._lookahead

    def next(self) -> Optional[Token]:
        """Consume and return the next token, or None at the end."""
        token = self.peek()
        self._lookahead = None
        return token

    def accept(self, kind: TokenKind) -> Optional[Token]:
        """Consume the next token only if it is of the given kind."""
        token = self.peek()
        if token is not None and token.kind is kind:
            self._lookahead = None
            return token
        return None

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token is None:
                return
            yield token


def collect(text: str) -> List[Token]:
    """Tokenize text into a list; convenient for inspection and tests."""
    return list(tokenize(text))


__all__ = ["KEYWORDS", "TOKEN_RE", "Token", "TokenKind", "TokenStream", "collect", "tokenize"]
