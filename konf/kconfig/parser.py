"""Recursive-descent parser building the menu tree and variable table.

Grammar handled here::

    block   := { mainmenu STRING
               | menu STRING block endmenu
               | config NAME [TYPE [STRING]] [default VALUE]
               | source STRING }
    VALUE   := y | n | NUMBER | STRING

The type and default clauses of a ``config`` may appear in either order, each
at most once. ``source`` parses the named file (relative to the including
file's directory) and merges its variables into the table being built; the
sourced file's menus are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from konf.config.schema import KonfSettings
from konf.utils.path_utils import resolve_source_path

from .errors import KconfigSyntaxError, SourceCycleError
from .model import Entry, KConfig, Menu, SubMenu, Variable, VariableRef
from .tokens import Token, TokenKind, TokenStream
from .values import Value, parse_literal

logger = logging.getLogger("konf.kconfig.parser")

INVALID_MAINMENU = "invalid option to mainmenu"
INVALID_MENU = "invalid option to menu"
INVALID_CONFIG_NAME = "invalid name for config"
MISSING_DEFAULT = "missing argument for default"
INVALID_DEFAULT = "invalid default for config"
INVALID_SOURCE = "invalid argument to source"
INVALID_TOP_LEVEL = "invalid top-level token"
INVALID_TOKEN = "invalid token"
UNBALANCED_ENDMENU = "unbalanced endmenu"
MISSING_ENDMENU = "missing endmenu"


@dataclass
class ParseContext:
    """State shared by every block parsed from one file.

    Attributes:
        kconfig: KConfig under construction; its ``vars`` is the shared table.
        path: File being parsed, or None for text without a file.
        chain: Files currently being parsed, outermost first.
        main_name: Display name from the last ``mainmenu`` seen.
    """

    kconfig: KConfig
    path: Optional[Path]
    chain: List[Path] = field(default_factory=list)
    main_name: Optional[str] = None

    def error(self, category: str, token: Optional[Token] = None) -> KconfigSyntaxError:
        return KconfigSyntaxError(category, path=self.path, line=token.line if token else None)


class KconfigParser:
    """Parses Kconfig files into KConfig models.

    Args:
        settings: Tool settings; defaults are used when omitted.
    """

    def __init__(self, settings: Optional[KonfSettings] = None):
        self.settings = settings or KonfSettings()

    def parse_file(self, path: Union[str, Path]) -> KConfig:
        """Parse a Kconfig file and everything it sources.

        Raises:
            KconfigSyntaxError: On the first grammar violation.
            OSError: If the file or a sourced file cannot be read.
        """
        resolved = Path(path).resolve()
        return self._parse_file(resolved, [resolved])

    def parse_text(self, text: str, path: Optional[Union[str, Path]] = None) -> KConfig:
        """Parse Kconfig source text.

        Args:
            text: Source text.
            path: File the text came from; ``source`` directives resolve
                against its directory, or the working directory when omitted.
        """
        resolved = Path(path).resolve() if path is not None else None
        return self._parse(text, resolved, [resolved] if resolved else [])

    def _parse_file(self, path: Path, chain: List[Path]) -> KConfig:
        logger.debug("Parsing %s", path)
        text = path.read_text(encoding=self.settings.encoding)
        return self._parse(text, path, chain)

    def _parse(self, text: str, path: Optional[Path], chain: List[Path]) -> KConfig:
        kconfig = KConfig(name=self.settings.default_name)
        ctx = ParseContext(kconfig=kconfig, path=path, chain=chain)
        stream = TokenStream.from_text(text)
        kconfig.root = self.parse_menu_block("", stream, ctx)
        if ctx.main_name is not None:
            kconfig.name = ctx.main_name
        return kconfig

    def parse_menu_block(
        self,
        label: str,
        stream: TokenStream,
        ctx: ParseContext,
        depth: int = 0,
        opened_by: Optional[Token] = None,
    ) -> Menu:
        """Parse entries up to the matching ``endmenu`` (or end of input at depth 0).

        Args:
            label: Name of the menu being built.
            stream: Token source, positioned after the ``menu STRING`` header.
            ctx: Shared parse state.
            depth: Nesting depth; 0 for the file's root block.
            opened_by: The ``menu`` token that opened this block.

        Returns:
            The finished, immutable Menu.
        """
        entries: List[Entry] = []
        while True:
            token = stream.next()
            if token is None:
                if depth > 0:
                    raise ctx.error(MISSING_ENDMENU, opened_by)
                break

            kind = token.kind
            if kind is TokenKind.ENDMENU:
                if depth == 0:
                    raise ctx.error(UNBALANCED_ENDMENU, token)
                break
            if kind is TokenKind.MAINMENU:
                arg = stream.accept(TokenKind.STRING)
                if arg is None:
                    raise ctx.error(INVALID_MAINMENU, token)
                ctx.main_name = arg.value
            elif kind is TokenKind.MENU:
                arg = stream.accept(TokenKind.STRING)
                if arg is None:
                    raise ctx.error(INVALID_MENU, token)
                menu = self.parse_menu_block(arg.value, stream, ctx, depth + 1, token)
                entries.append(SubMenu(menu))
            elif kind is TokenKind.CONFIG:
                var = self._parse_config(token, stream, ctx)
                ctx.kconfig.add_variable(var)
                entries.append(VariableRef(var.name))
            elif kind is TokenKind.SOURCE:
                self._parse_source(token, stream, ctx)
            elif kind is TokenKind.ERROR:
                raise ctx.error(INVALID_TOKEN, token)
            else:
                raise ctx.error(INVALID_TOP_LEVEL, token)

        return Menu(label, tuple(entries))

    def _parse_config(self, keyword: Token, stream: TokenStream, ctx: ParseContext) -> Variable:
        name = stream.accept(TokenKind.NAME)
        if name is None:
            raise ctx.error(INVALID_CONFIG_NAME, keyword)
        var = Variable(name=name.value)

        seen_type = False
        seen_default = False
        while True:
            if not seen_type:
                ty = stream.accept(TokenKind.TYPE)
                if ty is not None:
                    seen_type = True
                    var.ty = ty.value
                    desc = stream.accept(TokenKind.STRING)
                    if desc is not None:
                        var.desc = desc.value
                    continue
            if not seen_default:
                default = stream.accept(TokenKind.DEFAULT)
                if default is not None:
                    seen_default = True
                    var.default = self._parse_default_value(default, stream, ctx)
                    continue
            break

        if var.ty is not None and var.default is not None and not var.accepts(var.default):
            raise ctx.error(INVALID_DEFAULT, name)
        return var

    def _parse_default_value(self, keyword: Token, stream: TokenStream, ctx: ParseContext) -> Value:
        if stream.accept(TokenKind.YES):
            return Value.of_bool(True)
        if stream.accept(TokenKind.NO):
            return Value.of_bool(False)
        string = stream.accept(TokenKind.STRING)
        if string is not None:
            return Value.of_string(string.value)
        number = stream.accept(TokenKind.NUMBER)
        if number is not None:
            value = parse_literal(number.value)
            if value is None:
                raise ctx.error(INVALID_DEFAULT, number)
            return value
        raise ctx.error(MISSING_DEFAULT, keyword)

    def _parse_source(self, keyword: Token, stream: TokenStream, ctx: ParseContext) -> None:
        arg = stream.accept(TokenKind.STRING)
        if arg is None:
            raise ctx.error(INVALID_SOURCE, keyword)

        target = resolve_source_path(arg.value, ctx.path)
        if target in ctx.chain and self.settings.detect_source_cycles:
            raise SourceCycleError(ctx.chain + [target], path=ctx.path, line=keyword.line)

        logger.debug("%s:%d: sourcing %s", ctx.path, keyword.line, target)
        sourced = self._parse_file(target, ctx.chain + [target])
        ctx.kconfig.source(sourced)


def parse_file(path: Union[str, Path], settings: Optional[KonfSettings] = None) -> KConfig:
    """Parse a Kconfig file with the given settings."""
    return KconfigParser(settings).parse_file(path)


def parse_text(
    text: str,
    path: Optional[Union[str, Path]] = None,
    settings: Optional[KonfSettings] = None,
) -> KConfig:
    """Parse Kconfig source text with the given settings."""
    return KconfigParser(settings).parse_text(text, path)


__all__ = [
    "KconfigParser",
    "ParseContext",
    "parse_file",
    "parse_text",
]
