"""In-memory model of a parsed Kconfig tree.

The menu tree and the variable table are kept apart: menus hold
``VariableRef`` entries that name a variable, and the owning ``KConfig`` maps
names to ``Variable`` objects. Lookups happen when the tree is walked, so a
reference whose variable is gone is simply skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from konf.config.schema import DEFAULT_NAME

from .codec import CONFIG_PREFIX, decode_line, encode_line
from .values import Type, Value

logger = logging.getLogger("konf.kconfig.model")


@dataclass
class Variable:
    """A config item.

    Attributes:
        name: Identifier, unique within a KConfig.
        ty: Declared type, if any.
        desc: Prompt text from the type clause, if any.
        value: Current value, set by ``load_defaults``/``load_config``.
        default: Default value declared in the source.
    """

    name: str
    ty: Optional[Type] = None
    desc: Optional[str] = None
    value: Optional[Value] = None
    default: Optional[Value] = None

    def accepts(self, value: Value) -> bool:
        """Return True if the value's variant matches the declared type."""
        return self.ty is None or value.ty is self.ty


@dataclass(frozen=True)
class VariableRef:
    """Menu entry naming a variable in the KConfig's table."""

    name: str


@dataclass(frozen=True)
class SubMenu:
    """Menu entry holding a nested menu."""

    menu: "Menu"


Entry = Union[VariableRef, SubMenu]


@dataclass(frozen=True)
class Menu:
    """A named group of entries. Frozen once its block has been parsed."""

    name: str
    entries: Tuple[Entry, ...] = ()

    def submenus(self) -> Tuple["Menu", ...]:
        return tuple(e.menu for e in self.entries if isinstance(e, SubMenu))

    def variable_names(self) -> Tuple[str, ...]:
        """Names referenced directly by this menu (not by nested menus)."""
        return tuple(e.name for e in self.entries if isinstance(e, VariableRef))


@dataclass
class KConfig:
    """Parsed configuration: display name, menu tree and variable table."""

    name: str = DEFAULT_NAME
    root: Menu = field(default_factory=lambda: Menu(""))
    vars: Dict[str, Variable] = field(default_factory=dict)

    def source(self, other: "KConfig") -> None:
        """Merge another KConfig's variables into this one.

        Variables from ``other`` replace same-named ones. The menu tree of
        ``other`` is not merged.
        """
        self.vars.update(other.vars)

    def add_variable(self, var: Variable) -> None:
        """Insert or replace a variable by name without adding a menu entry."""
        self.vars[var.name] = var

    def snapshot_values(self) -> Dict[str, Optional[Value]]:
        """Return the current value of every variable, in table order."""
        return {name: var.value for name, var in self.vars.items()}

    def load_defaults(self) -> None:
        """Set every variable's current value to its declared default."""
        for var in self.vars.values():
            var.value = var.default

    def write_config(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        prefix: str = CONFIG_PREFIX,
    ) -> None:
        """Write the persisted state file, one line per variable.

        The target is created or truncated. I/O errors propagate.
        """
        path = Path(path)
        with path.open("w", encoding=encoding) as handle:
            for name, var in self.vars.items():
                handle.write(encode_line(name, var.value, prefix=prefix))
                handle.write("\n")
        logger.info("Wrote %d settings to %s", len(self.vars), path)

    def load_config(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        prefix: str = CONFIG_PREFIX,
    ) -> int:
        """Overlay current values from a persisted state file.

        Lines that do not decode are skipped. Settings for unknown names are
        ignored. A typed variable only takes a value of its own type, except
        that ``n`` clears the value of a non-bool variable.

        Returns:
            Number of settings applied.
        """
        path = Path(path)
        types = {name: var.ty for name, var in self.vars.items()}
        applied = 0
        with path.open("r", encoding=encoding) as handle:
            for lineno, line in enumerate(handle, start=1):
                decoded = decode_line(line, types, prefix=prefix)
                if decoded is None:
                    if line.strip() and not line.lstrip().startswith("#"):
                        logger.debug("%s:%d: skipping undecodable line", path, lineno)
                    continue
                name, value = decoded
                var = self.vars.get(name)
                if var is None:
                    logger.debug("%s:%d: ignoring unknown symbol %s", path, lineno, name)
                    continue
                if not var.accepts(value):
                    if value == Value.of_bool(False):
                        var.value = None
                        applied += 1
                        continue
                    logger.warning(
                        "%s:%d: %s expects %s, ignoring value %s",
                        path,
                        lineno,
                        name,
                        var.ty.keyword,
                        value,
                    )
                    continue
                var.value = value
                applied += 1
        logger.debug("Applied %d settings from %s", applied, path)
        return applied

    def render(self, indent: str = "    ") -> str:
        """Render the KConfig back to Kconfig source text."""
        from .render import render

        return render(self, indent=indent)

    def __str__(self) -> str:
        return self.render()


__all__ = [
    "DEFAULT_NAME",
    "Entry",
    "KConfig",
    "Menu",
    "SubMenu",
    "Variable",
    "VariableRef",
]
