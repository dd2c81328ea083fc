"""Render a KConfig back to Kconfig source syntax."""

from __future__ import annotations

from typing import List

from .model import KConfig, Menu, SubMenu, Variable, VariableRef
from .values import quote


def _render_variable(var: Variable, pad: str, inner: str, out: List[str]) -> None:
    out.append(f"{pad}config {var.name}")
    if var.ty is not None:
        if var.desc is not None:
            out.append(f"{inner}{var.ty.keyword} {quote(var.desc)}")
        else:
            out.append(f"{inner}{var.ty.keyword}")
    if var.default is not None:
        out.append(f"{inner}default {var.default}")
    if var.value is not None:
        out.append(f"{inner}# current {var.value}")


def _render_menu(kconfig: KConfig, menu: Menu, depth: int, indent: str, out: List[str]) -> None:
    pad = indent * depth
    inner = indent * (depth + 1)
    for entry in menu.entries:
        if isinstance(entry, SubMenu):
            out.append(f"{pad}menu {quote(entry.menu.name)}")
            _render_menu(kconfig, entry.menu, depth + 1, indent, out)
            out.append(f"{pad}endmenu")
        elif isinstance(entry, VariableRef):
            var = kconfig.vars.get(entry.name)
            if var is None:
                continue
            _render_variable(var, pad, inner, out)


def render(kconfig: KConfig, indent: str = "    ") -> str:
    """Render the menu tree and variable table as Kconfig source.

    The root menu is not wrapped; every nested menu is emitted as a
    ``menu``/``endmenu`` pair. Entries whose variable is missing from the
    table are skipped.

    Args:
        kconfig: Model to render.
        indent: Indentation unit applied once per nesting level.

    Returns:
        Source text ending with a newline.
    """
    out = [f"mainmenu {quote(kconfig.name)}", ""]
    _render_menu(kconfig, kconfig.root, 0, indent, out)
    return "\n".join(out) + "\n"


__all__ = ["render"]
