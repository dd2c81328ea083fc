"""Tests for konf CLI entrypoints."""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

import konf.main as main
from konf.cli.defconfig import defconfig_command, olddefconfig_command
from konf.cli.listing import list_command
from konf.cli.render import render_command

KCONFIG = """mainmenu "Board"

config NET
    bool "Networking"
    default y

menu "Drivers"
config USB
    bool "USB support"
    default n
config CLOCK
    hex "Clock base"
    default 0x100
endmenu
"""


@pytest.fixture
def kconfig_file(tmp_path: Path) -> Path:
    path = tmp_path / "Kconfig"
    path.write_text(KCONFIG, encoding="utf-8")
    return path


def _console() -> Console:
    return Console(record=True, width=200, color_system=None, soft_wrap=True)


def test_main_dispatches_render_command(monkeypatch: pytest.MonkeyPatch, kconfig_file: Path) -> None:
    """Verify that `main` parses args and dispatches render_command."""
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    captured: dict[str, object] = {}

    def fake_render_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "render_command", fake_render_command)
    monkeypatch.setattr(sys, "argv", ["konf", "render", str(kconfig_file), "--defaults"])

    assert main.main() == 0
    parsed = captured["args"]
    assert parsed.kconfig == str(kconfig_file)
    assert parsed.defaults is True
    assert parsed.load is None


def test_main_defaults_kconfig_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    captured: dict[str, object] = {}
    monkeypatch.setattr(main, "defconfig_command", lambda args: captured.setdefault("args", args) and 0)
    monkeypatch.setattr(sys, "argv", ["konf", "defconfig"])

    assert main.main() == 0
    assert captured["args"].kconfig == "Kconfig"
    assert captured["args"].output == ".config"


def test_main_without_command_prints_help(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["konf"])
    assert main.main() == 1


def test_render_command_prints_tree(kconfig_file: Path) -> None:
    console = _console()
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, defaults=True, load=None)

    assert render_command(args, console=console) == 0

    output = console.export_text()
    assert output.startswith('mainmenu "Board"\n\nconfig NET\n')
    assert '    # current y\nmenu "Drivers"\n    config USB\n' in output
    assert "        default 0x100\n        # current 0x100\n" in output


def test_render_command_reports_syntax_error(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    bad = tmp_path / "Kconfig"
    bad.write_text("config\n", encoding="utf-8")
    args = SimpleNamespace(kconfig=str(bad), config=None, defaults=False, load=None)

    assert render_command(args, console=_console()) == 1
    assert "failed to parse" in caplog.text
    assert "invalid name for config" in caplog.text


def test_render_command_missing_file(tmp_path: Path) -> None:
    args = SimpleNamespace(kconfig=str(tmp_path / "nope"), config=None, defaults=False, load=None)
    assert render_command(args, console=_console()) == 1


def test_defconfig_command_writes_defaults(kconfig_file: Path, tmp_path: Path) -> None:
    out = tmp_path / ".config"
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, output=str(out))

    assert defconfig_command(args) == 0
    assert out.read_text(encoding="utf-8").splitlines() == [
        "CONFIG_NET=y",
        "# CONFIG_USB is not set",
        "CONFIG_CLOCK=0x100",
    ]


def test_defconfig_command_honours_settings(kconfig_file: Path, tmp_path: Path) -> None:
    out = tmp_path / ".config"
    args = SimpleNamespace(
        kconfig=str(kconfig_file),
        config='{"config_prefix": "BR2_"}',
        output=str(out),
    )

    assert defconfig_command(args) == 0
    assert out.read_text(encoding="utf-8").splitlines()[0] == "BR2_NET=y"


def test_olddefconfig_keeps_existing_choices(kconfig_file: Path, tmp_path: Path) -> None:
    state = tmp_path / ".config"
    state.write_text("# CONFIG_NET is not set\nCONFIG_USB=y\nCONFIG_REMOVED=y\n", encoding="utf-8")
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, input=None, output=str(state))

    assert olddefconfig_command(args) == 0
    assert state.read_text(encoding="utf-8").splitlines() == [
        "# CONFIG_NET is not set",
        "CONFIG_USB=y",
        "CONFIG_CLOCK=0x100",
    ]


def test_olddefconfig_without_input_uses_defaults(kconfig_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "fresh.config"
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, input=None, output=str(out))

    assert olddefconfig_command(args) == 0
    assert out.read_text(encoding="utf-8").splitlines()[0] == "CONFIG_NET=y"


def test_list_command_shows_table(kconfig_file: Path, tmp_path: Path) -> None:
    state = tmp_path / ".config"
    state.write_text("CONFIG_USB=y\n", encoding="utf-8")
    console = _console()
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, defaults=True, load=str(state))

    assert list_command(args, console=console) == 0

    output = console.export_text()
    assert "Board" in output
    for expected in ("NET", "USB", "CLOCK", "0x100", "Networking", "USB support"):
        assert expected in output


def test_render_command_reports_undecodable_state(
    kconfig_file: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    state = tmp_path / ".config"
    state.write_bytes(b"CONFIG_NET=y\n\xff\xfe garbage\n")
    console = _console()
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, defaults=False, load=str(state))

    assert render_command(args, console=console) == 1
    assert "failed to load" in caplog.text
    assert console.export_text() == ""


def test_list_command_reports_undecodable_state(kconfig_file: Path, tmp_path: Path) -> None:
    state = tmp_path / ".config"
    state.write_bytes(b"\xff\n")
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, defaults=True, load=str(state))

    assert list_command(args, console=_console()) == 1


def test_olddefconfig_reports_undecodable_input(
    kconfig_file: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    state = tmp_path / "old.config"
    state.write_bytes(b"\xff\n")
    out = tmp_path / "new.config"
    args = SimpleNamespace(kconfig=str(kconfig_file), config=None, input=str(state), output=str(out))

    assert olddefconfig_command(args) == 1
    assert "failed to update" in caplog.text
    assert not out.exists()
