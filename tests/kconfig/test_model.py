"""KConfig aggregate tests: merging, defaults and state files."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from konf.kconfig import KConfig, Type, Value, Variable, parse_text

SAMPLE = 'mainmenu "Sample"\n\nconfig FOO\n    bool "Enable foo"\n    default y\n'

BOOLS = """
config A
    bool "A"
    default y
config B
    bool "B"
    default n
config C
    bool "C"
config D
    bool "D"
    default y
"""


def _kconfig(*variables: Variable) -> KConfig:
    kconfig = KConfig()
    for var in variables:
        kconfig.add_variable(var)
    return kconfig


def test_load_defaults_copies_default_or_clears() -> None:
    kconfig = parse_text(BOOLS)
    kconfig.vars["C"].value = Value.of_bool(True)

    kconfig.load_defaults()

    for var in kconfig.vars.values():
        assert var.value == var.default
    assert kconfig.vars["C"].value is None


def test_sample_defaults_written(tmp_path: Path) -> None:
    kconfig = parse_text(SAMPLE)
    kconfig.load_defaults()
    assert kconfig.vars["FOO"].value == Value.of_bool(True)

    out = tmp_path / ".config"
    kconfig.write_config(out)

    assert out.read_text(encoding="utf-8") == "CONFIG_FOO=y\n"


def test_write_config_lines_in_table_order(tmp_path: Path) -> None:
    kconfig = parse_text(BOOLS)
    kconfig.load_defaults()
    out = tmp_path / ".config"

    kconfig.write_config(out)

    assert out.read_text(encoding="utf-8").splitlines() == [
        "CONFIG_A=y",
        "# CONFIG_B is not set",
        "# CONFIG_C is not set",
        "CONFIG_D=y",
    ]


def test_write_config_truncates_existing_file(tmp_path: Path) -> None:
    out = tmp_path / ".config"
    out.write_text("stale\n" * 10, encoding="utf-8")
    kconfig = parse_text("config ONLY\n")

    kconfig.write_config(out)

    assert out.read_text(encoding="utf-8") == "# CONFIG_ONLY is not set\n"


def test_write_config_io_error_propagates(tmp_path: Path) -> None:
    kconfig = parse_text("config A\n")
    with pytest.raises(OSError):
        kconfig.write_config(tmp_path / "missing-dir" / ".config")


def test_boolean_round_trip(tmp_path: Path) -> None:
    original = parse_text(BOOLS)
    original.load_defaults()
    original.vars["A"].value = Value.of_bool(False)
    original.vars["C"].value = Value.of_bool(True)
    out = tmp_path / ".config"
    original.write_config(out)

    fresh = parse_text(BOOLS)
    fresh.load_defaults()
    fresh.load_config(out)

    expected = {
        name: value if value is not None else Value.of_bool(False)
        for name, value in original.snapshot_values().items()
    }
    assert fresh.snapshot_values() == expected


def test_load_config_ignores_unknown_and_malformed(tmp_path: Path) -> None:
    state = tmp_path / ".config"
    state.write_text(
        "# generated\n"
        "\n"
        "CONFIG_A=n\n"
        "CONFIG_UNKNOWN=y\n"
        "CONFIG_B=definitely\n"
        "not a setting\n",
        encoding="utf-8",
    )
    kconfig = parse_text(BOOLS)
    kconfig.load_defaults()

    applied = kconfig.load_config(state)

    assert applied == 1
    assert "UNKNOWN" not in kconfig.vars
    assert kconfig.vars["A"].value == Value.of_bool(False)
    assert kconfig.vars["B"].value == Value.of_bool(False)


def test_load_config_typed_values(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    kconfig = parse_text(
        'config COUNT\n int "Count"\n default 4\n'
        'config BASE\n hex "Base"\n'
        'config LABEL\n string "Label"\n'
        'config FLAG\n bool "Flag"\n'
    )
    kconfig.load_defaults()
    state = tmp_path / ".config"
    state.write_text(
        "# CONFIG_COUNT is not set\n"
        "CONFIG_BASE=0x1000\n"
        "CONFIG_LABEL=my board\n"
        "CONFIG_FLAG=12\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="konf.kconfig.model"):
        kconfig.load_config(state)

    assert kconfig.vars["COUNT"].value is None
    assert kconfig.vars["BASE"].value == Value.of_hex(0x1000)
    assert kconfig.vars["LABEL"].value == Value.of_string("my board")
    assert kconfig.vars["FLAG"].value is None
    assert "FLAG expects bool" in caplog.text


def test_typed_values_round_trip(tmp_path: Path) -> None:
    text = (
        'config COUNT\n int "Count"\n default -7\n'
        'config BASE\n hex "Base"\n default 0xABC\n'
        'config LABEL\n string "Label"\n default "two words"\n'
    )
    original = parse_text(text)
    original.load_defaults()
    out = tmp_path / ".config"
    original.write_config(out)

    fresh = parse_text(text)
    fresh.load_config(out)

    assert fresh.snapshot_values() == original.snapshot_values()


def test_quoted_string_value_round_trips(tmp_path: Path) -> None:
    text = 'config S\n string "S"\n default "\\"x\\""\n'
    original = parse_text(text)
    original.load_defaults()
    assert original.vars["S"].value == Value.of_string('"x"')
    out = tmp_path / ".config"
    original.write_config(out)
    assert out.read_text(encoding="utf-8") == 'CONFIG_S="x"\n'

    fresh = parse_text(text)
    fresh.load_config(out)

    assert fresh.vars["S"].value == Value.of_string('"x"')


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    kconfig = parse_text("config A\n")
    with pytest.raises(FileNotFoundError):
        kconfig.load_config(tmp_path / "nope")


def test_source_merge_disjoint_is_union() -> None:
    left = _kconfig(Variable("A"), Variable("B"))
    right = _kconfig(Variable("C"))

    left.source(right)

    assert list(left.vars) == ["A", "B", "C"]


@pytest.mark.parametrize("first, second", [("x", "y"), ("y", "x")])
def test_source_merge_last_wins(first: str, second: str) -> None:
    tables = {
        "x": _kconfig(Variable("SHARED", ty=Type.BOOL, desc="x")),
        "y": _kconfig(Variable("SHARED", ty=Type.INT, desc="y")),
    }
    target = KConfig()

    target.source(tables[first])
    target.source(tables[second])

    assert target.vars["SHARED"].desc == second


def test_source_does_not_touch_menu_tree() -> None:
    target = parse_text('menu "Keep"\nendmenu\n')
    other = parse_text('menu "Drop"\nconfig X\nendmenu\n')

    target.source(other)

    assert [m.name for m in target.root.submenus()] == ["Keep"]
    assert "X" in target.vars


def test_add_variable_has_no_menu_entry() -> None:
    kconfig = parse_text("config A\n")
    kconfig.add_variable(Variable("HIDDEN", ty=Type.BOOL))

    assert "HIDDEN" in kconfig.vars
    assert kconfig.root.variable_names() == ("A",)
    assert "HIDDEN" not in kconfig.render()


def test_snapshot_values_is_ordered_copy() -> None:
    kconfig = parse_text(BOOLS)
    kconfig.load_defaults()

    snapshot = kconfig.snapshot_values()
    kconfig.vars["A"].value = None

    assert list(snapshot) == ["A", "B", "C", "D"]
    assert snapshot["A"] == Value.of_bool(True)
