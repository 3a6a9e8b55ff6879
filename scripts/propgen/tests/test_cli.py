"""
Tests for cli/cli.py

Validates:
- Output to a file and to stdout
- --write-if-changed keeps an up-to-date file untouched
- --check-only reports stale or missing output
- Invariant violations exit 1 without writing output
"""

import os

import pytest

from propgen.cli.cli import main


YAML_DOC = """\
definitions:
  Target:
    - name: EnableSyntheticTypes
      type: Boolean
      default_unsigned_value: 1
      description: "Enable synthetic."
"""


@pytest.fixture
def input_path(tmp_path):
    path = tmp_path / "Properties.yaml"
    path.write_text(YAML_DOC, encoding="utf-8")
    return path


def run_cli(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


def test_defs_to_file(input_path, tmp_path):
    output = tmp_path / "out" / "Properties.inc"
    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "-q") == 0

    text = output.read_text(encoding="utf-8")
    assert "|* From: Properties.yaml" in text
    assert (
        '  {"EnableSyntheticTypes", OptionValue::eTypeBoolean, false, 1, nullptr, {}, '
        '"Enable synthetic."},'
    ) in text


def test_enum_to_stdout(input_path, capsys):
    assert run_cli("--gen-lldb-property-enum-defs", str(input_path), "-q") == 0
    captured = capsys.readouterr()
    assert "#ifdef LLDB_PROPERTIES_Target\nePropertyEnableSyntheticTypes,\n" in captured.out
    assert captured.err == ""


def test_action_is_required(input_path):
    assert run_cli(str(input_path)) == 2


def test_write_if_changed_keeps_mtime(input_path, tmp_path):
    output = tmp_path / "PropertiesEnum.inc"
    assert run_cli("--gen-lldb-property-enum-defs", str(input_path), "-o", str(output)) == 0
    os.utime(output, (1_000_000, 1_000_000))

    assert run_cli(
        "--gen-lldb-property-enum-defs", str(input_path), "-o", str(output), "--write-if-changed"
    ) == 0
    assert output.stat().st_mtime == 1_000_000


def test_check_only(input_path, tmp_path, capsys):
    output = tmp_path / "Properties.inc"
    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "--check-only") == 1
    assert "does not exist" in capsys.readouterr().err

    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "-q") == 0
    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "--check-only") == 0

    output.write_text("stale\n", encoding="utf-8")
    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "--check-only") == 1
    assert "differs" in capsys.readouterr().err


def test_check_only_needs_output(input_path, capsys):
    assert run_cli("--gen-lldb-property-defs", str(input_path), "--check-only") == 1
    assert "needs an output file" in capsys.readouterr().err


def test_missing_default_fails_without_output(tmp_path, capsys):
    path = tmp_path / "Broken.yaml"
    path.write_text("definitions:\n  Target:\n    - {name: Broken, type: Boolean}\n", encoding="utf-8")
    output = tmp_path / "Properties.inc"

    assert run_cli("--gen-lldb-property-defs", str(path), "-o", str(output)) == 1
    assert not output.exists()
    assert "ERROR: Broken: Property must have a default value" in capsys.readouterr().err


def test_config_file_applies(input_path, tmp_path, capsys):
    config = tmp_path / "propgen.yaml"
    config.write_text("generator:\n  enum_prefix: eSetting\n", encoding="utf-8")
    assert run_cli("--gen-lldb-property-enum-defs", str(input_path), "--config", str(config), "-q") == 0
    assert "eSettingEnableSyntheticTypes," in capsys.readouterr().out


def test_undecodable_input_exits_1(tmp_path, capsys):
    path = tmp_path / "Properties.yaml"
    path.write_bytes(b"properties:\n  - {name: \xff, type: Boolean}\n")
    assert run_cli("--gen-lldb-property-defs", str(path), "-q") == 1
    assert "ERROR:" in capsys.readouterr().err


def test_unreadable_config_exits_1(input_path, tmp_path, capsys):
    assert run_cli("--gen-lldb-property-defs", str(input_path), "--config", str(tmp_path), "-q") == 1
    assert "cannot read config" in capsys.readouterr().err


def test_undecodable_output_counts_as_stale(input_path, tmp_path, capsys):
    output = tmp_path / "Properties.inc"
    output.write_bytes(b"\xff\xfe stale\n")
    assert run_cli("--gen-lldb-property-defs", str(input_path), "-o", str(output), "--check-only") == 1
    assert "differs" in capsys.readouterr().err

    assert run_cli(
        "--gen-lldb-property-defs", str(input_path), "-o", str(output), "--write-if-changed", "-q"
    ) == 0
    assert "g_Target_properties" in output.read_text(encoding="utf-8")
