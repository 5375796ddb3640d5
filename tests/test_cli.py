"""
tests/test_cli.py
Tests for the extmodel command-line interface (extmodel.cli).

cli_main always terminates through sys.exit, so every call is wrapped in
pytest.raises(SystemExit) and the exit code is checked.
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict, List

import pytest
import yaml

from extmodel.cli import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    cli_main,
)


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(argv)
    return exc_info.value.code


def _write_yaml(path: pathlib.Path, data: Dict[str, Any]) -> pathlib.Path:
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False)
    return path


class TestCliRender:
    """Successful renders."""

    def test_stdout(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["-m", str(example_yaml_path)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith('Ext.define("MyApp.model.User", {\n')
        assert out.endswith("});\n")

    def test_format_override(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["-m", str(example_yaml_path), "-f", "extjs5"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "validators: {" in out
        assert "calculate: function(data)" in out

    def test_indent_override(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["-m", str(example_yaml_path), "--indent", "4"]) == EXIT_SUCCESS
        assert '\n    extend: "Ext.data.Model",\n' in capsys.readouterr().out

    def test_debug_flag_enables_pretty_output(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write_yaml(tmp_path / "a.yaml", {"model": {"name": "A"}})

        assert _run(["-m", str(path)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == 'Ext.define("A",{extend:"Ext.data.Model"});\n'

        assert _run(["-m", str(path), "--debug"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == (
            'Ext.define("A", {\n  extend: "Ext.data.Model"\n});\n'
        )

    def test_output_file(
        self,
        example_yaml_path: pathlib.Path,
        tmp_path: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        target = tmp_path / "app" / "model" / "User.js"
        assert _run(["-m", str(example_yaml_path), "-o", str(target), "-q"]) == EXIT_SUCCESS
        assert target.exists()
        content = target.read_text(encoding="utf-8")
        assert content.startswith('Ext.define("MyApp.model.User"')
        assert content.endswith("\n")
        assert capsys.readouterr().out == ""

    def test_verbose_logs_to_stderr(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["-m", str(example_yaml_path), "-v"]) == EXIT_SUCCESS
        assert "Rendered" in capsys.readouterr().err


class TestCliErrors:
    """Exit codes for failures."""

    def test_missing_model_file(self, tmp_path: pathlib.Path) -> None:
        assert _run(["-m", str(tmp_path / "nope.yaml")]) == EXIT_INPUT_ERROR

    def test_model_argument_required(self) -> None:
        assert _run([]) == 2

    def test_unknown_format_choice(self, example_yaml_path: pathlib.Path) -> None:
        assert _run(["-m", str(example_yaml_path), "-f", "extjs6"]) == 2

    def test_invalid_document(self, tmp_path: pathlib.Path) -> None:
        path = _write_yaml(tmp_path / "bad.yaml", {"model": {"readMethod": "nodot"}})
        assert _run(["-m", str(path)]) == EXIT_INPUT_ERROR

    def test_invalid_indent(self, example_yaml_path: pathlib.Path) -> None:
        assert _run(["-m", str(example_yaml_path), "--indent", "0"]) == EXIT_INPUT_ERROR

    def test_unrenderable_model(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write_yaml(
            tmp_path / "bad.yaml",
            {
                "model": {
                    "name": "A",
                    "fields": [
                        {"name": "n", "type": "int", "defaultValue": 1, "allowNull": True}
                    ],
                }
            },
        )
        assert _run(["-m", str(path)]) == EXIT_CONFIGURATION_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot render" in captured.err

    def test_unsupported_feature_for_format(self, tmp_path: pathlib.Path) -> None:
        path = _write_yaml(
            tmp_path / "range.yaml",
            {"model": {"name": "A", "validations": [{"type": "range", "field": "n", "max": 3}]}},
        )
        assert _run(["-m", str(path), "-f", "extjs4"]) == EXIT_CONFIGURATION_ERROR
        assert _run(["-m", str(path), "-f", "extjs5"]) == EXIT_SUCCESS
