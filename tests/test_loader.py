"""
tests/test_loader.py
Tests for extmodel.loader: reading JSON/YAML model documents and parsing
them into a ModelDefinition plus RenderConfig.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any, Dict

import pytest

from extmodel.loader import load_model_file, parse_raw_model
from extmodel.models import HasManyAssociation, LengthValidation


class TestParseRawModel:
    """Document structure → validated models."""

    def test_reference_document(self, example_dict: Dict[str, Any]) -> None:
        model, config = parse_raw_model(example_dict)
        assert model.name == "MyApp.model.User"
        assert model.paging is True
        assert model.read_method == "userService.read"
        assert model.field_names[-3:] == ["firstName", "lastName", "fullName"]
        assert model.get_field("fullName").persist is False
        assert model.get_field("active").default_value is True
        assert isinstance(model.validations[2], LengthValidation)
        assert isinstance(model.associations[0], HasManyAssociation)
        assert config.output_format == "extjs4"
        assert config.debug is True

    def test_field_shorthand(self) -> None:
        model, _ = parse_raw_model({"model": {"fields": ["a", {"name": "b", "type": "int"}]}})
        assert model.field_names == ["a", "b"]
        assert model.get_field("a").type == "auto"

    def test_document_without_model_key(self) -> None:
        model, config = parse_raw_model(
            {"name": "A", "fields": ["x"], "config": {"format": "touch2"}}
        )
        assert model.name == "A"
        assert config.output_format == "touch2"

    def test_alternate_keys(self) -> None:
        model, config = parse_raw_model(
            {"model_definition": {"name": "A"}, "render_config": {"debug": True}}
        )
        assert model.name == "A"
        assert config.debug is True

    def test_missing_config_uses_defaults(self) -> None:
        _, config = parse_raw_model({"model": {"name": "A"}})
        assert config.output_format == "extjs4"
        assert config.debug is False

    def test_empty_config_section(self) -> None:
        _, config = parse_raw_model({"model": {"name": "A"}, "config": None})
        assert config.indent_size == 2

    def test_model_must_be_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_raw_model({"model": ["a"]})

    def test_invalid_model(self) -> None:
        with pytest.raises(ValueError, match="Model validation failed"):
            parse_raw_model({"model": {"readMethod": "notAReference"}})

    def test_invalid_config(self) -> None:
        with pytest.raises(ValueError, match="Config validation failed"):
            parse_raw_model({"model": {}, "config": {"format": "extjs6"}})


class TestLoadModelFile:
    """File reading and format dispatch."""

    def test_yaml(self, example_yaml_path: pathlib.Path) -> None:
        data = load_model_file(example_yaml_path)
        assert data["model"]["name"] == "MyApp.model.User"

    def test_json(self, example_dict: Dict[str, Any], tmp_path: pathlib.Path) -> None:
        path = tmp_path / "user.json"
        path.write_text(json.dumps(example_dict), encoding="utf-8")
        assert load_model_file(path) == example_dict

    def test_unknown_extension_falls_back_to_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "user.model"
        path.write_text("model:\n  name: A\n", encoding="utf-8")
        assert load_model_file(path) == {"model": {"name": "A"}}

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_model_file(tmp_path / "nope.yaml")

    def test_directory_rejected(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(ValueError):
            load_model_file(tmp_path)

    def test_invalid_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_model_file(path)

    def test_invalid_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("model: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_model_file(path)

    def test_top_level_must_be_mapping(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_model_file(path)
