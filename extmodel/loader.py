# File: extmodel/loader.py
"""
extmodel - Model Document Loader
=================================
Reads a model description from a JSON or YAML document and parses it into
a ``ModelDefinition`` plus a ``RenderConfig``.

Expected document layout::

    model:
      name: MyApp.model.User
      idProperty: id
      readMethod: userService.read
      fields:
        - {name: id, type: int}
        - name
      validations:
        - {type: presence, field: name}
    config:
      format: touch2
      debug: true

A bare field name in ``fields`` is shorthand for ``{name: <name>}``.
When there is no ``model`` key the whole document is taken as the model.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from extmodel.models import ModelDefinition, RenderConfig

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.loader")

_MODEL_KEYS: Tuple[str, ...] = ("model", "model_definition")
_CONFIG_KEYS: Tuple[str, ...] = ("config", "render_config")


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_model_file(path: Path) -> Dict[str, Any]:
    """
    Load a model document (JSON or YAML), dispatching on the extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Model path is not a file: {path}")

    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)

    logger.info("Unknown extension '%s' - trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except ValueError:
        return _load_yaml_file(path)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _expand_field_shorthand(model_data: Dict[str, Any]) -> Dict[str, Any]:
    fields: Any = model_data.get("fields")
    if not isinstance(fields, list):
        return model_data
    expanded: List[Any] = [{"name": f} if isinstance(f, str) else f for f in fields]
    return {**model_data, "fields": expanded}


def parse_raw_model(raw: Dict[str, Any]) -> Tuple[ModelDefinition, RenderConfig]:
    """
    Parse a raw dictionary into a validated ``ModelDefinition`` and
    ``RenderConfig``.

    Raises:
        ValueError: If the structure is wrong or validation fails.
    """
    model_data: Optional[Dict[str, Any]] = None
    for key in _MODEL_KEYS:
        if key in raw:
            if not isinstance(raw[key], dict):
                raise ValueError(f"'{key}' must be a mapping.")
            model_data = raw[key]
            break

    config_data: Optional[Dict[str, Any]] = None
    config_key: Optional[str] = None
    for key in _CONFIG_KEYS:
        if key in raw:
            config_key = key
            config_data = raw[key] or {}
            break

    if model_data is None:
        model_data = {k: v for k, v in raw.items() if k != config_key}

    if config_data is None:
        logger.info("No render config found in input - using defaults.")
        config_data = {}

    try:
        model: ModelDefinition = ModelDefinition.model_validate(
            _expand_field_shorthand(model_data)
        )
    except ValidationError as exc:
        raise ValueError(f"Model validation failed: {exc}") from exc

    try:
        config: RenderConfig = RenderConfig.model_validate(config_data)
    except ValidationError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc

    logger.debug(
        "Parsed model '%s': %d fields, format=%s.",
        model.name,
        len(model.fields),
        config.output_format,
    )
    return model, config


__all__: List[str] = [
    "load_model_file",
    "parse_raw_model",
]
