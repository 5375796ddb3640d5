"""
tests/conftest.py
Shared fixtures for the extmodel test suite.

Models are built in memory; file-based tests write into pytest's
``tmp_path`` directories.
"""

from __future__ import annotations

import copy
import logging
import pathlib
from typing import Any, Dict

import pytest
import yaml

from extmodel.models import FieldDefinition, ModelDefinition


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
EXAMPLE_MODEL_PATH: pathlib.Path = ROOT_DIR / "examples" / "user.yaml"


@pytest.fixture(autouse=True)
def _reset_extmodel_logger():
    """The CLI installs its own handler and stops propagation; undo that."""
    yield
    pkg_logger = logging.getLogger("extmodel")
    pkg_logger.handlers.clear()
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_example_dict() -> Dict[str, Any]:
    """Load the reference examples/user.yaml once per session."""
    assert EXAMPLE_MODEL_PATH.exists(), (
        f"Reference model not found at {EXAMPLE_MODEL_PATH}."
    )
    with open(EXAMPLE_MODEL_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def example_dict(raw_example_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_example_dict)


@pytest.fixture()
def example_yaml_path(example_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "user.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(example_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


# ---------------------------------------------------------------------------
# In-memory model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def item_model() -> ModelDefinition:
    """Read-only model: int id plus a nullable label."""
    return ModelDefinition(
        name="MyApp.model.Item",
        id_property="id",
        read_method="items.list",
        fields=[
            FieldDefinition(name="id", type="int"),
            FieldDefinition(name="label", type="string", allow_null=True),
        ],
    )


@pytest.fixture()
def crud_model() -> ModelDefinition:
    """Model with all four CRUD methods, reader settings and a writer."""
    return ModelDefinition(
        name="MyApp.model.Order",
        id_property="orderId",
        read_method="orderService.read",
        create_method="orderService.create",
        update_method="orderService.update",
        destroy_method="orderService.destroy",
        message_property="msg",
        success_property="ok",
        total_property="count",
        writer="json",
        fields=[
            FieldDefinition(name="orderId", type="int"),
            FieldDefinition(name="customer", type="string", default_value="anonymous"),
            FieldDefinition(name="total", type="float", default_value=0),
            FieldDefinition(name="paid", type="boolean", default_value=False),
            FieldDefinition(name="note"),
        ],
    )
