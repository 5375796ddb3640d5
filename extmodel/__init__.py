# File: extmodel/__init__.py
"""
extmodel - Ext JS / Sencha Touch Model Class Generator
=======================================================

Translates a server-side description of a data entity (fields, defaults,
validations, associations, CRUD method bindings) into the JavaScript
source of a client-side ``Ext.data.Model`` class for Ext JS 4, Sencha
Touch 2 or Ext JS 5.

Architecture overview::

    ┌──────────────┐     ┌──────────────────┐     ┌──────────────┐
    │  CLI / Entry │────▶│  ModelTranslator │────▶│  JS literal  │
    │   (cli.py)   │     │ (translator.py)  │     │  (utils.py)  │
    └──────┬───────┘     └────────┬─────────┘     └──────────────┘
           │          ┌───────────┼────────────┬─────────────┐
           ▼          ▼           ▼            ▼             ▼
     ┌──────────┐ ┌──────────┐ ┌───────────┐ ┌────────────┐ ┌───────┐
     │  loader  │ │fieldtypes│ │validations│ │associations│ │ proxy │
     └──────────┘ └──────────┘ └───────────┘ └────────────┘ └───────┘

Usage::

    # As a library
    from extmodel import FieldDefinition, ModelDefinition, render
    model = ModelDefinition(name="MyApp.model.Item", readMethod="items.list")
    model.add_field(FieldDefinition(name="id", type="int"))
    print(render(model, "touch2"))

    # From the command line
    python -m extmodel --model item.yaml --format extjs5 --debug
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from extmodel.dialects import DialectProfile, get_profile
from extmodel.exceptions import (
    ConfigurationError,
    ExtModelError,
    MissingArgumentError,
    UnsupportedFeatureError,
)
from extmodel.loader import load_model_file, parse_raw_model
from extmodel.models import (
    BelongsToAssociation,
    CustomValidation,
    EmailValidation,
    ExclusionValidation,
    FieldDefinition,
    FieldType,
    FormatValidation,
    HasManyAssociation,
    HasOneAssociation,
    InclusionValidation,
    LengthValidation,
    ModelDefinition,
    OutputFormat,
    PresenceValidation,
    RangeValidation,
    RenderConfig,
)
from extmodel.translator import ModelTranslator, render

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    "__version__",
    "__license__",
    # Core
    "ModelTranslator",
    "render",
    "DialectProfile",
    "get_profile",
    # Models
    "FieldType",
    "OutputFormat",
    "FieldDefinition",
    "PresenceValidation",
    "LengthValidation",
    "RangeValidation",
    "FormatValidation",
    "InclusionValidation",
    "ExclusionValidation",
    "EmailValidation",
    "CustomValidation",
    "HasManyAssociation",
    "BelongsToAssociation",
    "HasOneAssociation",
    "ModelDefinition",
    "RenderConfig",
    # Errors
    "ExtModelError",
    "ConfigurationError",
    "UnsupportedFeatureError",
    "MissingArgumentError",
    # Loading
    "load_model_file",
    "parse_raw_model",
]
