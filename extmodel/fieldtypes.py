# File: extmodel/fieldtypes.py
"""
extmodel - Field Type Mapper
=============================
Maps an abstract ``FieldType`` to the output format's type token, renders
default values as literals, and builds complete field entries.

A field entry carries only the keys whose values differ from the
framework defaults.  When nothing but the name is left, the entry
collapses to a bare name string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from extmodel.dialects import DialectProfile
from extmodel.exceptions import ConfigurationError, UnsupportedFeatureError
from extmodel.models import FieldDefinition, FieldType
from extmodel.utils import JsCode, js_function, js_scalar

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.fieldtypes")

_TYPE_TOKENS: Dict[FieldType, str] = {
    FieldType.INT: "int",
    FieldType.FLOAT: "float",
    FieldType.STRING: "string",
    FieldType.BOOLEAN: "boolean",
    FieldType.DATE: "date",
}


@dataclass(frozen=True, slots=True)
class TypeMapping:
    """Result of ``map_type``: the type token and the rendered default."""

    type_token: Optional[str]
    default: Optional[JsCode]


def _default_matches(field_type: FieldType, value: Any) -> bool:
    if field_type == FieldType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type == FieldType.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if field_type == FieldType.STRING:
        return isinstance(value, str)
    if field_type == FieldType.BOOLEAN:
        return isinstance(value, bool)
    return field_type == FieldType.AUTO


def map_type(field: FieldDefinition, profile: DialectProfile) -> TypeMapping:
    """
    Return the type token and rendered default for *field*.

    Raises:
        ConfigurationError: If a date field has a default, if a default is
            combined with ``allow_null``, or if the default does not match
            the field type.
    """
    field_type: FieldType = FieldType(field.type)

    if field_type == FieldType.AUTO:
        token: Optional[str] = None if profile.infers_untyped else profile.untyped_token
    else:
        token = _TYPE_TOKENS[field_type]

    if field.default_value is None:
        return TypeMapping(token, None)

    ctx: Dict[str, Any] = {"field": field.name, "default": field.default_value}
    if field_type == FieldType.DATE:
        raise ConfigurationError("Date fields cannot carry a default value.", ctx)
    if field.allow_null:
        raise ConfigurationError(
            "A field cannot allow null and declare a default value.", ctx
        )
    if not _default_matches(field_type, field.default_value):
        raise ConfigurationError(
            f"Default value does not match field type '{field_type.value}'.", ctx
        )

    return TypeMapping(token, JsCode(js_scalar(field.default_value)))


def field_node(field: FieldDefinition, profile: DialectProfile) -> Union[str, Dict[str, Any]]:
    """
    Build the field entry for *field*: a bare name or an ordered object
    holding only non-default keys.
    """
    mapping: TypeMapping = map_type(field, profile)
    ctx: Dict[str, Any] = {"field": field.name}

    if field.convert is not None and field.persist is not False:
        raise ConfigurationError(
            "A computed field must set persist to false.", ctx
        )
    if field.critical is not None and not profile.supports_critical:
        raise UnsupportedFeatureError(
            f"Field option 'critical' is not supported by {profile.name}.", ctx
        )
    if field.date_format is not None and FieldType(field.type) != FieldType.DATE:
        logger.debug(
            "Field '%s' has dateFormat but type '%s'; emitting as given.",
            field.name,
            field.type,
        )

    node: Dict[str, Any] = {"name": field.name}
    if mapping.type_token is not None:
        node["type"] = mapping.type_token
    if mapping.default is not None:
        node["defaultValue"] = mapping.default
    if field.allow_null:
        node[profile.null_key] = True
    if field.date_format is not None:
        node["dateFormat"] = field.date_format
    if field.mapping is not None:
        node["mapping"] = field.mapping
    if field.persist is False:
        node["persist"] = False
    if field.convert is not None:
        node[profile.compute_key] = js_function(profile.compute_params, field.convert)
    if field.critical:
        node["critical"] = True

    if profile.collapse_simple_fields and len(node) == 1:
        return field.name
    return node


def serialize_fields(fields: List[FieldDefinition], profile: DialectProfile) -> List[Any]:
    """Field entries in insertion order."""
    return [field_node(f, profile) for f in fields]


__all__: List[str] = [
    "TypeMapping",
    "map_type",
    "field_node",
    "serialize_fields",
]
