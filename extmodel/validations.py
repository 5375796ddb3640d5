# File: extmodel/validations.py
"""
extmodel - Validation Serializer
=================================
Renders validation rules into the output format's validator syntax.

Input order is preserved: the client runs validators in the order they
are declared.  Ext JS 5 groups validators per field (fields in first-seen
order); the older formats use a flat list that names the field in every
entry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Union

from extmodel.dialects import DialectProfile
from extmodel.exceptions import ConfigurationError, UnsupportedFeatureError
from extmodel.models import (
    CustomValidation,
    ExclusionValidation,
    FormatValidation,
    InclusionValidation,
    LengthValidation,
    RangeValidation,
    ValidationRule,
)
from extmodel.utils import js_regex

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.validations")

_KNOWN_KINDS: FrozenSet[str] = frozenset(
    {"presence", "length", "range", "format", "inclusion", "exclusion", "email", "custom"}
)
_RESERVED_OPTION_KEYS: FrozenSet[str] = frozenset({"type", "field"})


def validation_node(
    rule: ValidationRule, profile: DialectProfile, *, include_field: bool = True
) -> Dict[str, Any]:
    """
    Build one validator entry.

    Raises:
        ConfigurationError: For an unknown rule variant or a custom rule
            whose options redefine ``type``/``field``.
        UnsupportedFeatureError: If the output format has no such validator.
    """
    kind: str = getattr(rule, "type", type(rule).__name__)
    ctx: Dict[str, Any] = {"field": getattr(rule, "field", None), "rule": kind}

    if kind not in _KNOWN_KINDS:
        raise ConfigurationError(f"Unknown validation variant '{kind}'.", ctx)
    if not profile.supports_validation(kind):
        raise UnsupportedFeatureError(
            f"Validation '{kind}' is not supported by {profile.name}.", ctx
        )

    node: Dict[str, Any] = {}
    if isinstance(rule, CustomValidation):
        node["type"] = rule.name
    else:
        node["type"] = kind
    if include_field:
        node["field"] = rule.field

    if isinstance(rule, (LengthValidation, RangeValidation)):
        if rule.min is not None:
            node["min"] = rule.min
        if rule.max is not None:
            node["max"] = rule.max
    elif isinstance(rule, FormatValidation):
        node["matcher"] = js_regex(rule.matcher)
    elif isinstance(rule, (InclusionValidation, ExclusionValidation)):
        node["list"] = list(rule.list)
    elif isinstance(rule, CustomValidation):
        clashes: List[str] = sorted(_RESERVED_OPTION_KEYS & set(rule.options))
        if clashes:
            raise ConfigurationError(
                f"Custom validation options may not redefine {clashes}.", ctx
            )
        node.update(rule.options)

    return node


def serialize_validations(
    rules: Sequence[ValidationRule],
    profile: DialectProfile,
    known_fields: Optional[FrozenSet[str]] = None,
) -> Union[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
    """
    Render *rules* for *profile*.

    Returns a list of entries, or a field → entries mapping when the
    output format groups validators by field.  Rules naming a field that
    is not in *known_fields* are emitted unchanged.
    """
    if known_fields is not None:
        for rule in rules:
            if rule.field not in known_fields:
                logger.debug(
                    "Validation '%s' references unknown field '%s'; emitting as-is.",
                    rule.type,
                    rule.field,
                )

    if not profile.validations_by_field:
        return [validation_node(r, profile) for r in rules]

    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for rule in rules:
        grouped.setdefault(rule.field, []).append(
            validation_node(rule, profile, include_field=False)
        )
    return grouped


__all__: List[str] = [
    "validation_node",
    "serialize_validations",
]
