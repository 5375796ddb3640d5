# File: extmodel/associations.py
"""
extmodel - Association Serializer
==================================
Renders has-many / belongs-to / has-one descriptors.

Ext JS 4 and Sencha Touch 2 take one ``associations`` list with a
``type`` key per entry; Ext JS 5 takes ``hasMany`` / ``belongsTo`` /
``hasOne`` class members.  When no association name is given it is derived
from the related class name:

    hasMany   "MyApp.model.OrderItem"  →  "orderItems"
    belongsTo "MyApp.model.Customer"   →  "customer"
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Union

from extmodel.dialects import DialectProfile
from extmodel.exceptions import ConfigurationError
from extmodel.models import (
    DEFAULT_ID_PROPERTY,
    AssociationRule,
    BelongsToAssociation,
    HasManyAssociation,
    HasOneAssociation,
)
from extmodel.utils import short_class_name, to_camel_case, to_plural

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.associations")

_KIND_NAMES: Dict[str, str] = {
    "has_many": "hasMany",
    "belongs_to": "belongsTo",
    "has_one": "hasOne",
}


def association_name(rule: AssociationRule) -> str:
    """The override when set, otherwise the name derived from ``model``."""
    if rule.name:
        return rule.name
    base: str = to_camel_case(short_class_name(rule.model))
    if isinstance(rule, HasManyAssociation):
        return to_plural(base)
    return base


def association_node(
    rule: AssociationRule, profile: DialectProfile, *, include_type: bool = True
) -> Dict[str, Any]:
    """Build one association entry."""
    kind: Optional[str] = _KIND_NAMES.get(getattr(rule, "type", ""))
    if kind is None:
        raise ConfigurationError(
            f"Unknown association variant '{getattr(rule, 'type', type(rule).__name__)}'.",
            {"model": getattr(rule, "model", None)},
        )

    node: Dict[str, Any] = {}
    if include_type:
        node["type"] = kind
    node["model"] = rule.model
    node["name"] = association_name(rule)
    if rule.foreign_key is not None:
        node["foreignKey"] = rule.foreign_key
    if rule.primary_key is not None and rule.primary_key != DEFAULT_ID_PROPERTY:
        node["primaryKey"] = rule.primary_key
    if rule.association_key is not None:
        node["associationKey"] = rule.association_key

    if isinstance(rule, HasManyAssociation):
        if rule.auto_load:
            node["autoLoad"] = True
    elif isinstance(rule, (BelongsToAssociation, HasOneAssociation)):
        if rule.getter_name is not None:
            node["getterName"] = rule.getter_name
        if rule.setter_name is not None:
            node["setterName"] = rule.setter_name

    return node


def serialize_associations(
    rules: Sequence[AssociationRule],
    profile: DialectProfile,
    known_fields: Optional[FrozenSet[str]] = None,
) -> Union[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
    """
    Render *rules* in input order.

    Returns a flat list, or a kind → entries mapping (kinds in first-seen
    order) when the output format declares associations per kind.
    """
    if known_fields is not None:
        # hasMany foreign keys live on the related model
        for rule in rules:
            if isinstance(rule, HasManyAssociation) or rule.foreign_key is None:
                continue
            if rule.foreign_key not in known_fields:
                logger.debug(
                    "Association to '%s' uses foreign key '%s' which is not a "
                    "field of this model; emitting as-is.",
                    rule.model,
                    rule.foreign_key,
                )

    if not profile.associations_by_kind:
        return [association_node(r, profile) for r in rules]

    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for rule in rules:
        entry: Dict[str, Any] = association_node(rule, profile, include_type=False)
        grouped.setdefault(_KIND_NAMES[rule.type], []).append(entry)
    return grouped


__all__: List[str] = [
    "association_name",
    "association_node",
    "serialize_associations",
]
