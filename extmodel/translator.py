# File: extmodel/translator.py
"""
extmodel - Model Definition Translator
=======================================
Turns a ``ModelDefinition`` into the JavaScript class definition for one
output format.

This module is the orchestrator of the core: it calls the field type
mapper, the validation and association serializers and the proxy builder,
assembles their nodes in a fixed order and serialises the result:

    extend → idProperty → fields → validations → associations → proxy

**Contract:**
    - Rendering is a pure function of (model, format, layout settings);
      the same input always yields byte-identical text.
    - The model is never mutated.
    - Every error is raised before any text is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Union

from extmodel.associations import serialize_associations
from extmodel.dialects import DialectProfile, get_profile
from extmodel.exceptions import MissingArgumentError
from extmodel.fieldtypes import serialize_fields
from extmodel.models import DEFAULT_ID_PROPERTY, ModelDefinition, OutputFormat, RenderConfig
from extmodel.proxy import build_proxy
from extmodel.utils import js_string, to_js
from extmodel.validations import serialize_validations

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.translator")


class ModelTranslator:
    """
    Stateless translation engine for one output format.

    Thread-safe: no mutable instance state; one translator may render any
    number of models concurrently.
    """

    def __init__(self, config: RenderConfig) -> None:
        if config is None:
            raise MissingArgumentError("render config must not be None")
        self._config: RenderConfig = config
        self._profile: DialectProfile = get_profile(config.output_format)
        self._indent_size: Optional[int] = config.indent_size if config.debug else None
        logger.debug(
            "ModelTranslator initialised (format=%s, debug=%s).",
            self._profile.name,
            config.debug,
        )

    @property
    def profile(self) -> DialectProfile:
        return self._profile

    # ===================================================================
    # Node assembly
    # ===================================================================

    def build_members(self, model: ModelDefinition) -> Dict[str, Any]:
        """
        Class members in emission order, without ``extend`` and without
        the Touch 2 ``config`` wrapper.
        """
        profile: DialectProfile = self._profile
        known: FrozenSet[str] = frozenset(model.field_names)
        members: Dict[str, Any] = {}

        if model.id_property and model.id_property != DEFAULT_ID_PROPERTY:
            members["idProperty"] = model.id_property

        if model.fields:
            members[profile.fields_key] = serialize_fields(model.fields, profile)

        if model.validations:
            members[profile.validations_key] = serialize_validations(
                model.validations, profile, known
            )

        if model.associations:
            rendered = serialize_associations(model.associations, profile, known)
            if isinstance(rendered, dict):
                members.update(rendered)
            else:
                members[profile.associations_key] = rendered

        proxy: Optional[Dict[str, Any]] = build_proxy(model, profile)
        if proxy is not None:
            members["proxy"] = proxy

        return members

    def build_class_body(self, model: ModelDefinition) -> Dict[str, Any]:
        """The object literal passed to ``Ext.define`` (or rendered alone)."""
        if model is None:
            raise MissingArgumentError("model must not be None")

        members: Dict[str, Any] = self.build_members(model)
        body: Dict[str, Any] = {}
        if model.name:
            body["extend"] = self._profile.base_class
        if self._profile.config_wrapped:
            if members:
                body["config"] = members
        else:
            body.update(members)
        return body

    # ===================================================================
    # Text output
    # ===================================================================

    def render(self, model: ModelDefinition) -> str:
        """
        Render *model* as JavaScript source.

        Named models are wrapped in ``Ext.define("<name>", {...});``; a
        model without a name renders as the bare class body object.
        """
        body: Dict[str, Any] = self.build_class_body(model)
        body_js: str = to_js(body, self._indent_size)

        parts: List[str] = []
        if model.name:
            sep: str = ", " if self._indent_size is not None else ","
            parts.append(f"Ext.define({js_string(model.name)}{sep}")
            parts.append(body_js)
            parts.append(");")
        else:
            parts.append(body_js)

        content: str = "".join(parts)
        logger.debug(
            "Rendered model '%s' for %s: %d bytes.",
            model.name or "(anonymous)",
            self._profile.name,
            len(content),
        )
        return content


def render(
    model: ModelDefinition,
    output_format: Union[OutputFormat, str, DialectProfile],
    *,
    debug: bool = False,
    indent_size: int = 2,
) -> str:
    """
    Render *model* for *output_format*.

    Raises:
        MissingArgumentError: If *model* or *output_format* is None.
        ConfigurationError: If the model cannot be expressed (see
            ``extmodel.exceptions``).
    """
    if model is None:
        raise MissingArgumentError("model must not be None")
    if output_format is None:
        raise MissingArgumentError("output format must not be None")

    profile: DialectProfile = get_profile(output_format)
    config: RenderConfig = RenderConfig(
        output_format=profile.output_format, debug=debug, indent_size=indent_size
    )
    return ModelTranslator(config).render(model)


__all__: List[str] = [
    "ModelTranslator",
    "render",
]

logger.debug("extmodel.translator loaded.")
