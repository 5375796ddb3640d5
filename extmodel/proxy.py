# File: extmodel/proxy.py
"""
extmodel - Proxy / Reader Builder
==================================
Derives the ``proxy`` block from the model's CRUD method bindings and
reader/writer settings.

Decision table for the method part:

    read only                     →  directFn: action.read
    anything else (at least one)  →  api: {read?, create?, update?, destroy?}
    nothing                       →  no proxy at all

Method references are written unquoted: they name the direct functions
the client calls, not strings.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from extmodel.dialects import DialectProfile
from extmodel.exceptions import UnsupportedFeatureError
from extmodel.models import ModelDefinition
from extmodel.utils import JS_UNDEFINED, JsCode

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.proxy")


def _crud_methods(model: ModelDefinition) -> List[Tuple[str, str]]:
    """(api key, reference) pairs for the methods that are set, in API order."""
    candidates: List[Tuple[str, Optional[str]]] = [
        ("read", model.read_method),
        ("create", model.create_method),
        ("update", model.update_method),
        ("destroy", model.destroy_method),
    ]
    return [(key, ref) for key, ref in candidates if ref]


def build_reader(model: ModelDefinition, profile: DialectProfile) -> Optional[Dict[str, Any]]:
    """
    Reader block, or None when every reader setting is at its default.

    An explicit ``root_property`` takes precedence over the root implied
    by ``paging``.
    """
    root: Optional[str] = model.root_property
    if root is None and model.paging:
        root = profile.default_paging_root

    reader: Dict[str, Any] = {}
    if model.message_property is not None:
        reader["messageProperty"] = model.message_property
    if model.total_property is not None:
        reader["totalProperty"] = model.total_property
    if root is not None:
        reader[profile.root_key] = root
    if model.success_property is not None:
        reader["successProperty"] = model.success_property

    return reader or None


def build_proxy(model: ModelDefinition, profile: DialectProfile) -> Optional[Dict[str, Any]]:
    """
    Build the proxy block for *model*.

    Returns None when no CRUD method is bound.

    Raises:
        UnsupportedFeatureError: If a writer is set for an output format
            without writer support.
    """
    methods: List[Tuple[str, str]] = _crud_methods(model)
    if not methods:
        if (
            model.paging
            or model.writer
            or model.root_property
            or model.message_property
            or model.success_property
            or model.total_property
            or model.disable_paging_parameters
        ):
            logger.warning(
                "Model '%s' has reader/writer settings but no CRUD methods; "
                "no proxy is generated.",
                model.name,
            )
        return None

    if model.writer is not None and not profile.supports_writer:
        raise UnsupportedFeatureError(
            f"Proxy writer is not supported by {profile.name}.",
            {"writer": model.writer},
        )

    proxy: Dict[str, Any] = {
        "type": profile.proxy_type,
        "idParam": model.resolved_id_property,
    }

    if model.disable_paging_parameters:
        for param in profile.paging_params:
            proxy[param] = JS_UNDEFINED

    reader: Optional[Dict[str, Any]] = build_reader(model, profile)
    if reader is not None:
        proxy["reader"] = reader

    if len(methods) == 1 and methods[0][0] == "read":
        proxy["directFn"] = JsCode(methods[0][1])
    else:
        proxy["api"] = {key: JsCode(ref) for key, ref in methods}

    if model.writer is not None:
        proxy["writer"] = model.writer

    logger.debug(
        "Proxy for '%s': %s form, reader=%s, writer=%s.",
        model.name,
        "directFn" if "directFn" in proxy else "api",
        reader is not None,
        model.writer is not None,
    )
    return proxy


__all__: List[str] = [
    "build_reader",
    "build_proxy",
]
