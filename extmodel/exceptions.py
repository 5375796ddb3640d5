# File: extmodel/exceptions.py
"""
Error types raised while translating a model definition.

Every failure in the translation core is synchronous and is reported
before any output text is handed back to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ExtModelError(Exception):
    """Base exception for all extmodel errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message: str = message
        self.context: Dict[str, Any] = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            details: str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({details})"
        return self.message


class ConfigurationError(ExtModelError, ValueError):
    """
    Raised when the model graph is structurally invalid for rendering.

    Examples:
    - A date field carrying a default value
    - ``allow_null`` together with a default value
    - A default literal that does not match the field type
    - An unknown output format name
    """


class UnsupportedFeatureError(ConfigurationError):
    """
    Raised when the requested output format cannot express a feature
    present in the model (e.g. a range validator for Ext JS 4).
    """


class MissingArgumentError(ExtModelError, TypeError):
    """Raised when a required argument (model, output format) is absent."""


__all__: List[str] = [
    "ExtModelError",
    "ConfigurationError",
    "UnsupportedFeatureError",
    "MissingArgumentError",
]
