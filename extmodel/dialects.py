# File: extmodel/dialects.py
"""
extmodel - Output Format Profiles
==================================
Each supported framework generation is described by one immutable
``DialectProfile``: a key-name table plus feature-support flags.  The
serializers and the translator read these values; there is no renderer
class per framework.

    ============  ===========  ==============  ===================
    format        root key     null key        validations
    ============  ===========  ==============  ===================
    extjs4        root         useNull         validations: [...]
    touch2        rootProperty allowNull       config.validations
    extjs5        rootProperty allowNull       validators: {...}
    ============  ===========  ==============  ===================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Tuple, Union

from extmodel.exceptions import ConfigurationError, MissingArgumentError
from extmodel.models import OutputFormat

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.dialects")

_ALL_VALIDATIONS: FrozenSet[str] = frozenset(
    {"presence", "length", "range", "format", "inclusion", "exclusion", "email", "custom"}
)


@dataclass(frozen=True, slots=True)
class DialectProfile:
    """Key names and feature flags for one output format."""

    output_format: OutputFormat
    base_class: str = "Ext.data.Model"

    # -- Class layout -------------------------------------------------------
    config_wrapped: bool = False
    fields_key: str = "fields"

    # -- Field entries ------------------------------------------------------
    infers_untyped: bool = True
    untyped_token: str = "auto"
    collapse_simple_fields: bool = True
    null_key: str = "allowNull"
    compute_key: str = "convert"
    compute_params: str = "v, record"
    supports_critical: bool = False

    # -- Validations --------------------------------------------------------
    validations_key: str = "validations"
    validations_by_field: bool = False
    supported_validations: FrozenSet[str] = _ALL_VALIDATIONS - {"range"}

    # -- Associations -------------------------------------------------------
    associations_key: str = "associations"
    associations_by_kind: bool = False

    # -- Proxy / reader -----------------------------------------------------
    proxy_type: str = "direct"
    root_key: str = "rootProperty"
    paging_params: Tuple[str, str, str] = ("pageParam", "startParam", "limitParam")
    default_paging_root: str = "records"
    # Uniform across the built-in formats; a new profile overrides them
    supports_writer: bool = True

    @property
    def name(self) -> str:
        return str(getattr(self.output_format, "value", self.output_format))

    def supports_validation(self, kind: str) -> bool:
        return kind in self.supported_validations


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

EXTJS4: DialectProfile = DialectProfile(
    output_format=OutputFormat.EXTJS4,
    null_key="useNull",
    compute_params="v, record",
    root_key="root",
)

TOUCH2: DialectProfile = DialectProfile(
    output_format=OutputFormat.TOUCH2,
    config_wrapped=True,
    compute_params="value, record",
)

EXTJS5: DialectProfile = DialectProfile(
    output_format=OutputFormat.EXTJS5,
    compute_key="calculate",
    compute_params="data",
    supports_critical=True,
    validations_key="validators",
    validations_by_field=True,
    supported_validations=_ALL_VALIDATIONS,
    associations_by_kind=True,
)

_PROFILES: Dict[str, DialectProfile] = {
    OutputFormat.EXTJS4.value: EXTJS4,
    OutputFormat.TOUCH2.value: TOUCH2,
    OutputFormat.EXTJS5.value: EXTJS5,
}


def get_profile(output_format: Union[OutputFormat, str, DialectProfile]) -> DialectProfile:
    """
    Resolve an output format (enum member, its value, or a profile) to
    its ``DialectProfile``.

    Raises:
        MissingArgumentError: If *output_format* is None.
        ConfigurationError: If the name is not a supported format.
    """
    if output_format is None:
        raise MissingArgumentError("output format must not be None")
    if isinstance(output_format, DialectProfile):
        return output_format

    key: str = str(getattr(output_format, "value", output_format)).strip().lower()
    profile = _PROFILES.get(key)
    if profile is None:
        raise ConfigurationError(
            f"Unsupported output format '{output_format}'. "
            f"Available: {sorted(_PROFILES)}"
        )
    return profile


__all__: List[str] = [
    "DialectProfile",
    "EXTJS4",
    "TOUCH2",
    "EXTJS5",
    "get_profile",
]

logger.debug("extmodel.dialects loaded - %d profiles.", len(_PROFILES))
