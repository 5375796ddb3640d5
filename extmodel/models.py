# File: extmodel/models.py
"""
extmodel - Core Data Models
============================
Pydantic V2 models describing a data entity as the server sees it: its
fields, validation rules, associations, CRUD method bindings and reader
settings.  A populated ``ModelDefinition`` is the single input of the
translation pipeline:

    Model Loading → ModelDefinition → Translator → JavaScript text

The translator never mutates these objects; the ``add_*`` helpers exist
for the collaborator that builds the definition.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    computed_field,
    field_validator,
    model_validator,
)

from extmodel.exceptions import MissingArgumentError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("extmodel.models")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_ID_PROPERTY: str = "id"

# Direct function reference: "action.method" or "Namespace.action.method"
_METHOD_REF_RE: re.Pattern[str] = re.compile(
    r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)+$"
)

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FieldType(str, Enum):
    """Abstract field types understood by every output format."""

    AUTO = "auto"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    DATE = "date"


# Input spellings accepted in model documents
_FIELD_TYPE_ALIASES: Dict[str, str] = {
    "integer": "int",
    "long": "int",
    "decimal": "float",
    "number": "float",
    "double": "float",
    "text": "string",
    "str": "string",
    "bool": "boolean",
    "datetime": "date",
    "untyped": "auto",
}


class OutputFormat(str, Enum):
    """Target framework generations."""

    EXTJS4 = "extjs4"
    TOUCH2 = "touch2"
    EXTJS5 = "extjs5"


# ---------------------------------------------------------------------------
# Mixin: shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class FieldDefinition(BaseModel):
    """
    A single model field.

    ``None`` on any option means "framework default"; only options that
    differ from the default end up in the rendered output.
    """

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1, description="Field name.")
    type: FieldType = Field(default=FieldType.AUTO, description="Abstract field type.")
    default_value: Optional[Union[bool, int, float, str]] = Field(
        default=None,
        alias="defaultValue",
        description="Literal used when the payload carries no value.",
    )
    allow_null: Optional[bool] = Field(
        default=None,
        alias="allowNull",
        description="Field may hold null instead of a type default.",
    )
    date_format: Optional[str] = Field(
        default=None,
        alias="dateFormat",
        description="Date parse pattern, passed through verbatim.",
    )
    persist: Optional[bool] = Field(
        default=None,
        description="False marks a computed field that is never sent to the server.",
    )
    mapping: Optional[str] = Field(
        default=None, description="Alternate source key in the raw payload."
    )
    convert: Optional[str] = Field(
        default=None,
        description="Function body computing the value (requires persist=False).",
    )
    critical: Optional[bool] = Field(
        default=None,
        description="Always include the field when saving (Ext JS 5 only).",
    )

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            lowered: str = v.strip().lower()
            return _FIELD_TYPE_ALIASES.get(lowered, lowered)
        return v

    def __repr__(self) -> str:
        return f"<Field {self.name} {self.type}>"


# ---------------------------------------------------------------------------
# Validation rules (tagged union on ``type``)
# ---------------------------------------------------------------------------


class _BaseValidation(BaseModel):
    model_config = _SHARED_CONFIG

    field: str = Field(..., min_length=1, description="Name of the validated field.")


class PresenceValidation(_BaseValidation):
    """Field must be present."""

    type: Literal["presence"] = "presence"


class LengthValidation(_BaseValidation):
    """String length bounds."""

    type: Literal["length"] = "length"
    min: Optional[int] = Field(default=None, ge=0)
    max: Optional[int] = Field(default=None, ge=0)


class RangeValidation(_BaseValidation):
    """Numeric range bounds."""

    type: Literal["range"] = "range"
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None


class FormatValidation(_BaseValidation):
    """Value must match a regular expression."""

    type: Literal["format"] = "format"
    matcher: str = Field(..., min_length=1, description="Regular expression source.")


class InclusionValidation(_BaseValidation):
    """Value must be one of ``list``."""

    type: Literal["inclusion"] = "inclusion"
    list: List[Union[bool, int, float, str]] = Field(..., min_length=1)


class ExclusionValidation(_BaseValidation):
    """Value must not be one of ``list``."""

    type: Literal["exclusion"] = "exclusion"
    list: List[Union[bool, int, float, str]] = Field(..., min_length=1)


class EmailValidation(_BaseValidation):
    """Value must look like an e-mail address."""

    type: Literal["email"] = "email"


class CustomValidation(_BaseValidation):
    """A client-side validator registered under ``name``."""

    type: Literal["custom"] = "custom"
    name: str = Field(..., min_length=1, description="Validator type name.")
    options: Dict[str, Any] = Field(
        default_factory=dict, description="Extra validator parameters, in order."
    )


ValidationRule = Annotated[
    Union[
        PresenceValidation,
        LengthValidation,
        RangeValidation,
        FormatValidation,
        InclusionValidation,
        ExclusionValidation,
        EmailValidation,
        CustomValidation,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Associations (tagged union on ``type``)
# ---------------------------------------------------------------------------


class _BaseAssociation(BaseModel):
    model_config = _SHARED_CONFIG

    model: str = Field(..., min_length=1, description="Related model class name.")
    foreign_key: Optional[str] = Field(default=None, alias="foreignKey")
    name: Optional[str] = Field(
        default=None, description="Association name; derived from ``model`` when unset."
    )
    primary_key: Optional[str] = Field(default=None, alias="primaryKey")
    association_key: Optional[str] = Field(default=None, alias="associationKey")


class HasManyAssociation(_BaseAssociation):
    """One-to-many: a store of related records."""

    type: Literal["has_many"] = "has_many"
    auto_load: Optional[bool] = Field(default=None, alias="autoLoad")


class BelongsToAssociation(_BaseAssociation):
    """Many-to-one: a reference to the owning record."""

    type: Literal["belongs_to"] = "belongs_to"
    getter_name: Optional[str] = Field(default=None, alias="getterName")
    setter_name: Optional[str] = Field(default=None, alias="setterName")


class HasOneAssociation(_BaseAssociation):
    """One-to-one reference."""

    type: Literal["has_one"] = "has_one"
    getter_name: Optional[str] = Field(default=None, alias="getterName")
    setter_name: Optional[str] = Field(default=None, alias="setterName")


AssociationRule = Annotated[
    Union[HasManyAssociation, BelongsToAssociation, HasOneAssociation],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Model definition - root entity
# ---------------------------------------------------------------------------


class ModelDefinition(BaseModel):
    """
    The root description of an entity to be rendered.

    Invariant: ``_field_map`` is an O(1) name → field index kept in step
    with the ordered ``fields`` list.  Inserting a name twice replaces the
    earlier definition in place, so names are unique at emission time and
    the first insertion fixes the position.
    """

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(
        default=None, description="Class name; None renders only the class body."
    )
    id_property: Optional[str] = Field(
        default=None, alias="idProperty", description="Primary-key field name."
    )
    fields: List[FieldDefinition] = Field(
        default_factory=list, description="Fields in emission order."
    )
    validations: List[ValidationRule] = Field(default_factory=list)
    associations: List[AssociationRule] = Field(default_factory=list)

    paging: bool = Field(
        default=False, description="Responses are wrapped in a paged envelope."
    )
    disable_paging_parameters: bool = Field(
        default=False,
        alias="disablePagingParameters",
        description="Send no page/start/limit parameters.",
    )

    read_method: Optional[str] = Field(default=None, alias="readMethod")
    create_method: Optional[str] = Field(default=None, alias="createMethod")
    update_method: Optional[str] = Field(default=None, alias="updateMethod")
    destroy_method: Optional[str] = Field(default=None, alias="destroyMethod")

    message_property: Optional[str] = Field(default=None, alias="messageProperty")
    success_property: Optional[str] = Field(default=None, alias="successProperty")
    total_property: Optional[str] = Field(default=None, alias="totalProperty")
    root_property: Optional[str] = Field(default=None, alias="rootProperty")
    writer: Optional[str] = Field(default=None, description="Proxy writer type.")

    _field_map: Dict[str, FieldDefinition] = PrivateAttr(default_factory=dict)

    # -- Validators ---------------------------------------------------------

    @field_validator("read_method", "create_method", "update_method", "destroy_method")
    @classmethod
    def _validate_method_ref(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not _METHOD_REF_RE.match(v):
            raise ValueError(
                f"Method reference '{v}' must have the form 'action.method'."
            )
        return v

    # Runs on construction and on every validated assignment, so a
    # reassigned ``fields`` list is deduplicated and re-indexed too.
    @model_validator(mode="after")
    def _index_fields(self) -> "ModelDefinition":
        deduped: Dict[str, FieldDefinition] = {}
        for fd in self.fields:
            if fd.name in deduped:
                logger.warning(
                    "Model '%s': field '%s' defined more than once; "
                    "the last definition wins.",
                    self.name,
                    fd.name,
                )
            deduped[fd.name] = fd
        if len(deduped) != len(self.fields):
            self.fields[:] = list(deduped.values())
        self._field_map = deduped
        return self

    # -- Computed helpers ---------------------------------------------------

    @computed_field  # type: ignore[misc]
    @property
    def resolved_id_property(self) -> str:
        return self.id_property or DEFAULT_ID_PROPERTY

    @computed_field  # type: ignore[misc]
    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @computed_field  # type: ignore[misc]
    @property
    def has_proxy_methods(self) -> bool:
        return any(
            (self.read_method, self.create_method, self.update_method, self.destroy_method)
        )

    # -- Mutation helpers (for the collaborator building the model) ----------

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """O(1) field lookup by name."""
        return self._field_map.get(name)

    def add_field(self, field_def: FieldDefinition) -> None:
        """Append a field, or replace an existing one with the same name."""
        if field_def is None:
            raise MissingArgumentError("field definition must not be None")
        idx: Optional[int] = next(
            (i for i, f in enumerate(self.fields) if f.name == field_def.name), None
        )
        if idx is not None:
            self.fields[idx] = field_def
            logger.debug("Replaced field '%s' at position %d.", field_def.name, idx)
        else:
            self.fields.append(field_def)
        self._field_map[field_def.name] = field_def

    def add_fields(self, field_defs: List[FieldDefinition]) -> None:
        if field_defs is None:
            raise MissingArgumentError("field definitions must not be None")
        for fd in field_defs:
            self.add_field(fd)

    def add_validation(self, rule: ValidationRule) -> None:
        if rule is None:
            raise MissingArgumentError("validation rule must not be None")
        self.validations.append(rule)

    def add_validations(self, rules: List[ValidationRule]) -> None:
        if rules is None:
            raise MissingArgumentError("validation rules must not be None")
        self.validations.extend(rules)

    def add_association(self, rule: AssociationRule) -> None:
        if rule is None:
            raise MissingArgumentError("association must not be None")
        self.associations.append(rule)

    def add_associations(self, rules: List[AssociationRule]) -> None:
        if rules is None:
            raise MissingArgumentError("associations must not be None")
        self.associations.extend(rules)

    def __repr__(self) -> str:
        return (
            f"<ModelDefinition {self.name or '(anonymous)'} "
            f"({len(self.fields)} fields, {len(self.validations)} validations, "
            f"{len(self.associations)} associations)>"
        )


# ---------------------------------------------------------------------------
# Render configuration
# ---------------------------------------------------------------------------


class RenderConfig(BaseModel):
    """Settings that control how a model is written out."""

    model_config = _SHARED_CONFIG

    output_format: OutputFormat = Field(
        default=OutputFormat.EXTJS4,
        alias="format",
        description="Target framework generation.",
    )
    debug: bool = Field(
        default=False, description="Pretty-print the output instead of compacting it."
    )
    indent_size: int = Field(
        default=2, ge=1, le=8, description="Indentation width when pretty-printing."
    )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DEFAULT_ID_PROPERTY",
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
    "ValidationRule",
    "HasManyAssociation",
    "BelongsToAssociation",
    "HasOneAssociation",
    "AssociationRule",
    "ModelDefinition",
    "RenderConfig",
]

logger.debug("extmodel.models loaded - %d public symbols.", len(__all__))
