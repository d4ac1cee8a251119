"""Schema descriptor models.

A descriptor is the structural description a validation library produces
for one accepted value shape. Descriptors arrive as plain dicts (camelCase
keys) and are parsed into one of the variants below, picked by shape:
conditional, object, array, alternatives or scalar.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from endpoint_docs.errors import MalformedDescriptorError

ScalarType = Literal["any", "binary", "boolean", "date", "function", "lazy", "number", "string", "symbol"]

COMPOUND_TYPES = ("object", "array", "alternatives")


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="ignore")


class Reference(_Model):
    """A value that points at another field, or at request context."""

    key: str
    is_context: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_ref_form(cls, data: Any) -> Any:
        # {"ref": "a.b"} or {"ref": "user", "context": true}
        if isinstance(data, Mapping) and "ref" in data:
            return {"key": data["ref"], "is_context": bool(data.get("context", False))}
        return data


def is_reference_form(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("ref"), str)
        and set(value) <= {"ref", "context"}
    )


def parse_value(value: Any) -> Any:
    """Turn the dict form of a reference into a Reference, leave literals alone."""
    if is_reference_form(value):
        return Reference.model_validate(value)
    return value


class Flags(_Model):
    presence: Literal["optional", "required", "forbidden"] | None = None
    default: Any = None
    strip: bool | None = None
    allow_unknown: bool | None = None
    encoding: str | None = None  # binary
    insensitive: bool | None = None  # string


class Dependency(_Model):
    """Peer constraint such as ``with``, ``without``, ``and``, ``or``, ``xor``."""

    relation: str = Field(alias="type")
    key: str | None = None
    peers: list[str]


class AssertArgument(_Model):
    ref: Reference
    cast: "SchemaDescription"


class Rule(_Model):
    name: str
    arg: Any = None

    @model_validator(mode="before")
    @classmethod
    def _parse_arg(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        arg = data.get("arg")
        if data.get("name") == "assert" and isinstance(arg, Mapping):
            arg = AssertArgument.model_validate(arg)
        else:
            arg = parse_value(arg)
        return {**data, "arg": arg}


class BaseDescription(_Model):
    """Fields every descriptor variant may carry."""

    description: str | None = None
    notes: str | list[str] | None = None
    tags: list[str] | None = None
    meta: Any = None
    unit: str | None = None
    examples: list[Any] | None = None
    valids: list[Any] | None = None
    invalids: list[Any] | None = None
    rules: list[Rule] | None = None
    flags: Flags | None = None
    dependencies: list[Dependency] | None = None

    @field_validator("valids", "invalids", mode="before")
    @classmethod
    def _parse_values(cls, values: Any) -> Any:
        if isinstance(values, list):
            return [parse_value(v) for v in values]
        return values


class ConditionalDescription(BaseDescription):
    """``when ref matches is, apply then, else otherwise``."""

    type: str = "alternatives"
    ref: str
    is_: "SchemaDescription" = Field(alias="is")
    then: "SchemaDescription | None" = None
    otherwise: "SchemaDescription | None" = None


class PatternRule(_Model):
    regex: str
    rule: "SchemaDescription"


class ObjectDescription(BaseDescription):
    type: Literal["object"]
    children: "dict[str, SchemaDescription] | None" = None
    patterns: list[PatternRule] | None = None


class ArrayDescription(BaseDescription):
    type: Literal["array"]
    items: "list[SchemaDescription] | None" = None
    ordered_items: "list[SchemaDescription] | None" = None


class AlternativesDescription(BaseDescription):
    type: Literal["alternatives"]
    alternatives: "list[SchemaDescription]" = []


class ScalarDescription(BaseDescription):
    type: ScalarType


def _description_kind(value: Any) -> str:
    if isinstance(value, Mapping):
        if value.get("ref") is not None and value.get("is") is not None:
            return "conditional"
        kind = value.get("type")
    elif isinstance(value, ConditionalDescription):
        return "conditional"
    else:
        kind = getattr(value, "type", None)
    return kind if kind in COMPOUND_TYPES else "scalar"


SchemaDescription = Annotated[
    Union[
        Annotated[ConditionalDescription, Tag("conditional")],
        Annotated[ObjectDescription, Tag("object")],
        Annotated[ArrayDescription, Tag("array")],
        Annotated[AlternativesDescription, Tag("alternatives")],
        Annotated[ScalarDescription, Tag("scalar")],
    ],
    Discriminator(_description_kind),
]

for _model in (AssertArgument, Rule, ConditionalDescription, PatternRule, ObjectDescription,
               ArrayDescription, AlternativesDescription, ScalarDescription):
    _model.model_rebuild()

_adapter = TypeAdapter(SchemaDescription)


def parse_description(value: Any) -> BaseDescription:
    """Parse the dict form of a descriptor.

    Raises MalformedDescriptorError for unknown types or invalid structure.
    """
    if isinstance(value, BaseDescription):
        return value
    try:
        return _adapter.validate_python(value)
    except ValidationError as e:
        raise MalformedDescriptorError(f"Malformed schema descriptor: {e}") from e
