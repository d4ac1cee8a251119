"""Renderer-facing documentation nodes.

Every node carries a ``kind`` tag (``node``, ``conditional`` or ``denied``)
so renderers can branch on it. Dump with ``by_alias=True`` to get the
camelCase keys templates expect.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class DeniedNode(_Node):
    """The value must never be provided."""

    kind: Literal["denied"] = "denied"
    is_denied: Literal[True] = True
    root: bool = False


class Condition(_Node):
    key: str
    value: "AnyDocNode"


class ConditionalNode(_Node):
    kind: Literal["conditional"] = "conditional"
    condition: Condition
    then: "AnyDocNode | None" = None
    otherwise: "AnyDocNode | None" = None
    root: bool = False


class DocFlags(_Node):
    allow_unknown: bool | None = None
    default: Any = None
    encoding: str | None = None
    insensitive: bool | None = None
    required: bool = False
    forbidden: bool = False
    stripped: bool | None = None


class RuleReference(_Node):
    ref: str


class RuleAssertion(_Node):
    key: str
    value: "AnyDocNode"


class DocNode(_Node):
    kind: Literal["node"] = "node"
    name: str | None = None
    type_is_name: bool = False
    description: str | None = None
    notes: list[str] | None = None
    tags: list[str] | None = None
    meta: Any = None
    unit: str | None = None
    type: str
    allowed_values: str | None = None
    disallowed_values: str | None = None
    examples: list[Any] | None = None
    peers: list[str] | None = None
    target: str | None = None
    flags: DocFlags | None = None
    rules: dict[str, Any] | None = None  # capitalized rule name -> argument
    children: "list[AnyDocNode] | None" = None
    items: "list[AnyDocNode] | None" = None
    forbidden_items: "list[AnyDocNode] | None" = None
    ordered_items: "list[AnyDocNode] | None" = None
    alternatives: "list[AnyDocNode] | None" = None
    root: bool = False


AnyDocNode = Annotated[Union[DocNode, ConditionalNode, DeniedNode], Field(discriminator="kind")]

for _model in (Condition, ConditionalNode, RuleAssertion, DocNode):
    _model.model_rebuild()
