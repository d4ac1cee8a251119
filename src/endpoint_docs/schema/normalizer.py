"""Schema description normalizer.

Walks a parsed descriptor tree and produces the flat, renderer-friendly
node tree defined in ``endpoint_docs.schema.nodes``.
"""

import re
from collections.abc import Mapping
from typing import Any

from endpoint_docs.schema.base import (
    AlternativesDescription,
    ArrayDescription,
    AssertArgument,
    BaseDescription,
    ConditionalDescription,
    Flags,
    ObjectDescription,
    Reference,
    Rule,
    parse_description,
)
from endpoint_docs.schema.formatting import (
    capitalize,
    format_existing_values,
    format_peer_dependency,
    format_reference,
    process_notes,
)
from endpoint_docs.schema.nodes import (
    Condition,
    ConditionalNode,
    DeniedNode,
    DocFlags,
    DocNode,
    RuleAssertion,
    RuleReference,
)

REFERENCE_TYPE = "reference"

_SCHEME_PREFIX = re.compile(r"^\w+:")

Node = DocNode | ConditionalNode | DeniedNode


def describe(value: Any) -> Node | None:
    """Normalize a root descriptor (dict form or parsed).

    Returns None when there is nothing to describe, e.g. a route without
    a payload schema.
    """
    if not isinstance(value, (Mapping, BaseDescription)):
        return None
    node = normalize(parse_description(value))
    return node.model_copy(update={"root": True})


def describe_status_schema(status: Mapping[Any, Any] | None) -> dict[str, Node | None] | None:
    """Normalize per-status-code response schemas, keyed by code."""
    if not status:
        return None
    return {str(code): describe(schema) for code, schema in status.items()}


def normalize(description: BaseDescription, name: str | None = None, type_name: str | None = None) -> Node:
    """Normalize one descriptor.

    ``name`` is the field name for object children and pattern keys;
    ``type_name`` labels unnamed nodes by their type (conditional branches).
    """
    # Detection of an empty object schema on an unnamed value: nothing may be sent
    if not name and isinstance(description, ObjectDescription) and description.children == {}:
        return DeniedNode()

    if isinstance(description, ConditionalDescription):
        return _normalize_conditional(description)

    valids = description.valids or []
    node_type = REFERENCE_TYPE if any(isinstance(v, Reference) for v in valids) else description.type
    is_reference = node_type == REFERENCE_TYPE

    fields: dict[str, Any] = {
        "type_is_name": not name and bool(type_name),
        "name": name or type_name,
        "description": description.description,
        "notes": process_notes(description.notes),
        "tags": description.tags,
        "meta": description.meta,
        "unit": description.unit,
        "type": node_type,
        "allowed_values": (
            format_existing_values(node_type, description.valids)
            if not is_reference and description.valids is not None else None
        ),
        "disallowed_values": (
            format_existing_values(node_type, description.invalids)
            if not is_reference and description.invalids is not None else None
        ),
        "examples": description.examples,
        "peers": (
            [format_peer_dependency(dep) for dep in description.dependencies]
            if description.dependencies is not None else None
        ),
        "target": format_existing_values(node_type, valids) if is_reference else None,
        "flags": _normalize_flags(description.flags),
    }

    # A reference node documents its target only, whatever shape it was declared with
    if not is_reference and isinstance(description, ObjectDescription):
        children = [normalize(child, key) for key, child in (description.children or {}).items()]
        children.extend(normalize(pattern.rule, pattern.regex) for pattern in description.patterns or [])
        fields["children"] = children

    if not is_reference and isinstance(description, ArrayDescription):
        fields.update(_normalize_array(description))

    if not is_reference and isinstance(description, AlternativesDescription):
        fields["alternatives"] = [normalize(alternative) for alternative in description.alternatives]
    else:
        fields.update(_normalize_rules(description.rules or [], fields["type"]))

    return DocNode(**fields)


def _normalize_conditional(description: ConditionalDescription) -> ConditionalNode:
    def branch(target: BaseDescription | None) -> Node | None:
        if target is None:
            return None
        return normalize(target, type_name=target.type)

    return ConditionalNode(
        condition=Condition(
            key=_SCHEME_PREFIX.sub("", description.ref),
            value=branch(description.is_),
        ),
        then=branch(description.then),
        otherwise=branch(description.otherwise),
    )


def _normalize_array(description: ArrayDescription) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if description.ordered_items is not None:
        fields["ordered_items"] = [normalize(item) for item in description.ordered_items]

    if description.items is not None:
        items: list[Node] = []
        forbidden_items: list[Node] = []
        for item in description.items:
            node = normalize(item)
            if isinstance(node, DocNode) and node.flags and node.flags.forbidden:
                forbidden_items.append(node)
            else:
                items.append(node)
        fields["items"] = items
        fields["forbidden_items"] = forbidden_items
    return fields


def _normalize_rules(rules: list[Rule], node_type: str) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    rule_names: dict[str, str] = {}
    for rule in rules:
        key = capitalize(rule.name)
        normalized[key] = process_rule_argument(rule)
        rule_names[key] = rule.name

    # A type refined by a single argument-less rule reads better as that rule
    if len(normalized) == 1:
        key, arg = next(iter(normalized.items()))
        if arg is None or (isinstance(arg, str) and not arg):
            return {"type": rule_names[key], "rules": {}}

    return {"type": node_type, "rules": normalized}


def process_rule_argument(rule: Rule) -> Any:
    arg = rule.arg
    if isinstance(arg, AssertArgument):
        return RuleAssertion(key=format_reference(arg.ref), value=normalize(arg.cast))
    if isinstance(arg, Reference):
        return RuleReference(ref=format_reference(arg))
    return "" if arg is None else arg


def _normalize_flags(flags: Flags | None) -> DocFlags | None:
    if flags is None:
        return None
    return DocFlags(
        allow_unknown=flags.allow_unknown,
        default=flags.default,
        encoding=flags.encoding,
        insensitive=flags.insensitive,
        required=flags.presence == "required",
        forbidden=flags.presence == "forbidden",
        stripped=flags.strip,
    )
