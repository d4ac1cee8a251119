import pytest

from endpoint_docs.errors import MalformedDescriptorError
from endpoint_docs.routes.base import RouteSettings
from endpoint_docs.schema.base import (
    AlternativesDescription,
    ArrayDescription,
    AssertArgument,
    ConditionalDescription,
    ObjectDescription,
    Reference,
    ScalarDescription,
    parse_description,
)


class TestParseDescription:
    def test_object_with_children(self):
        desc = parse_description({"type": "object", "children": {"a": {"type": "string"}}})
        assert isinstance(desc, ObjectDescription)
        assert isinstance(desc.children["a"], ScalarDescription)

    def test_array_ordered_items_alias(self):
        desc = parse_description({"type": "array", "orderedItems": [{"type": "number"}]})
        assert isinstance(desc, ArrayDescription)
        assert desc.ordered_items[0].type == "number"
        assert desc.items is None

    def test_alternatives(self):
        desc = parse_description({"type": "alternatives", "alternatives": [{"type": "string"}, {"type": "number"}]})
        assert isinstance(desc, AlternativesDescription)
        assert len(desc.alternatives) == 2

    def test_conditional_detected_by_ref_and_is(self):
        desc = parse_description({
            "type": "alternatives",
            "ref": "ref:b",
            "is": {"type": "boolean"},
            "then": {"type": "string"},
        })
        assert isinstance(desc, ConditionalDescription)
        assert desc.is_.type == "boolean"
        assert desc.otherwise is None

    def test_references_in_valids(self):
        desc = parse_description({"type": "string", "valids": [{"ref": "a"}, {"ref": "user", "context": True}, "x"]})
        assert desc.valids == [Reference(key="a"), Reference(key="user", is_context=True), "x"]

    def test_literal_dict_value_is_not_a_reference(self):
        desc = parse_description({"type": "any", "valids": [{"ref": "a", "extra": 1}]})
        assert desc.valids == [{"ref": "a", "extra": 1}]

    def test_rule_reference_argument(self):
        desc = parse_description({"type": "number", "rules": [{"name": "min", "arg": {"ref": "low"}}]})
        assert desc.rules[0].arg == Reference(key="low")

    def test_assert_rule_argument(self):
        desc = parse_description({
            "type": "object",
            "rules": [{"name": "assert", "arg": {"ref": {"ref": "a.b"}, "cast": {"type": "number"}}}],
        })
        arg = desc.rules[0].arg
        assert isinstance(arg, AssertArgument)
        assert arg.ref.key == "a.b"
        assert arg.cast.type == "number"

    def test_flags_camel_case(self):
        desc = parse_description({"type": "object", "flags": {"allowUnknown": True, "presence": "required"}})
        assert desc.flags.allow_unknown is True
        assert desc.flags.presence == "required"

    def test_unknown_type_raises(self):
        with pytest.raises(MalformedDescriptorError):
            parse_description({"type": "tuple"})

    def test_missing_type_raises(self):
        with pytest.raises(MalformedDescriptorError):
            parse_description({"children": {}})

    def test_parsed_description_passes_through(self):
        desc = ScalarDescription(type="string")
        assert parse_description(desc) is desc


class TestRouteSettings:
    def test_defaults(self):
        settings = RouteSettings()
        assert settings.docs is True
        assert settings.is_internal is False
        assert settings.validation.payload is None
        assert settings.response.schema_ is None

    def test_camel_case_aliases(self):
        settings = RouteSettings.model_validate({
            "isInternal": True,
            "validate": {"query": {"type": "object"}},
            "response": {"schema": {"type": "string"}, "status": {200: {"type": "string"}}},
        })
        assert settings.is_internal is True
        assert settings.validation.query == {"type": "object"}
        assert settings.response.schema_ == {"type": "string"}
        assert 200 in settings.response.status
