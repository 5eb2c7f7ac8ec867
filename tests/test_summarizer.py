from enum import Enum

from core.schema import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    DiscriminatedUnionSchema,
    EnumSchema,
    LiteralSchema,
    NativeEnumSchema,
    NumberSchema,
    ObjectSchema,
    RecordSchema,
    SchemaNode,
    StringSchema,
    TupleSchema,
    UnionSchema,
)
from core.summarizer import summarize_schema


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestWrappers:
    def test_absent_schema_is_none(self):
        assert summarize_schema(None) is None

    def test_optional_survives_any_wrapper_depth(self):
        schema = StringSchema().optional().default("x").brand("Slug").refine("non-empty")
        summary = summarize_schema(schema)
        assert summary.type == "string"
        assert summary.optional is True
        assert summary.nullable is False

    def test_optional_and_nullable_are_independent(self):
        summary = summarize_schema(NumberSchema().nullable().optional())
        assert summary.optional is True
        assert summary.nullable is True

    def test_plain_schema_has_no_flags(self):
        summary = summarize_schema(BooleanSchema())
        assert summary.optional is False
        assert summary.nullable is False
        assert "optional" not in summary.to_dict()

    def test_inner_description_wins(self):
        schema = StringSchema(description="inner").optional().describe("outer")
        assert summarize_schema(schema).description == "inner"

    def test_wrapper_description_used_when_inner_has_none(self):
        schema = EnumSchema(values=("v1", "v2")).optional().describe("Pipeline version")
        assert summarize_schema(schema).description == "Pipeline version"


class TestConcreteKinds:
    def test_object_keeps_declaration_order(self):
        schema = ObjectSchema(fields={"zeta": StringSchema(), "alpha": NumberSchema()})
        summary = summarize_schema(schema)
        assert list(summary.properties) == ["zeta", "alpha"]
        assert summary.properties["alpha"].type == "number"

    def test_empty_object_omits_properties(self):
        summary = summarize_schema(ObjectSchema(description="No body"))
        assert summary.type == "object"
        assert summary.properties is None
        assert summary.to_dict() == {"type": "object", "description": "No body"}

    def test_enum_values_in_order(self):
        summary = summarize_schema(EnumSchema(values=("pixel", "polygon")))
        assert summary.type == "enum"
        assert summary.enum_values == ["pixel", "polygon"]

    def test_native_enum(self):
        summary = summarize_schema(NativeEnumSchema(enum=Color))
        assert summary.type == "enum"
        assert summary.enum_values == ["red", "green"]

    def test_literal_is_single_value(self):
        assert summarize_schema(LiteralSchema(value=2)).enum_values == ["2"]
        assert summarize_schema(LiteralSchema(value=True)).enum_values == ["true"]
        assert summarize_schema(LiteralSchema(value=2)).type == "literal"

    def test_array_and_record_have_single_item(self):
        array = summarize_schema(ArraySchema(element=StringSchema(format="url").nullable()))
        assert array.type == "array"
        assert array.items.type == "string"
        assert array.items.nullable is True

        record = summarize_schema(RecordSchema(value=AnySchema()))
        assert record.type == "record"
        assert record.items.type == "any"

    def test_tuple_items_are_positional(self):
        summary = summarize_schema(TupleSchema(items=(StringSchema(), NumberSchema())))
        assert [item.type for item in summary.items] == ["string", "number"]
        assert [item["type"] for item in summary.to_dict()["items"]] == ["string", "number"]

    def test_union_options_in_order(self):
        schema = EnumSchema(values=("2", "4")).or_(LiteralSchema(value=2)).or_(LiteralSchema(value=4))
        summary = summarize_schema(schema)
        assert summary.type == "union"
        assert [option.type for option in summary.union_options] == ["enum", "literal", "literal"]

    def test_discriminated_union_uses_registration_order(self):
        schema = DiscriminatedUnionSchema(
            discriminator="kind",
            options=(
                ObjectSchema(fields={"kind": LiteralSchema(value="b")}),
                ObjectSchema(fields={"kind": LiteralSchema(value="a")}),
            ),
        )
        summary = summarize_schema(schema)
        assert summary.type == "union"
        kinds = [option.properties["kind"].enum_values[0] for option in summary.union_options]
        assert kinds == ["b", "a"]

    def test_explicit_union(self):
        summary = summarize_schema(UnionSchema(options=(StringSchema(), BooleanSchema())))
        assert summary.to_dict()["unionOptions"] == [
            {"type": "string", "description": None},
            {"type": "boolean", "description": None},
        ]

    def test_unrecognized_node_is_unknown(self):
        class Opaque(SchemaNode):
            pass

        summary = summarize_schema(Opaque(description="mystery"))
        assert summary.type == "unknown"
        assert summary.description == "mystery"
