# =============================================================================
# core/summarizer.py  —  Schema Summarizer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Walks a SchemaNode tree (core/schema.py) and produces a SchemaSummary tree
#   (core/models.py).  The summary is what list_api_routes hands to the agent,
#   both as structured content and, via core/renderer.py, as plaintext.
#
# HOW IT WORKS:
#   1. Unwrap wrapper nodes (optional, nullable, default, branded, refined) in
#      a loop.  The optional/nullable flags are OR'd along the chain, so
#      `x.optional().default(1).nullable()` is both optional and nullable.
#   2. Classify the concrete node that remains and recurse into its children.
#   3. Anything unrecognized becomes type "unknown" instead of raising:
#      this is best-effort documentation.
#
# DESCRIPTIONS:
#   The innermost concrete node's description wins.  If it has none, the
#   innermost wrapper description seen while unwrapping is used, so
#   `StringSchema().optional().describe("Optional prompt")` keeps its text.
# =============================================================================

from core.models import SchemaSummary
from core.schema import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    DiscriminatedUnionSchema,
    EnumSchema,
    LiteralSchema,
    NativeEnumSchema,
    NullableSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RecordSchema,
    SchemaNode,
    StringSchema,
    TupleSchema,
    UnionSchema,
    WRAPPER_TYPES,
)

_PRIMITIVE_TYPES: dict[type, str] = {
    StringSchema: "string",
    NumberSchema: "number",
    BooleanSchema: "boolean",
    AnySchema: "any",
}


def summarize_schema(schema: SchemaNode | None) -> SchemaSummary | None:
    """Summarize a schema tree.  Returns None only for an absent schema."""
    if schema is None:
        return None

    optional = False
    nullable = False
    wrapper_description = None

    node = schema
    while isinstance(node, WRAPPER_TYPES):
        if isinstance(node, OptionalSchema):
            optional = True
        elif isinstance(node, NullableSchema):
            nullable = True
        if node.description:
            wrapper_description = node.description
        node = node.inner

    summary = _summarize_concrete(node)
    if not summary.description:
        summary.description = wrapper_description
    summary.optional = optional
    summary.nullable = nullable
    return summary


def _summarize_concrete(node: SchemaNode) -> SchemaSummary:
    description = node.description or None

    if isinstance(node, ObjectSchema):
        properties = {}
        for name, child in node.fields.items():
            child_summary = summarize_schema(child)
            if child_summary is not None:
                properties[name] = child_summary
        return SchemaSummary(
            type="object",
            description=description,
            properties=properties or None,
        )

    if isinstance(node, EnumSchema):
        return SchemaSummary(
            type="enum", description=description, enum_values=list(node.values)
        )

    if isinstance(node, NativeEnumSchema):
        return SchemaSummary(
            type="enum",
            description=description,
            enum_values=[str(member.value) for member in node.enum],
        )

    if isinstance(node, LiteralSchema):
        return SchemaSummary(
            type="literal",
            description=description,
            enum_values=[_literal_text(node.value)],
        )

    if isinstance(node, ArraySchema):
        return SchemaSummary(
            type="array", description=description, items=summarize_schema(node.element)
        )

    if isinstance(node, RecordSchema):
        return SchemaSummary(
            type="record", description=description, items=summarize_schema(node.value)
        )

    if isinstance(node, TupleSchema):
        return SchemaSummary(
            type="tuple",
            description=description,
            items=_summarize_all(node.items),
        )

    if isinstance(node, (UnionSchema, DiscriminatedUnionSchema)):
        return SchemaSummary(
            type="union",
            description=description,
            union_options=_summarize_all(node.options),
        )

    return SchemaSummary(
        type=_PRIMITIVE_TYPES.get(type(node), "unknown"),
        description=description,
    )


def _summarize_all(nodes) -> list[SchemaSummary]:
    summaries = (summarize_schema(node) for node in nodes)
    return [summary for summary in summaries if summary is not None]


def _literal_text(value) -> str:
    # match JSON spelling for booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
