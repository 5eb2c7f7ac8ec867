# =============================================================================
# core/schema.py  —  Schema Nodes (the shapes the API accepts and returns)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines a small, closed set of frozen dataclasses that describe request
#   and response payloads of the catalogued endpoints.  The route catalogue
#   (core/catalog.py) builds one tree per route; the summarizer
#   (core/summarizer.py) walks those trees to produce documentation.
#
# THIS IS NOT A VALIDATOR:
#   Nothing here checks data.  A RefinedSchema keeps the refinement's message
#   for documentation purposes only.
#
# TWO FAMILIES OF NODES:
#   - Concrete kinds:  object, enum, native enum, literal, array, record,
#                      tuple, union, discriminated union, and the primitives
#                      (string, number, boolean, any).
#   - Wrapper kinds:   optional, nullable, default, branded, refined.
#                      A wrapper always points at exactly one inner node.
#
# BUILDER METHODS:
#   Every node exposes .describe(), .optional(), .nullable(), .default(),
#   .brand(), .refine() and .or_().  They return NEW nodes, so a shared
#   schema (e.g. IMAGE_OR_URL_SCHEMA) can be reused across routes safely:
#
#       StringSchema(description="Prompt").optional()
#       EnumSchema(values=("2", "4")).or_(LiteralSchema(value=2))
# =============================================================================

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Base class for every schema node."""

    description: str | None = None

    def describe(self, description: str) -> "SchemaNode":
        return replace(self, description=description)

    def optional(self) -> "OptionalSchema":
        return OptionalSchema(inner=self)

    def nullable(self) -> "NullableSchema":
        return NullableSchema(inner=self)

    def default(self, value: Any) -> "DefaultSchema":
        return DefaultSchema(inner=self, value=value)

    def brand(self, name: str) -> "BrandedSchema":
        return BrandedSchema(inner=self, name=name)

    def refine(self, message: str) -> "RefinedSchema":
        return RefinedSchema(inner=self, message=message)

    def or_(self, other: "SchemaNode") -> "UnionSchema":
        # Chained .or_() calls flatten into a single union, keeping order.
        if isinstance(self, UnionSchema) and self.description is None:
            return UnionSchema(options=self.options + (other,))
        return UnionSchema(options=(self, other))


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------
@dataclass(frozen=True, kw_only=True)
class StringSchema(SchemaNode):
    format: str | None = None          # "email", "uuid", "url"
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True, kw_only=True)
class NumberSchema(SchemaNode):
    integer: bool = False
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True, kw_only=True)
class BooleanSchema(SchemaNode):
    pass


@dataclass(frozen=True, kw_only=True)
class AnySchema(SchemaNode):
    pass


# -----------------------------------------------------------------------------
# Structured kinds
# -----------------------------------------------------------------------------
@dataclass(frozen=True, kw_only=True)
class ObjectSchema(SchemaNode):
    # dicts keep insertion order, which is the declaration order we render in
    fields: dict[str, SchemaNode] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class EnumSchema(SchemaNode):
    values: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True)
class NativeEnumSchema(SchemaNode):
    """An enumeration backed by a Python ``Enum`` class."""

    enum: type[Enum]


@dataclass(frozen=True, kw_only=True)
class LiteralSchema(SchemaNode):
    value: str | int | float | bool


@dataclass(frozen=True, kw_only=True)
class ArraySchema(SchemaNode):
    element: SchemaNode


@dataclass(frozen=True, kw_only=True)
class RecordSchema(SchemaNode):
    """A mapping with unconstrained keys and values of one shape."""

    value: SchemaNode


@dataclass(frozen=True, kw_only=True)
class TupleSchema(SchemaNode):
    items: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class UnionSchema(SchemaNode):
    options: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class DiscriminatedUnionSchema(SchemaNode):
    discriminator: str
    options: tuple[ObjectSchema, ...] = ()


# -----------------------------------------------------------------------------
# Wrappers
# -----------------------------------------------------------------------------
@dataclass(frozen=True, kw_only=True)
class OptionalSchema(SchemaNode):
    inner: SchemaNode


@dataclass(frozen=True, kw_only=True)
class NullableSchema(SchemaNode):
    inner: SchemaNode


@dataclass(frozen=True, kw_only=True)
class DefaultSchema(SchemaNode):
    inner: SchemaNode
    value: Any = None


@dataclass(frozen=True, kw_only=True)
class BrandedSchema(SchemaNode):
    inner: SchemaNode
    name: str = ""


@dataclass(frozen=True, kw_only=True)
class RefinedSchema(SchemaNode):
    inner: SchemaNode
    message: str | None = None


WRAPPER_TYPES = (
    OptionalSchema,
    NullableSchema,
    DefaultSchema,
    BrandedSchema,
    RefinedSchema,
)
