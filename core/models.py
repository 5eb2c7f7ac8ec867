# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# between the catalogue, the dispatcher and the MCP tool layer.  They carry no
# behavior beyond converting themselves into the JSON-friendly dicts that the
# tools return as structured content.
#
# WIRE NAMES:
#   Python attributes are snake_case; the dicts produced by to_dict() use the
#   camelCase keys that MCP clients see (authRequired, statusText, rawText...).
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Literal

from core.schema import SchemaNode

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

QueryScalar = str | int | float | bool
QueryValue = QueryScalar | list[QueryScalar]


# -----------------------------------------------------------------------------
# SchemaSummary: the documentation view of one SchemaNode
# -----------------------------------------------------------------------------
# `items` holds a single summary for arrays and records, and a list of
# positional summaries for tuples.
# -----------------------------------------------------------------------------
@dataclass
class SchemaSummary:
    """Structured, render-ready description of a schema tree."""

    type: str
    description: str | None = None
    properties: dict[str, "SchemaSummary"] | None = None
    enum_values: list[str] | None = None
    items: "SchemaSummary | list[SchemaSummary] | None" = None
    union_options: list["SchemaSummary"] | None = None
    optional: bool = False
    nullable: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.properties is not None:
            data["properties"] = {
                name: child.to_dict() for name, child in self.properties.items()
            }
        if self.enum_values is not None:
            data["enumValues"] = list(self.enum_values)
        if isinstance(self.items, list):
            data["items"] = [item.to_dict() for item in self.items]
        elif self.items is not None:
            data["items"] = self.items.to_dict()
        if self.union_options is not None:
            data["unionOptions"] = [option.to_dict() for option in self.union_options]
        if self.optional:
            data["optional"] = True
        if self.nullable:
            data["nullable"] = True
        return data


# -----------------------------------------------------------------------------
# RouteDescriptor: one catalogued remote endpoint
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RouteDescriptor:
    """Metadata for one remote endpoint.  Documentation only, never enforced."""

    method: HttpMethod
    path: str                          # "service/item/{uuid}" (no leading slash)
    description: str
    auth_required: bool
    group: str | None = None           # "auth" / "service"
    notes: str | None = None
    input_schema: SchemaNode | None = None
    output_schema: SchemaNode | None = None


@dataclass
class RouteListing:
    """Result of filtering the catalogue."""

    routes: list[RouteDescriptor] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.routes)


# -----------------------------------------------------------------------------
# RequestDescriptor: what the caller of call_api asked for
# -----------------------------------------------------------------------------
# Built from tool arguments, consumed by core/dispatcher.py, then discarded.
# -----------------------------------------------------------------------------
@dataclass
class RequestDescriptor:
    path: str
    method: HttpMethod = "GET"
    query: dict[str, QueryValue] | None = None
    body: str | list | dict | None = None
    token: str | None = None
    headers: dict[str, str] | None = None
    timeout_ms: float | None = None


# -----------------------------------------------------------------------------
# SentRequest / ResponseDescriptor / CallResult: what actually happened
# -----------------------------------------------------------------------------
# Header mappings in both echoes are already masked (see core/dispatcher.py).
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SentRequest:
    method: str
    url: str
    path: str
    headers: dict[str, str]
    query: dict[str, QueryValue] | None
    body: Any
    timeout_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "path": self.path,
            "headers": dict(self.headers),
            "query": self.query,
            "body": self.body,
            "timeoutMs": self.timeout_ms,
        }


@dataclass(frozen=True)
class ResponseDescriptor:
    status: int
    status_text: str
    ok: bool                           # True for any 2xx status
    headers: dict[str, str]
    body: Any                          # parsed JSON, or None
    raw_text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "statusText": self.status_text,
            "ok": self.ok,
            "headers": dict(self.headers),
            "body": self.body,
            "rawText": self.raw_text,
        }


@dataclass(frozen=True)
class CallResult:
    request: SentRequest
    response: ResponseDescriptor

    def to_dict(self) -> dict[str, Any]:
        return {"request": self.request.to_dict(), "response": self.response.to_dict()}
