# =============================================================================
# core/renderer.py  —  Plaintext rendering for agents
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns SchemaSummary trees, route descriptors and call results into the
#   short plaintext blocks that the MCP tools return as text content.
#
# A rendered schema looks like this:
#
#     - type: object
#     - properties:
#       email:
#         - type: string
#         - description: Registered email address
#
# The output is deterministic: same summary in, same lines out.
# =============================================================================

import json
from typing import Any

from core.models import CallResult, RouteDescriptor, SchemaSummary
from core.summarizer import summarize_schema

PREVIEW_LIMIT = 600
_STEP = "  "


def render_schema_summary(summary: SchemaSummary | None, indent: str = _STEP) -> list[str]:
    """Render a summary into an ordered list of indented lines."""
    if summary is None:
        return [f"{indent}(none)"]

    lines = [f"{indent}- type: {summary.type}"]
    if summary.description:
        lines.append(f"{indent}- description: {summary.description}")
    if summary.enum_values:
        lines.append(f"{indent}- enum: [{', '.join(summary.enum_values)}]")
    if summary.optional:
        lines.append(f"{indent}- optional: true")
    if summary.nullable:
        lines.append(f"{indent}- nullable: true")

    nested = indent + _STEP * 2

    if summary.properties:
        lines.append(f"{indent}- properties:")
        for name, child in summary.properties.items():
            lines.append(f"{indent}{_STEP}{name}:")
            lines.extend(render_schema_summary(child, nested))

    if isinstance(summary.items, list):
        lines.append(f"{indent}- items:")
        for index, item in enumerate(summary.items):
            lines.append(f"{indent}{_STEP}[{index}]:")
            lines.extend(render_schema_summary(item, nested))
    elif summary.items is not None:
        lines.append(f"{indent}- items:")
        lines.extend(render_schema_summary(summary.items, indent + _STEP))

    if summary.union_options:
        lines.append(f"{indent}- union options:")
        for index, option in enumerate(summary.union_options):
            lines.append(f"{indent}{_STEP}[{index}]:")
            lines.extend(render_schema_summary(option, nested))

    return lines


def format_schema_summary(summary: SchemaSummary | None, indent: str = _STEP) -> str:
    return "\n".join(render_schema_summary(summary, indent))


def format_route_summary(route: RouteDescriptor) -> str:
    """Render one catalogue entry, including its input and output schemas."""
    lines = [f"{route.method} /{route.path}"]
    if route.description:
        lines.append(f"- {route.description}")
    lines.append("auth: required" if route.auth_required else "auth: public")
    if route.group:
        lines.append(f"group: {route.group}")
    if route.notes:
        lines.append(f"notes: {route.notes}")
    lines.append("input:")
    lines.append(format_schema_summary(summarize_schema(route.input_schema)))
    lines.append("output:")
    lines.append(format_schema_summary(summarize_schema(route.output_schema)))
    return "\n".join(lines)


def format_call_summary(result: CallResult) -> str:
    """Three-line recap of a call: request line, status line, body preview."""
    request, response = result.request, result.response
    lines = [
        f"{request.method} {request.path}",
        f"→ {response.status} {response.status_text}",
    ]
    body = response.body if response.body is not None else response.raw_text
    preview = create_preview(body)
    if preview:
        lines.append(f"Body preview: {preview}")
    return "\n".join(lines)


def create_preview(body: Any, limit: int = PREVIEW_LIMIT) -> str:
    if body is None:
        return ""
    if isinstance(body, str):
        text = body
    else:
        text = json.dumps(body, separators=(",", ":"), ensure_ascii=False, default=str)
    if len(text) > limit:
        return f"{text[:limit]}…"
    return text
