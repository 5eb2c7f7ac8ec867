# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (both tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Mimi Panda API to an agent as two MCP tools.  Each tool is a
#   thin wrapper around core/ functions: it validates arguments, calls into
#   core/, and shapes the result into text + structured content.
#
# THE TOOLS:
#   - list_api_routes  → read-only; filters the route catalogue and renders
#                        every matching route with its input/output schema
#   - call_api         → sends one HTTP request to the remote API and returns
#                        a short preview plus the full request/response echo
#
# ERROR CONTRACT:
#   Any local failure (missing path, timeout, DNS error...) is converted into
#   a ToolError so the agent sees an error result instead of a broken
#   transport.  A non-2xx HTTP status is NOT a failure; it comes back as data
#   with ok=false.
#
# RUNNING THIS SERVER:
#   python main.py       (stdio transport; see main.py)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field, StringConstraints

from core.catalog import list_routes, route_summary
from core.config import MAX_TIMEOUT_MS, SERVER_NAME, ApiConfig
from core.dispatcher import REDACTED, dispatch, mask_headers
from core.models import HttpMethod, QueryValue, RequestDescriptor
from core.renderer import format_call_summary, format_route_summary

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout is the MCP stdio transport, and anything printed
# there would corrupt the JSON-RPC stream.
#
#   CYAN   incoming tool calls (tokens and sensitive headers masked, bodies
#          reduced to type and size)
#   YELLOW intermediate status
#   GREEN  responses
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_error(tool_name: str, message: str) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} failed: {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the structured result as compact JSON in GREEN, then return it."""
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(result, separators=(',', ':'), default=str)}{_RESET}"
    )
    return result


def _describe_body(body: Any) -> str | None:
    """Summarize a request body for the log without its contents."""
    if body is None:
        return None
    size = len(body) if isinstance(body, (str, list, dict)) else None
    return f"{type(body).__name__}({size})" if size is not None else type(body).__name__


def _tool_result(text: str, structured: dict[str, Any]) -> ToolResult:
    return ToolResult(
        content=[TextContent(type="text", text=text)],
        structured_content=structured,
    )


# =============================================================================
# Argument types
# =============================================================================
# FastMCP turns these annotations into the JSON schema the agent sees and
# validates incoming arguments against them before the tool body runs.
# =============================================================================
NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TimeoutMs = Annotated[int, Field(gt=0, le=MAX_TIMEOUT_MS)]


def build_instructions(config: ApiConfig) -> str:
    return "\n".join([
        "Interact with the Mimi Panda API.",
        f"Current base URL: {config.base_url}",
        f"API prefix: {config.api_prefix}",
        "Call list_api_routes to inspect request parameters, including all enum/option "
        "values, before invoking call_api.",
        "Obtain API tokens by logging into the Mimi Panda application and copying the token "
        "from your account settings. https://mimi-panda.com/app/profile",
        "Supply that token via the token field on subsequent call_api invocations; the server "
        'automatically prefixes it with "Bearer ".',
        'If you set the Authorization header manually, include the "Bearer " prefix yourself.',
        "Set MCP_API_BASE_URL, MCP_API_PREFIX, MCP_API_TOKEN, MCP_API_HEADERS and "
        "MCP_API_TIMEOUT (ms) to override defaults.",
    ])


# =============================================================================
# Server factory
# =============================================================================
# The config is read once (main.py) and captured by the tool closures below.
# `transport` lets tests route call_api to an httpx.MockTransport.
# =============================================================================
def create_server(
    config: ApiConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    mcp = FastMCP(SERVER_NAME, instructions=build_instructions(config))

    # =========================================================================
    # TOOL 1: list_api_routes
    # =========================================================================
    @mcp.tool()
    def list_api_routes(
        filter: Annotated[
            NonEmptyText | None,
            Field(description="Optional case-insensitive filter applied to method, path, "
                              "description or group."),
        ] = None,
        group: Annotated[
            NonEmptyText | None,
            Field(description="Filter by logical group (auth, service)."),
        ] = None,
    ) -> ToolResult:
        """Return the curated list of Mimi Panda API routes.

        WHEN TO CALL THIS: Before call_api, to learn the method, path and the
        exact request fields (including every enum option) of an endpoint.

        Returns:
            Text: one block per route (method, path, auth, group, input and
            output schema outline), separated by blank lines.
            Structured: {"routes": [...], "total": n}
        """
        _log_request("list_api_routes", filter=filter, group=group)

        listing = list_routes(filter=filter, group=group)
        _log_status(f"Matched {listing.total} route(s)")

        if listing.routes:
            text = "\n\n".join(format_route_summary(route) for route in listing.routes)
        else:
            text = "No routes matched the provided filters."

        structured = {
            "routes": [route_summary(route) for route in listing.routes],
            "total": listing.total,
        }
        _log_response("list_api_routes", {"total": listing.total})
        return _tool_result(text, structured)

    # =========================================================================
    # TOOL 2: call_api
    # =========================================================================
    @mcp.tool()
    async def call_api(
        path: Annotated[
            str,
            Field(min_length=1, description="Path relative to the api prefix. Example: service/pbn"),
        ],
        method: Annotated[
            HttpMethod,
            Field(description="HTTP verb to use. Defaults to GET."),
        ] = "GET",
        query: Annotated[
            dict[str, QueryValue] | None,
            Field(description="Optional query string parameters. Lists repeat the key; "
                              "booleans are sent as 1/0."),
        ] = None,
        body: Annotated[
            str | list[Any] | dict[str, Any] | None,
            Field(description="Optional request payload. Objects/arrays will be JSON-encoded "
                              "automatically."),
        ] = None,
        token: Annotated[
            str | None,
            Field(description="Optional API token. Pass the raw token returned by auth/login; "
                              'this server automatically prefixes it with "Bearer ". '
                              "Uses MCP_API_TOKEN when omitted."),
        ] = None,
        headers: Annotated[
            dict[str, str] | None,
            Field(description="Additional headers to send with the request."),
        ] = None,
        timeout_ms: Annotated[
            TimeoutMs | None,
            Field(description=f"Override the default timeout (ms). Max {MAX_TIMEOUT_MS}."),
        ] = None,
    ) -> ToolResult:
        """Send an HTTP request to a Mimi Panda endpoint (prefixed with MCP_API_PREFIX).

        WHEN TO CALL THIS: After list_api_routes told you which path, method
        and body the endpoint expects.  Any path is accepted; the route list
        is guidance, not a whitelist.

        Returns:
            Text: "<METHOD> <path>", "→ <status> <statusText>" and a body
            preview of at most 600 characters.
            Structured: {"request": {...}, "response": {...}} where
            response.ok is false for non-2xx statuses.
        """
        _log_request(
            "call_api",
            method=method,
            path=path,
            query=query,
            body=_describe_body(body),
            token=REDACTED if token else None,
            headers=mask_headers(headers) if headers else None,
            timeout_ms=timeout_ms,
        )

        request = RequestDescriptor(
            method=method,
            path=path,
            query=query,
            body=body,
            token=token,
            headers=headers,
            timeout_ms=timeout_ms,
        )
        try:
            result = await dispatch(request, config, transport=transport)
        except Exception as e:
            message = str(e) or f"Failed to call API: {e!r}"
            _log_error("call_api", message)
            raise ToolError(message) from e

        _log_status(f"{result.response.status} {result.response.status_text}")
        structured = result.to_dict()
        _log_response("call_api", {
            "url": result.request.url,
            "status": result.response.status,
            "ok": result.response.ok,
        })
        return _tool_result(format_call_summary(result), structured)

    return mcp

