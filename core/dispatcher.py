# =============================================================================
# core/dispatcher.py  —  Request Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns one RequestDescriptor into one HTTP exchange with the remote API
#   and normalizes what comes back into a CallResult.
#
# THE STEPS:
#   1. build_url()      prefix + relative path, resolved against the base URL,
#                       plus query parameters
#   2. build_headers()  base headers < configured defaults < per-call headers,
#                       then the Authorization header from the token
#   3. serialize_body() str as text/plain, lists and dicts as JSON
#   4. dispatch()       one attempt, bounded by the effective timeout
#   5. normalize        text body, best-effort JSON parse, masked headers
#
# ERRORS:
#   - empty path                  → ValueError
#   - timeout elapsed             → RequestTimeoutError
#   - network / DNS / TLS failure → the httpx exception, unchanged
#   - non-2xx status              → NOT an error; returned with ok=False
#
# No retries: the agent decides whether to call again.
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Mapping

import httpx

from core.config import ApiConfig, clamp_timeout
from core.models import CallResult, QueryValue, RequestDescriptor, ResponseDescriptor, SentRequest

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key"})
REDACTED = "***"


class RequestTimeoutError(Exception):
    """The HTTP exchange did not finish within the effective timeout."""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Request exceeded timeout of {timeout_ms}ms.")
        self.timeout_ms = timeout_ms


# =============================================================================
# URL construction
# =============================================================================
def normalize_relative_path(path: str, api_prefix: str) -> str:
    """Return `path` with a leading slash and without a redundant prefix.

    With prefix "/api", both "user/me" and "/api/user/me" become "/user/me".
    """
    trimmed = path if path.startswith("/") else f"/{path}"
    if api_prefix != "/" and _has_prefix(trimmed, api_prefix):
        remainder = trimmed[len(api_prefix):]
        return remainder if remainder.startswith("/") else f"/{remainder}"
    return trimmed


def _has_prefix(path: str, prefix: str) -> bool:
    # "/api" must not swallow the start of "/apiary"
    return path == prefix or path.startswith(prefix + "/") or path.startswith(prefix + "?")


def normalize_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_url(path: str, query: Mapping[str, QueryValue] | None, config: ApiConfig) -> httpx.URL:
    relative_path = normalize_relative_path(path, config.api_prefix)
    prefix = "" if config.api_prefix == "/" else config.api_prefix
    url = httpx.URL(config.base_url).join(f"{prefix}{relative_path}")

    if not query:
        return url

    pairs = list(url.params.multi_items())
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, normalize_query_value(entry)) for entry in value)
        else:
            pairs.append((key, normalize_query_value(value)))
    return url.copy_with(params=pairs)


# =============================================================================
# Headers
# =============================================================================
def build_headers(
    config: ApiConfig,
    extra_headers: Mapping[str, str] | None = None,
    token: str | None = None,
) -> httpx.Headers:
    """Assemble request headers; later sources win, keys are case-insensitive."""
    headers = httpx.Headers({
        "Accept": "application/json",
        "User-Agent": config.user_agent,
        "X-Requested-With": "XMLHttpRequest",
    })
    for record in (config.default_headers, extra_headers):
        for key, value in (record or {}).items():
            if value is not None:
                headers[key] = str(value)

    bearer = token if token is not None else config.default_token
    if bearer:
        headers["Authorization"] = bearer if bearer.startswith("Bearer ") else f"Bearer {bearer}"
    return headers


def mask_headers(headers: httpx.Headers | Mapping[str, str]) -> dict[str, str]:
    """Lower-case header names and hide the values of sensitive ones."""
    masked = {}
    for key, value in headers.items():
        name = key.lower()
        masked[name] = REDACTED if name in SENSITIVE_HEADERS else value
    return masked


# =============================================================================
# Body
# =============================================================================
def serialize_body(body: Any, headers: httpx.Headers) -> str | None:
    """Encode the body and set a Content-Type unless the caller already did."""
    if body is None:
        return None
    if isinstance(body, str):
        headers.setdefault("Content-Type", "text/plain")
        return body
    headers.setdefault("Content-Type", "application/json")
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def try_parse_json(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


# =============================================================================
# dispatch: the one network call
# =============================================================================
async def dispatch(
    request: RequestDescriptor,
    config: ApiConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CallResult:
    """Perform the HTTP exchange described by `request`.

    Args:
        request: What the caller asked for.
        config: Process-wide defaults (base URL, prefix, token, headers, timeout).
        transport: Optional httpx transport; tests pass an httpx.MockTransport.

    Returns:
        A CallResult echoing the (masked) request and the normalized response.
    """
    if not request.path:
        raise ValueError("Path is required.")

    url = build_url(request.path, request.query, config)
    timeout_ms = clamp_timeout(
        request.timeout_ms if request.timeout_ms is not None else config.timeout_ms,
        fallback=config.timeout_ms,
    )
    headers = build_headers(config, request.headers, request.token)
    content = serialize_body(request.body, headers)

    logger.debug(f"{request.method} {url} (timeout {timeout_ms}ms)")

    async with httpx.AsyncClient(transport=transport, timeout=timeout_ms / 1000) as client:
        try:
            response = await asyncio.wait_for(
                client.request(request.method, url, headers=headers, content=content),
                timeout=timeout_ms / 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(timeout_ms) from e

    raw_text = response.text
    return CallResult(
        request=SentRequest(
            method=request.method,
            url=str(url),
            path=normalize_relative_path(request.path, config.api_prefix),
            headers=mask_headers(headers),
            query=request.query,
            body=request.body,
            timeout_ms=timeout_ms,
        ),
        response=ResponseDescriptor(
            status=response.status_code,
            status_text=response.reason_phrase,
            ok=response.is_success,
            headers=mask_headers(response.headers),
            body=try_parse_json(raw_text),
            raw_text=raw_text,
        ),
    )
