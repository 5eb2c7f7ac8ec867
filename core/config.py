# =============================================================================
# core/config.py  —  Process-wide configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the MCP_API_* environment variables once at startup and freezes
#   them into an ApiConfig.  The dispatcher and the tool layer receive the
#   config explicitly; nothing mutates it afterwards.
#
# ENVIRONMENT VARIABLES:
#   MCP_API_BASE_URL   Remote API origin (falls back to APP_URL, then
#                      http://localhost).  Trailing slash is stripped.
#   MCP_API_PREFIX     Path prefix for every call (default "/api").
#   MCP_API_TOKEN      Default bearer token, used when call_api gets none.
#   MCP_API_TIMEOUT    Default timeout in ms (default 60000), clamped to
#                      [1000, 120000].
#   MCP_API_HEADERS    JSON object of extra headers sent with every request.
#
#   main.py calls load_dotenv() first, so a local .env file works too.
# =============================================================================

import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

SERVER_NAME = "mimi-panda-mcp-server"
SERVER_VERSION = "1.0.0"

MIN_TIMEOUT_MS = 1000
MAX_TIMEOUT_MS = 120000
DEFAULT_TIMEOUT_MS = 60000

DEFAULT_BASE_URL = "http://localhost"
DEFAULT_API_PREFIX = "/api"


def clamp_timeout(value: float | None, fallback: int = DEFAULT_TIMEOUT_MS) -> int:
    """Clamp a timeout to [MIN_TIMEOUT_MS, MAX_TIMEOUT_MS].

    Missing, non-finite and non-positive values fall back to `fallback`.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        value = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(value) or value <= 0:
        return fallback
    return int(max(MIN_TIMEOUT_MS, min(MAX_TIMEOUT_MS, value)))


def normalize_base_url(url: str | None) -> str:
    if not url:
        return DEFAULT_BASE_URL
    return url[:-1] if url.endswith("/") else url


def normalize_api_prefix(prefix: str | None) -> str:
    if not prefix:
        return DEFAULT_API_PREFIX
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    if prefix.endswith("/") and prefix != "/":
        prefix = prefix[:-1]
    return prefix


def parse_header_record(serialized: str | None) -> dict[str, str]:
    """Parse MCP_API_HEADERS.  Anything but a JSON object yields {}."""
    if not serialized:
        return {}
    try:
        parsed = json.loads(serialized)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse MCP_API_HEADERS JSON: {e}")
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Ignoring MCP_API_HEADERS: expected a JSON object")
        return {}
    return {key: "" if value is None else _header_text(value) for key, value in parsed.items()}


def _header_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def sanitize_env_string(value: str | None) -> str | None:
    if value and value.strip():
        return value.strip()
    return None


def _parse_timeout(raw: str | None) -> int:
    if raw is None:
        return DEFAULT_TIMEOUT_MS
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring MCP_API_TIMEOUT={raw!r}: not an integer")
        return DEFAULT_TIMEOUT_MS
    return clamp_timeout(value)


@dataclass(frozen=True)
class ApiConfig:
    """Immutable settings shared by every tool call."""

    base_url: str = DEFAULT_BASE_URL
    api_prefix: str = DEFAULT_API_PREFIX
    default_token: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_timeout_ms: int = MAX_TIMEOUT_MS

    @property
    def user_agent(self) -> str:
        return f"{SERVER_NAME}/{SERVER_VERSION}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ApiConfig":
        env = os.environ if environ is None else environ
        return cls(
            base_url=normalize_base_url(
                env.get("MCP_API_BASE_URL") or env.get("APP_URL") or DEFAULT_BASE_URL
            ),
            api_prefix=normalize_api_prefix(env.get("MCP_API_PREFIX", DEFAULT_API_PREFIX)),
            default_token=sanitize_env_string(env.get("MCP_API_TOKEN")),
            default_headers=parse_header_record(env.get("MCP_API_HEADERS")),
            timeout_ms=_parse_timeout(env.get("MCP_API_TIMEOUT")),
        )
