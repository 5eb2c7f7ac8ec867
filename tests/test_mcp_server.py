import asyncio
import logging

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.config import ApiConfig
from tools.mcp_server import build_instructions, create_server

CONFIG = ApiConfig(base_url="http://api.test", api_prefix="/api")


def _server(handler=None):
    def default_handler(req):
        return httpx.Response(200, json={"id": 7, "email": "ada@example.com"})

    return create_server(CONFIG, transport=httpx.MockTransport(handler or default_handler))


def _call(server, tool, arguments):
    async def run():
        async with Client(server) as client:
            return await client.call_tool(tool, arguments)

    return asyncio.run(run())


def _text(result):
    return result.content[0].text


class TestInstructions:
    def test_mentions_base_url_and_prefix(self):
        text = build_instructions(CONFIG)
        assert "Current base URL: http://api.test" in text
        assert "API prefix: /api" in text


class TestListApiRoutesTool:
    def test_group_service(self):
        result = _call(_server(), "list_api_routes", {"group": "service"})
        assert result.structured_content["total"] == 7
        paths = [route["path"] for route in result.structured_content["routes"]]
        assert "auth/login" not in paths
        assert _text(result).startswith("POST /service/coloring\n")
        assert "\n\nPOST /service/pbn\n" in _text(result)

    def test_filter_pbn(self):
        result = _call(_server(), "list_api_routes", {"filter": "pbn"})
        assert result.structured_content["total"] == 1
        route = result.structured_content["routes"][0]
        assert (route["method"], route["path"]) == ("POST", "service/pbn")
        assert "- enum: [pixel, polygon]" in _text(result)

    def test_no_match_message(self):
        result = _call(_server(), "list_api_routes", {"filter": "nothing-like-this"})
        assert _text(result) == "No routes matched the provided filters."
        assert result.structured_content == {"routes": [], "total": 0}

    def test_filter_is_trimmed(self):
        result = _call(_server(), "list_api_routes", {"filter": "  PBN  "})
        assert result.structured_content["total"] == 1

    def test_blank_filter_is_rejected(self):
        with pytest.raises(ToolError):
            _call(_server(), "list_api_routes", {"filter": "   "})


class TestCallApiTool:
    def test_defaults_to_get(self):
        captured = []

        def handler(req):
            captured.append(req)
            return httpx.Response(200, json={"id": 7})

        result = _call(_server(handler), "call_api", {"path": "/api/user/me", "token": "abc123"})

        assert captured[0].method == "GET"
        assert str(captured[0].url) == "http://api.test/api/user/me"
        assert captured[0].headers["Authorization"] == "Bearer abc123"
        assert _text(result) == 'GET /user/me\n→ 200 OK\nBody preview: {"id":7}'

        structured = result.structured_content
        assert structured["request"]["path"] == "/user/me"
        assert structured["request"]["headers"]["authorization"] == "***"
        assert structured["response"]["ok"] is True
        assert structured["response"]["statusText"] == "OK"

    def test_post_with_json_body(self):
        captured = []

        def handler(req):
            captured.append(req)
            return httpx.Response(201, json={"key": "k", "status": "pending", "created": "now"})

        result = _call(_server(handler), "call_api", {
            "method": "POST",
            "path": "service/ai/image",
            "body": {"prompt": "a cat", "aspectRatio": "1x1"},
            "query": {"tags": ["a", "b"], "draft": True},
        })

        assert captured[0].content == b'{"prompt":"a cat","aspectRatio":"1x1"}'
        assert captured[0].headers["Content-Type"] == "application/json"
        assert str(captured[0].url).endswith("?tags=a&tags=b&draft=1")
        assert result.structured_content["response"]["status"] == 201

    def test_remote_error_is_not_a_tool_error(self):
        def handler(req):
            return httpx.Response(500, text="boom")

        result = _call(_server(handler), "call_api", {"path": "user/me"})
        assert result.is_error is False
        assert result.structured_content["response"]["ok"] is False
        assert _text(result) == "GET /user/me\n→ 500 Internal Server Error\nBody preview: boom"

    def test_max_timeout_is_accepted(self):
        result = _call(_server(), "call_api", {"path": "user/me", "timeout_ms": 120000})
        assert result.structured_content["request"]["timeoutMs"] == 120000

    def test_timeout_above_max_is_rejected(self):
        with pytest.raises(ToolError):
            _call(_server(), "call_api", {"path": "user/me", "timeout_ms": 120001})

    def test_unknown_method_is_rejected(self):
        with pytest.raises(ToolError):
            _call(_server(), "call_api", {"path": "user/me", "method": "TRACE"})

    def test_transport_failure_becomes_tool_error(self):
        def handler(req):
            raise httpx.ConnectError("connection refused", request=req)

        with pytest.raises(ToolError, match="connection refused"):
            _call(_server(handler), "call_api", {"path": "user/me"})

    def test_login_body_never_reaches_the_log(self, caplog):
        with caplog.at_level(logging.INFO):
            result = _call(_server(), "call_api", {
                "method": "POST",
                "path": "auth/login",
                "body": {"email": "a@b.c", "password": "hunter2-secret"},
                "token": "tok-secret",
            })

        assert result.structured_content["request"]["body"]["password"] == "hunter2-secret"
        assert "call_api called with" in caplog.text
        assert "body='dict(2)'" in caplog.text
        assert "hunter2-secret" not in caplog.text
        assert "tok-secret" not in caplog.text
