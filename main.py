# =============================================================================
# main.py  —  Entry Point for the Mimi Panda MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py                (or the installed `mimi-panda-mcp` script)
#
# WHAT HAPPENS:
#   1. Loads a .env file, if present, into the environment
#   2. Reads MCP_API_* variables into an immutable ApiConfig (core/config.py)
#   3. Builds the FastMCP server with its two tools (tools/mcp_server.py)
#   4. Serves MCP over stdio until the host closes the pipe
#
# Failing to start the transport is the only fatal error: it is logged and
# the process exits with status 1.  Errors inside a tool call never reach
# this level.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Must run before ApiConfig.from_env() reads the environment.
load_dotenv()

from core.config import ApiConfig, SERVER_NAME
from tools.mcp_server import create_server


def format_startup_banner(config: ApiConfig) -> str:
    return f"[{SERVER_NAME}] Ready (base: {config.base_url}, prefix: {config.api_prefix})"


def main() -> None:
    config = ApiConfig.from_env()
    server = create_server(config)
    logging.info(format_startup_banner(config))
    try:
        server.run()
    except Exception:
        logging.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
