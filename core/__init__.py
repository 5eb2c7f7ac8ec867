# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic of the Mimi Panda MCP server: schema
# nodes and their summaries, the route catalogue, configuration and the HTTP
# request dispatcher.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The only third-party library
#   used here is httpx (core/dispatcher.py), so everything except the
#   dispatcher can be exercised with no network and no MCP host.
# =============================================================================
