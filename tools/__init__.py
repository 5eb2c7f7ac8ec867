# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP host and core/:
#     1. Declares the tool signatures (FastMCP validates arguments against them)
#     2. Calls core/ to list routes or dispatch a request
#     3. Shapes results into text + structured content
#     4. Turns local exceptions into tool errors
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build URLs, headers or bodies (core/dispatcher.py)
#   - They do NOT know the endpoint list (core/catalog.py)
# =============================================================================
