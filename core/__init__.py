# =============================================================================
# core/__init__.py
# =============================================================================
# Fetching and formatting logic for Pythagraph RED graphs.
#
# Nothing in this package imports FastMCP.  The formatter is pure Python and
# the fetcher only needs httpx and pydantic, so every module here can be
# tested without an MCP session.
# =============================================================================
