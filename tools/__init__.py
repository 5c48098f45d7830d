# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers.
#
# tools/ is the translation layer between MCP and core/:
#     1. Declares each tool's name, description and input schema
#     2. Calls core/ to fetch and render the graph
#     3. Turns FetchError into an MCP error result
#
# Business logic (parsing, statistics, Markdown) stays in core/.
# =============================================================================
