# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (both tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the MCP tools an agent can call.  Each tool is a thin wrapper
#   around core/: fetch one GraphRecord, render it, return Markdown text.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name via MCP (e.g., "get_graph_summary")
#   2. FastMCP validates the arguments against the declared input schema
#   3. The tool fetches the graph (core/graph_api.py → fetch_graph)
#   4. The tool renders it (core/formatting.py → render_detailed / render_summary)
#   5. The agent receives Markdown, or an error result with isError=true
#
# TOOLS:
#   - get_graph_data     → full tables + statistics
#   - get_graph_summary  → short overview, optionally followed by the full view
#   Both are read-only.
#
# SERVER CONTEXT:
#   create_server() builds a ServerContext (settings, column markers, one
#   shared httpx client) and hands it to the tools.  The FastMCP lifespan
#   closes the client when the server shuts down.
#
# RUNNING THIS SERVER:
#     a) Through the entry point:  python main.py
#     b) Standalone:               python -m tools.mcp_server
# =============================================================================

import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.columns import ColumnMatcher
from core.formatting import render_detailed, render_summary
from core.graph_api import FetchError, build_client, fetch_graph
from core.models import GraphRecord
from core.settings import Settings

SERVER_NAME = "pythagraph-red-server"
SERVER_VERSION = "0.1.0"

logger = logging.getLogger("tools.mcp_server")

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT is the MCP transport, and anything else written
# there would corrupt the JSON-RPC stream.
#
# ANSI colors:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status/progress messages
# =============================================================================
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the size and heading of a rendered response in GREEN, then return it."""
    heading = text.split("\n", 1)[0]
    logger.info(f"{_GREEN}  ← {tool_name} response: {len(text)} chars, {heading!r}{_RESET}")
    return text


# =============================================================================
# Server context
# =============================================================================
class ServerContext:
    """Per-process state shared by the tool handlers.

    Holds the settings, the column markers derived from them and a lazily
    opened httpx client.  The client is reopened if a previous session closed
    it, so one context can outlive several MCP sessions.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.columns = ColumnMatcher.from_settings(settings)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = build_client(self.settings, transport=self._transport)
        return self._client

    async def fetch(self, graph_id: str) -> GraphRecord:
        return await fetch_graph(graph_id, settings=self.settings, client=self.client)

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


async def graph_data_text(context: ServerContext, graph_id: str) -> str:
    """Fetch a graph and render the detailed view."""
    record = await context.fetch(graph_id)
    _log_status(f"Fetched '{record.name}' with {record.row_count} rows")
    return render_detailed(record, columns=context.columns)


async def graph_summary_text(context: ServerContext, graph_id: str, include_details: bool = False) -> str:
    """Fetch a graph and render the summary view."""
    record = await context.fetch(graph_id)
    _log_status(f"Fetched '{record.name}' with {record.row_count} rows")
    return render_summary(record, include_details, columns=context.columns)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
def create_server(
    settings: Optional[Settings] = None,
    *,
    context: Optional[ServerContext] = None,
) -> FastMCP:
    """Build the FastMCP app with both graph tools registered.

    Args:
        settings: Used to build a fresh ServerContext when none is given.
        context: An existing context (tests pass one with a mock transport).
    """
    if context is None:
        context = ServerContext(settings or Settings.from_env())

    @asynccontextmanager
    async def lifespan(server: FastMCP):
        try:
            yield context
        finally:
            await context.aclose()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    # =========================================================================
    # TOOL 1: get_graph_data
    # =========================================================================
    @mcp.tool()
    async def get_graph_data(
        graphId: Annotated[
            str,
            Field(min_length=1, description="The unique identifier for the graph to retrieve"),
        ],
    ) -> str:
        """Retrieve detailed graph data from the Pythagraph RED API.

        Returns Markdown with the graph's description, basic information,
        data sources, the full data table and statistics (sum, mean, max,
        min, count) over its value column.
        """
        _log_request("get_graph_data", graphId=graphId)
        try:
            text = await graph_data_text(context, graphId)
        except FetchError as exc:
            _log_status(str(exc))
            raise ToolError(str(exc)) from exc
        return _log_response("get_graph_data", text)

    # =========================================================================
    # TOOL 2: get_graph_summary
    # =========================================================================
    @mcp.tool()
    async def get_graph_summary(
        graphId: Annotated[
            str,
            Field(min_length=1, description="The unique identifier for the graph to get summary"),
        ],
        includeDetails: Annotated[
            bool,
            Field(description="Append the full data table and statistics below the summary"),
        ] = False,
    ) -> str:
        """Get a concise summary of a graph from the Pythagraph RED API.

        Returns the key facts plus the best, worst and total of the value
        column.  Use includeDetails=true to append the full detailed view.
        """
        _log_request("get_graph_summary", graphId=graphId, includeDetails=includeDetails)
        try:
            text = await graph_summary_text(context, graphId, includeDetails)
        except FetchError as exc:
            _log_status(str(exc))
            raise ToolError(str(exc)) from exc
        return _log_response("get_graph_summary", text)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from dotenv import load_dotenv

    load_dotenv()
    _settings = Settings.from_env()
    configure_logging(_settings.log_level)
    create_server(_settings).run()
