# =============================================================================
# main.py  —  Entry Point for the Pythagraph RED MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#   (or the installed console script: pythagraph-red-mcp)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (PYTHAGRAPH_* settings)
#   2. Builds Settings and configures stderr logging
#   3. Creates the FastMCP server (tools/mcp_server.py)
#   4. Serves MCP over stdio until the client disconnects
#
# EXIT CODES:
#   0  normal shutdown (including Ctrl-C)
#   1  the server could not start or crashed
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.settings import Settings
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger("main")


def main() -> None:
    """Start the server on stdio; exit non-zero on unrecoverable failure."""
    load_dotenv()

    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        server = create_server(settings)
        logger.info("Pythagraph RED MCP Server running on stdio")
        server.run(transport="stdio")
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as exc:
        configure_logging()
        logger.error(f"Fatal error running server: {exc}")
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
