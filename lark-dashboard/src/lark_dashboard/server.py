"""Lark Dashboard MCP Server — entry point.

Registers all tools from the tools/ directory and starts the MCP server.

Usage:
    lark-dashboard-mcp                  # via installed script
    python -m lark_dashboard.server     # direct run

Environment variables:
    LARK_API_KEY     — Tenant access token (fallback: LARK_TENANT_ACCESS_TOKEN)
    LARK_REGION      — sg | cn | us (default: sg)
    LARK_API_URL     — Explicit API base URL, overrides LARK_REGION
    LARK_LOGGING     — Log every API request at INFO level
    LARK_LOG_LEVEL   — Root log level for the server process (default: WARNING)

See lark_dashboard.client for the timeout and retry settings.
"""

import logging
import os
import sys

from mcp.server.fastmcp import FastMCP

from .tools import blocks, dashboards
from .utils import env_flag

mcp = FastMCP(
    "lark-dashboard",
    instructions="Lark Dashboard MCP Server — create dashboards and add chart, metrics, "
                 "view, text, list and layout blocks to them, or describe a block in plain language",
)

# Register all tool modules
dashboards.register_tools(mcp)
blocks.register_tools(mcp)


def main():
    """Run the MCP server (stdio transport)."""
    # stdout carries the MCP protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("LARK_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if env_flag(os.environ.get("LARK_LOGGING")):
        logging.getLogger("lark_dashboard").setLevel(logging.INFO)
    mcp.run()


if __name__ == "__main__":
    main()
