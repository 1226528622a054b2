"""Dashboard tools: create, list and delete dashboards in a Base."""

import json

from mcp.server.fastmcp import FastMCP

from ..client import APIError, get_client
from ..types import Dashboard
from ..validation import ValidationError


def register_tools(mcp: FastMCP):
    """Register dashboard management tools on the MCP server."""

    @mcp.tool()
    def create_dashboard(app_token: str, name: str) -> str:
        """Create a new, empty dashboard in a Lark Base.

        Args:
            app_token: Base app token (e.g. "FUVdb7bebaVLeMsKJgJlnsX2gzd")
            name: Dashboard name

        Returns:
            JSON with dashboard_id. Pass it to the create_*_block tools.
        """
        try:
            dashboard_id = get_client().create_dashboard(Dashboard(name=name, app_token=app_token))
        except (APIError, ValidationError) as e:
            return json.dumps({"success": False, "error": str(e)})
        return json.dumps({
            "success": True,
            "dashboard_id": dashboard_id,
            "message": "Dashboard created successfully",
        })

    @mcp.tool()
    def list_dashboards(app_token: str) -> str:
        """List all dashboards in a Base.

        Returns:
            JSON with count and the raw dashboard items.
        """
        try:
            dashboards = get_client().list_dashboards(app_token)
        except (APIError, ValidationError) as e:
            return json.dumps({"success": False, "error": str(e)})
        return json.dumps({"success": True, "count": len(dashboards), "dashboards": dashboards},
                          ensure_ascii=False)

    @mcp.tool()
    def delete_dashboard(app_token: str, dashboard_id: str) -> str:
        """Delete a dashboard and every block on it."""
        try:
            get_client().delete_dashboard(app_token, dashboard_id)
        except (APIError, ValidationError) as e:
            return json.dumps({"success": False, "error": str(e)})
        return json.dumps({"success": True, "message": "Dashboard deleted successfully"})
