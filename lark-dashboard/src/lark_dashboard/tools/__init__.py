"""MCP tool modules. Each exposes register_tools(mcp)."""
