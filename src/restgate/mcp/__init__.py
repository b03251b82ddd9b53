"""MCP transport binding for the tool dispatcher."""
