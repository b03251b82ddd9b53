"""HTTP surface: info, health, tool endpoints and the MCP SSE mount."""
