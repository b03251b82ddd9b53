"""restgate - MCP gateway to a PostgREST-style database API."""

__version__ = "0.1.0"
