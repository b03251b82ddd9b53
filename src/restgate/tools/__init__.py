"""Tool layer: catalog, typed arguments, handlers and the dispatcher."""

from restgate.tools.base import TextBlock, ToolCall, ToolDefinition, ToolResult
from restgate.tools.dispatcher import ToolDispatcher, error_payload

__all__ = [
    "TextBlock",
    "ToolCall",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolResult",
    "error_payload",
]
