"""Tool data types: definitions, calls and results.

A :class:`ToolResult` is the only thing a caller ever receives for a
:class:`ToolCall`. Its text blocks hold JSON rendered with two-space
indentation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from mcp import types


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool, as advertised to callers."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_mcp(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool invocation received from a caller."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TextBlock:
    text: str
    type: str = "text"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Result envelope for one tool call."""

    content: tuple[TextBlock, ...]
    is_error: bool = False

    @classmethod
    def from_payload(cls, payload: Any, *, is_error: bool = False) -> ToolResult:
        text = json.dumps(payload, indent=2, default=str)
        return cls(content=(TextBlock(text=text),), is_error=is_error)

    @property
    def text(self) -> str:
        """All text blocks joined; a single block in practice."""
        return "\n".join(block.text for block in self.content)

    def payload(self) -> Any:
        """Parse the first block back into a JSON value."""
        return json.loads(self.content[0].text)

    def to_mcp(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=b.text) for b in self.content],
            isError=self.is_error,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": b.type, "text": b.text} for b in self.content],
            "isError": self.is_error,
        }
