"""Exception hierarchy for restgate.

Every module imports from here. The hierarchy is:

    GatewayError
    ├── ConfigError
    └── ToolError(title, message, details)
        ├── ValidationFailure
        ├── RemoteCallFailure(status, body)
        ├── RpcUnavailableFailure(query, query_type, attempts)
        └── UnknownToolFailure(name)

``ToolError.title`` is the short public label placed in the ``error``
field of a tool-response envelope.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for all restgate errors."""


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(GatewayError):
    """Invalid or incomplete configuration."""


# ─── Tool Errors ──────────────────────────────────────────────


class ToolError(GatewayError):
    """Base for failures surfaced to tool callers."""

    title = "Tool execution failed"

    def __init__(
        self,
        message: str,
        *,
        title: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if title is not None:
            self.title = title
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationFailure(ToolError):
    """Bad identifier, date or argument shape, caught before any network call."""

    title = "Invalid arguments"


class RemoteCallFailure(ToolError):
    """The backing service answered with a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"API request failed: {status} {body}".rstrip())


class RpcUnavailableFailure(ToolError):
    """Every SQL execution procedure was tried and none accepted the query."""

    title = "SQL execution RPC functions not available"

    def __init__(
        self,
        query: str,
        query_type: str,
        attempts: list[tuple[str, RemoteCallFailure]],
        setup_instructions: str = "",
    ) -> None:
        self.query = query
        self.query_type = query_type
        self.attempts = attempts
        self.setup_instructions = setup_instructions
        names = ", ".join(procedure for procedure, _ in attempts)
        super().__init__(
            f"Please create one of the SQL execution functions in your database "
            f"(tried: {names})"
        )


class UnknownToolFailure(ToolError):
    """No handler is registered under the requested tool name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}", details={"tool": name})
