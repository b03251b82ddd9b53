"""Tool dispatcher: route a tool call to its handler and wrap the outcome.

Every call goes Received -> Validating -> Executing -> Responding and
yields exactly one :class:`ToolResult`. The dispatcher keeps no state
between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from restgate.backend.client import RestClient
from restgate.core.errors import (
    RemoteCallFailure,
    RpcUnavailableFailure,
    ToolError,
    UnknownToolFailure,
)
from restgate.tools import handlers
from restgate.tools.arguments import (
    BusinessAnalyticsArgs,
    DeleteDataArgs,
    ExecuteSqlArgs,
    GetTableDataArgs,
    GetTableSchemaArgs,
    InsertDataArgs,
    ListTablesArgs,
    ToolArguments,
    UpdateDataArgs,
    decode_arguments,
)
from restgate.tools.base import ToolCall, ToolDefinition, ToolResult
from restgate.tools.catalog import TOOL_DEFINITIONS

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from restgate.config.schema import GatewayConfig

    Handler = Callable[[handlers.ToolContext, Any], Awaitable[Any]]

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Tool execution failed"


@dataclass(frozen=True, slots=True)
class ToolRoute:
    """How one tool is decoded, executed and labelled on failure."""

    arguments: type[ToolArguments]
    handler: Handler
    failure_title: str


ROUTES: dict[str, ToolRoute] = {
    "list_tables": ToolRoute(ListTablesArgs, handlers.list_tables, GENERIC_FAILURE),
    "get_table_schema": ToolRoute(
        GetTableSchemaArgs, handlers.get_table_schema, "Failed to get table schema"
    ),
    "execute_sql": ToolRoute(ExecuteSqlArgs, handlers.execute_sql, "SQL execution failed"),
    "get_table_data": ToolRoute(
        GetTableDataArgs, handlers.get_table_data, "Failed to get table data"
    ),
    "insert_data": ToolRoute(InsertDataArgs, handlers.insert_data, "Failed to insert data"),
    "update_data": ToolRoute(UpdateDataArgs, handlers.update_data, "Failed to update data"),
    "delete_data": ToolRoute(DeleteDataArgs, handlers.delete_data, "Failed to delete data"),
    "get_business_analytics": ToolRoute(
        BusinessAnalyticsArgs, handlers.get_business_analytics, "Analytics failed"
    ),
}


def error_payload(exc: Exception, failure_title: str | None = None) -> dict[str, Any]:
    """Map any failure onto the public error envelope.

    ``failure_title`` labels backend and transport failures with the
    tool that hit them (e.g. "Failed to insert data").
    """
    if isinstance(exc, RpcUnavailableFailure):
        return {
            "error": exc.title,
            "message": exc.message,
            "query": exc.query,
            "query_type": exc.query_type,
            "attempts": [
                {"procedure": procedure, "status": failure.status, "message": failure.message}
                for procedure, failure in exc.attempts
            ],
            "setup_instructions": exc.setup_instructions,
        }
    if isinstance(exc, RemoteCallFailure):
        return {
            "error": failure_title or GENERIC_FAILURE,
            "message": exc.message,
            "status": exc.status,
        }
    if isinstance(exc, UnknownToolFailure):
        return {"error": GENERIC_FAILURE, "message": exc.message}
    if isinstance(exc, ToolError):
        return {"error": exc.title, "message": exc.message, **exc.details}
    if isinstance(exc, httpx.HTTPError):
        return {
            "error": failure_title or GENERIC_FAILURE,
            "message": str(exc) or type(exc).__name__,
        }
    return {"error": GENERIC_FAILURE, "message": str(exc) or type(exc).__name__}


class ToolDispatcher:
    """Stateless router from tool name to handler.

    Usage::

        dispatcher = ToolDispatcher(config)
        result = await dispatcher.dispatch("list_tables", {})
        print(result.text)
    """

    def __init__(self, config: GatewayConfig, client: RestClient | None = None) -> None:
        self._config = config
        self._context = handlers.ToolContext(
            client=client or RestClient(config), config=config
        )

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def definitions(self) -> tuple[ToolDefinition, ...]:
        return TOOL_DEFINITIONS

    def __contains__(self, name: str) -> bool:
        return name in ROUTES

    async def call(self, tool_call: ToolCall) -> ToolResult:
        return await self.dispatch(tool_call.name, tool_call.arguments)

    async def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Execute one tool call. Never raises for tool failures."""
        route = ROUTES.get(name)
        failure_title = route.failure_title if route else None
        try:
            if route is None:
                raise UnknownToolFailure(name)
            args = decode_arguments(name, route.arguments, arguments)
            payload = await route.handler(self._context, args)
        except ToolError as e:
            logger.info("Tool %s failed: %s", name, e)
            return ToolResult.from_payload(error_payload(e, failure_title), is_error=True)
        except httpx.HTTPError as e:
            logger.warning("Tool %s could not reach the backing service: %s", name, e)
            return ToolResult.from_payload(error_payload(e, failure_title), is_error=True)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return ToolResult.from_payload(error_payload(e), is_error=True)

        logger.info("Tool %s succeeded", name)
        return ToolResult.from_payload(payload)
