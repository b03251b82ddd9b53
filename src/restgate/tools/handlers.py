"""Tool handlers.

Each handler receives the shared :class:`ToolContext` and its decoded
argument model, performs semantic validation, issues its outbound calls
and returns a JSON-serialisable payload. Failures are raised as
:mod:`restgate.core.errors` exceptions and turned into error results by
the dispatcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from restgate.backend.client import RETURN_REPRESENTATION
from restgate.backend.query import (
    apply_default_limit,
    classify_statement,
    column_metadata_sql,
    filtered_path,
    select_path,
    sql_attempts,
    table_path,
)
from restgate.core.errors import RemoteCallFailure, RpcUnavailableFailure
from restgate.core.validation import (
    require_date,
    require_identifier,
    require_row_data,
    require_sql,
    require_where_clause,
)
from restgate.tools.analytics import compute_analytics
from restgate.tools.catalog import KNOWN_TABLES

if TYPE_CHECKING:
    from restgate.backend.client import RestClient
    from restgate.config.schema import GatewayConfig
    from restgate.tools.arguments import (
        BusinessAnalyticsArgs,
        DeleteDataArgs,
        ExecuteSqlArgs,
        GetTableDataArgs,
        GetTableSchemaArgs,
        InsertDataArgs,
        ListTablesArgs,
        UpdateDataArgs,
    )

logger = logging.getLogger(__name__)

SAMPLE_ROWS = 5


@dataclass(frozen=True, slots=True)
class ToolContext:
    """What every handler may use: the outbound client and the config."""

    client: RestClient
    config: GatewayConfig


async def run_sql(ctx: ToolContext, sql: str) -> Any:
    """Run *sql* through the configured RPC procedures, in order.

    The first procedure that answers 2xx wins. Only a
    :class:`RemoteCallFailure` moves on to the next procedure; transport
    errors propagate.

    Raises:
        RpcUnavailableFailure: Every procedure rejected the call.
    """
    failures: list[tuple[str, RemoteCallFailure]] = []
    for attempt in sql_attempts(ctx.config.sql):
        try:
            return await ctx.client.request(
                attempt.path, method="POST", body=attempt.payload(sql)
            )
        except RemoteCallFailure as e:
            logger.info("SQL via %s failed (%d), trying next", attempt.procedure, e.status)
            failures.append((attempt.procedure, e))
    raise RpcUnavailableFailure(
        sql,
        classify_statement(sql),
        failures,
        setup_instructions=ctx.config.sql.setup_instructions,
    )


# ── Read-only tools ──────────────────────────────────────────────


async def list_tables(ctx: ToolContext, args: ListTablesArgs) -> Any:
    return [dict(table) for table in KNOWN_TABLES]


async def get_table_schema(ctx: ToolContext, args: GetTableSchemaArgs) -> Any:
    table = require_identifier(args.table_name)
    schema = require_identifier(args.schema_name, title="Invalid schema name")

    columns = await run_sql(ctx, column_metadata_sql(table, schema))

    sample: Any = None
    if args.include_sample_data:
        try:
            sample = await ctx.client.request(f"{table_path(table)}?limit={SAMPLE_ROWS}")
        except (RemoteCallFailure, httpx.HTTPError) as e:
            logger.warning("Sample rows for %s unavailable: %s", table, e)
            sample = {"error": "Could not fetch sample data"}

    return {"table_name": table, "schema": columns, "sample_data": sample}


async def execute_sql(ctx: ToolContext, args: ExecuteSqlArgs) -> Any:
    query = require_sql(args.query)
    limit = args.limit or ctx.config.sql.default_limit
    return await run_sql(ctx, apply_default_limit(query, limit))


async def get_table_data(ctx: ToolContext, args: GetTableDataArgs) -> Any:
    table = require_identifier(args.table_name)
    order_by = None
    if args.order_by is not None:
        order_by = require_identifier(args.order_by, title="Invalid order_by column")

    path = select_path(
        table,
        columns=args.columns.strip() or "*",
        limit=args.limit,
        where=args.where_clause,
        order_by=order_by,
        ascending=args.ascending,
    )
    return await ctx.client.request(path)


async def get_business_analytics(ctx: ToolContext, args: BusinessAnalyticsArgs) -> Any:
    date_from = require_date(args.date_from) if args.date_from is not None else None
    date_to = require_date(args.date_to) if args.date_to is not None else None
    snapshot = await compute_analytics(ctx.client, date_from=date_from, date_to=date_to)
    return snapshot.to_dict()


# ── Mutating tools ───────────────────────────────────────────────


async def insert_data(ctx: ToolContext, args: InsertDataArgs) -> Any:
    table = require_identifier(args.table_name)
    data = require_row_data(args.data, allow_many=True)
    result = await ctx.client.request(
        table_path(table), method="POST", body=data, prefer=RETURN_REPRESENTATION
    )
    return {"success": True, "inserted": result}


async def update_data(ctx: ToolContext, args: UpdateDataArgs) -> Any:
    table = require_identifier(args.table_name)
    data = require_row_data(args.data)
    where = require_where_clause(args.where_clause, "updates")
    result = await ctx.client.request(
        filtered_path(table, where), method="PATCH", body=data, prefer=RETURN_REPRESENTATION
    )
    return {"success": True, "updated": result}


async def delete_data(ctx: ToolContext, args: DeleteDataArgs) -> Any:
    table = require_identifier(args.table_name)
    where = require_where_clause(args.where_clause, "deletions")
    result = await ctx.client.request(
        filtered_path(table, where), method="DELETE", prefer=RETURN_REPRESENTATION
    )
    return {"success": True, "deleted": result}
