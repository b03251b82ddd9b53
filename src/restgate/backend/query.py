"""Translate structured tool arguments into PostgREST paths and RPC payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from restgate.core.validation import require_identifier

if TYPE_CHECKING:
    from restgate.config.schema import SqlConfig

REST_PREFIX = "/rest/v1"

_LIMIT_RE = re.compile(r"\blimit\s+\d+", re.IGNORECASE)


def table_path(table: str) -> str:
    return f"{REST_PREFIX}/{table}"


def rpc_path(procedure: str) -> str:
    return f"{REST_PREFIX}/rpc/{procedure}"


def select_path(
    table: str,
    *,
    columns: str = "*",
    limit: int | None = None,
    where: str | None = None,
    order_by: str | None = None,
    ascending: bool = False,
) -> str:
    """Build a filtered, ordered read.

    ``where`` is PostgREST filter syntax (``column=op.value``) and is
    appended verbatim.
    """
    params = [f"select={columns or '*'}"]
    if limit is not None:
        params.append(f"limit={limit}")
    if where:
        params.append(where)
    if order_by:
        params.append(f"order={order_by}.{'asc' if ascending else 'desc'}")
    return f"{table_path(table)}?{'&'.join(params)}"


def filtered_path(table: str, where: str) -> str:
    """Path for a PATCH or DELETE scoped by a filter fragment."""
    return f"{table_path(table)}?{where}"


def classify_statement(sql: str) -> str:
    """Return the statement kind: its first word, lower-cased."""
    words = sql.split(None, 1)
    return words[0].lower() if words else ""


def has_limit(sql: str) -> bool:
    return _LIMIT_RE.search(sql) is not None


def apply_default_limit(sql: str, limit: int) -> str:
    """Bound an unlimited SELECT by appending ``LIMIT <limit>``."""
    statement = sql.strip()
    if classify_statement(statement) != "select" or has_limit(statement):
        return statement
    return f"{statement.rstrip(';').rstrip()} LIMIT {limit}"


def column_metadata_sql(table: str, schema: str = "public") -> str:
    """Information-schema query describing the columns of *table*."""
    require_identifier(table)
    require_identifier(schema, title="Invalid schema name")
    return (
        "SELECT column_name, data_type, is_nullable, column_default, "
        "character_maximum_length, numeric_precision, numeric_scale "
        "FROM information_schema.columns "
        f"WHERE table_schema = '{schema}' AND table_name = '{table}' "
        "ORDER BY ordinal_position;"
    )


@dataclass(frozen=True, slots=True)
class SqlAttempt:
    """A named RPC procedure that may be able to run ad-hoc SQL."""

    procedure: str
    parameter: str

    @property
    def path(self) -> str:
        return rpc_path(self.procedure)

    def payload(self, sql: str) -> dict[str, Any]:
        return {self.parameter: sql}


DEFAULT_SQL_ATTEMPTS: tuple[SqlAttempt, ...] = (
    SqlAttempt("exec_sql", "sql_query"),
    SqlAttempt("execute_sql", "sql_statement"),
)


def sql_attempts(config: SqlConfig | None) -> tuple[SqlAttempt, ...]:
    """Ordered SQL strategies from configuration, falling back to the defaults."""
    if config is None or not config.attempts:
        return DEFAULT_SQL_ATTEMPTS
    return tuple(SqlAttempt(a.procedure, a.parameter) for a in config.attempts)
