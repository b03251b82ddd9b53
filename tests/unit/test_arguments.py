"""Tests for per-tool argument decoding."""

from __future__ import annotations

import pytest

from restgate.core.errors import ValidationFailure
from restgate.tools.arguments import (
    BusinessAnalyticsArgs,
    ExecuteSqlArgs,
    GetTableDataArgs,
    GetTableSchemaArgs,
    InsertDataArgs,
    ListTablesArgs,
    decode_arguments,
)


class TestDecode:
    def test_defaults(self) -> None:
        args = decode_arguments("get_table_data", GetTableDataArgs, {"table_name": "products"})
        assert isinstance(args, GetTableDataArgs)
        assert args.columns == "*"
        assert args.limit == 50
        assert args.ascending is False
        assert args.where_clause is None

    def test_none_means_no_arguments(self) -> None:
        args = decode_arguments("list_tables", ListTablesArgs, None)
        assert isinstance(args, ListTablesArgs)
        assert args.schema_name == "public"

    def test_schema_alias(self) -> None:
        args = decode_arguments(
            "get_table_schema", GetTableSchemaArgs, {"table_name": "t", "schema": "audit"}
        )
        assert isinstance(args, GetTableSchemaArgs)
        assert args.schema_name == "audit"

    def test_missing_required_field(self) -> None:
        with pytest.raises(ValidationFailure) as exc_info:
            decode_arguments("execute_sql", ExecuteSqlArgs, {})
        err = exc_info.value
        assert err.title == "Invalid arguments"
        assert "execute_sql" in err.message
        assert err.details["errors"][0]["field"] == "query"

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationFailure) as exc_info:
            decode_arguments("execute_sql", ExecuteSqlArgs, {"query": "SELECT 1", "rows": 5})
        assert exc_info.value.details["errors"][0]["field"] == "rows"

    def test_mistyped_field_rejected(self) -> None:
        with pytest.raises(ValidationFailure):
            decode_arguments("get_table_data", GetTableDataArgs, {"table_name": 42})

    def test_zero_limit_means_default(self) -> None:
        args = decode_arguments("execute_sql", ExecuteSqlArgs, {"query": "x", "limit": 0})
        assert isinstance(args, ExecuteSqlArgs)
        assert args.limit is None

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValidationFailure):
            decode_arguments("execute_sql", ExecuteSqlArgs, {"query": "x", "limit": -1})

    def test_blank_optional_text_is_absent(self) -> None:
        args = decode_arguments(
            "get_business_analytics", BusinessAnalyticsArgs, {"date_from": "", "date_to": " "}
        )
        assert isinstance(args, BusinessAnalyticsArgs)
        assert args.date_from is None
        assert args.date_to is None

    def test_insert_data_required(self) -> None:
        with pytest.raises(ValidationFailure):
            decode_arguments("insert_data", InsertDataArgs, {"table_name": "customers"})
