"""Static tool catalog and the table list served by ``list_tables``."""

from __future__ import annotations

from restgate.tools.base import ToolDefinition

# Served as-is by list_tables; the live schema is not introspected.
KNOWN_TABLES: tuple[dict[str, str], ...] = (
    {"table_name": "profiles", "description": "User profiles and roles", "category": "auth"},
    {"table_name": "products", "description": "Product inventory", "category": "inventory"},
    {"table_name": "transactions", "description": "Sales transactions", "category": "sales"},
    {
        "table_name": "transaction_items",
        "description": "Individual items in transactions",
        "category": "sales",
    },
    {"table_name": "customers", "description": "Customer information", "category": "customers"},
    {"table_name": "expenses", "description": "Business expenses", "category": "financial"},
    {
        "table_name": "debt_payments",
        "description": "Customer debt payments",
        "category": "financial",
    },
    {
        "table_name": "stock_history",
        "description": "Product stock changes",
        "category": "inventory",
    },
    {"table_name": "catalog_products", "description": "Product catalog", "category": "products"},
    {
        "table_name": "customer_debts",
        "description": "Customer debt records",
        "category": "financial",
    },
    {
        "table_name": "expense_categories",
        "description": "Expense categories",
        "category": "financial",
    },
)

_TABLE_NAME = {"type": "string", "description": "Name of the table"}


def _get_tools() -> tuple[ToolDefinition, ...]:
    """Define the tools exposed to callers."""
    return (
        ToolDefinition(
            name="list_tables",
            description="List all tables in the database with descriptions and categories",
            input_schema={
                "type": "object",
                "properties": {
                    "schema": {
                        "type": "string",
                        "description": "Schema name (default: public)",
                        "default": "public",
                    },
                },
            },
        ),
        ToolDefinition(
            name="get_table_schema",
            description=(
                "Get detailed schema/structure of a specific table, "
                "optionally with a few sample rows"
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "table_name": _TABLE_NAME,
                    "include_sample_data": {
                        "type": "boolean",
                        "description": "Include sample rows (default: false)",
                        "default": False,
                    },
                    "schema": {
                        "type": "string",
                        "description": "Schema name (default: public)",
                        "default": "public",
                    },
                },
                "required": ["table_name"],
            },
        ),
        ToolDefinition(
            name="execute_sql",
            description=(
                "Execute any SQL query with full database control "
                "(SELECT, INSERT, UPDATE, DELETE, CREATE, ALTER, DROP)"
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "SQL query to execute"},
                    "limit": {
                        "type": "integer",
                        "description": (
                            "Maximum number of rows to return for SELECT queries "
                            "(default: 100)"
                        ),
                        "default": 100,
                    },
                },
                "required": ["query"],
            },
        ),
        ToolDefinition(
            name="get_table_data",
            description="Get data from a specific table with filtering and sorting",
            input_schema={
                "type": "object",
                "properties": {
                    "table_name": _TABLE_NAME,
                    "columns": {
                        "type": "string",
                        "description": "Columns to select (default: *)",
                        "default": "*",
                    },
                    "where_clause": {
                        "type": "string",
                        "description": "PostgREST filter, e.g. status=eq.active",
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of rows (default: 50)",
                        "default": 50,
                    },
                    "order_by": {"type": "string", "description": "Column to order by"},
                    "ascending": {
                        "type": "boolean",
                        "description": "Sort ascending (default: false)",
                        "default": False,
                    },
                },
                "required": ["table_name"],
            },
        ),
        ToolDefinition(
            name="insert_data",
            description="Insert new records into a table",
            input_schema={
                "type": "object",
                "properties": {
                    "table_name": _TABLE_NAME,
                    "data": {
                        "type": ["object", "array"],
                        "description": "Row to insert as key-value pairs, or a list of rows",
                    },
                },
                "required": ["table_name", "data"],
            },
        ),
        ToolDefinition(
            name="update_data",
            description="Update existing records in a table",
            input_schema={
                "type": "object",
                "properties": {
                    "table_name": _TABLE_NAME,
                    "data": {
                        "type": "object",
                        "description": "Data to update as key-value pairs",
                    },
                    "where_clause": {
                        "type": "string",
                        "description": "PostgREST filter selecting the rows to update",
                    },
                },
                "required": ["table_name", "data", "where_clause"],
            },
        ),
        ToolDefinition(
            name="delete_data",
            description="Delete records from a table",
            input_schema={
                "type": "object",
                "properties": {
                    "table_name": _TABLE_NAME,
                    "where_clause": {
                        "type": "string",
                        "description": "PostgREST filter selecting the rows to delete",
                    },
                },
                "required": ["table_name", "where_clause"],
            },
        ),
        ToolDefinition(
            name="get_business_analytics",
            description=(
                "Get business analytics: transaction count, revenue, "
                "inventory value and low-stock products"
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "date_from": {"type": "string", "description": "Start date (YYYY-MM-DD)"},
                    "date_to": {"type": "string", "description": "End date (YYYY-MM-DD)"},
                },
            },
        ),
    )


TOOL_DEFINITIONS = _get_tools()
TOOL_NAMES = frozenset(t.name for t in TOOL_DEFINITIONS)
