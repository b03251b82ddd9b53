"""Typed argument models, one per tool.

The dispatcher decodes every inbound argument mapping into one of these
before a handler runs: missing, mistyped and unknown fields are rejected
here. Semantic checks (identifier syntax, calendar dates, mandatory
filters) stay with the handlers, which report them with tool-specific
error titles.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from restgate.core.errors import ValidationFailure


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _zero_to_none(value: Any) -> Any:
    if value == 0 and not isinstance(value, bool):
        return None
    return value


# Callers often send "" or 0 for "not given".
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalLimit = Annotated[int | None, BeforeValidator(_zero_to_none)]


class ListTablesArgs(ToolArguments):
    schema_name: str = Field(default="public", alias="schema")


class GetTableSchemaArgs(ToolArguments):
    table_name: str
    include_sample_data: bool = False
    schema_name: str = Field(default="public", alias="schema")


class ExecuteSqlArgs(ToolArguments):
    query: str
    limit: OptionalLimit = Field(default=None, ge=1)


class GetTableDataArgs(ToolArguments):
    table_name: str
    columns: str = "*"
    where_clause: OptionalText = None
    limit: int = Field(default=50, ge=1)
    order_by: OptionalText = None
    ascending: bool = False


class InsertDataArgs(ToolArguments):
    table_name: str
    data: Any


class UpdateDataArgs(ToolArguments):
    table_name: str
    data: Any = None
    where_clause: str | None = None


class DeleteDataArgs(ToolArguments):
    table_name: str
    where_clause: str | None = None


class BusinessAnalyticsArgs(ToolArguments):
    date_from: OptionalText = None
    date_to: OptionalText = None


def decode_arguments(
    tool: str, model: type[ToolArguments], arguments: dict[str, Any] | None
) -> ToolArguments:
    """Validate a raw argument mapping against *model*.

    Raises:
        ValidationFailure: On missing, mistyped or unexpected fields.
    """
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "arguments",
                "message": err["msg"],
            }
            for err in e.errors()
        ]
        summary = "; ".join(f"{err['field']}: {err['message']}" for err in errors)
        raise ValidationFailure(
            f"Invalid arguments for {tool}: {summary}",
            details={"errors": errors},
        ) from e
