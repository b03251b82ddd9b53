"""Input checks that run before any request reaches the backing service.

The ``is_*`` predicates are pure. The ``require_*`` helpers raise
:class:`~restgate.core.errors.ValidationFailure` carrying the public error
title and the offending input.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from restgate.core.errors import ValidationFailure

MAX_IDENTIFIER_LENGTH = 63

_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*", re.ASCII)
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def is_valid_table_name(name: object) -> bool:
    """Return True if *name* is a safe PostgreSQL identifier."""
    if not isinstance(name, str) or not name:
        return False
    if len(name) > MAX_IDENTIFIER_LENGTH:
        return False
    return _IDENTIFIER_RE.fullmatch(name) is not None


def is_valid_date(value: object) -> bool:
    """Return True if *value* is ``YYYY-MM-DD`` and names a real calendar day."""
    if not isinstance(value, str) or _DATE_RE.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def require_identifier(name: object, *, title: str = "Invalid table name") -> str:
    """Reject anything that is not a safe identifier (tables, schemas, columns)."""
    if not is_valid_table_name(name):
        noun = title.removeprefix("Invalid ").capitalize()
        raise ValidationFailure(
            f"{noun} must be a valid PostgreSQL identifier",
            title=title,
            details={"provided": name},
        )
    return name  # type: ignore[return-value]


def require_date(value: object) -> str:
    if not is_valid_date(value):
        raise ValidationFailure(
            "Date must be in YYYY-MM-DD format",
            title="Invalid date format",
            details={"provided": value},
        )
    return value  # type: ignore[return-value]


def require_where_clause(clause: object, action: str) -> str:
    """Reject a missing or blank filter fragment for a mutating call."""
    if not isinstance(clause, str) or not clause.strip():
        raise ValidationFailure(
            f"WHERE clause is required for {action}",
            title="Missing where clause",
        )
    return clause.strip()


def require_row_data(data: Any, *, allow_many: bool = False) -> Any:
    """Reject anything but an object (or a non-empty list of them, for bulk insert).

    An empty object is a row made entirely of column defaults.
    """
    if isinstance(data, dict):
        return data
    if (
        allow_many
        and isinstance(data, list)
        and data
        and all(isinstance(row, dict) for row in data)
    ):
        return data
    raise ValidationFailure(
        "Data must be an object",
        title="Invalid data",
        details={"provided": data},
    )


def require_sql(query: object) -> str:
    if not isinstance(query, str) or not query.strip():
        raise ValidationFailure("SQL query is required", title="Invalid SQL query")
    return query.strip()
