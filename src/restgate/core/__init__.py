"""Core errors and validation shared by every layer."""

from restgate.core.errors import (
    ConfigError,
    GatewayError,
    RemoteCallFailure,
    RpcUnavailableFailure,
    ToolError,
    UnknownToolFailure,
    ValidationFailure,
)
from restgate.core.validation import is_valid_date, is_valid_table_name

__all__ = [
    "ConfigError",
    "GatewayError",
    "RemoteCallFailure",
    "RpcUnavailableFailure",
    "ToolError",
    "UnknownToolFailure",
    "ValidationFailure",
    "is_valid_date",
    "is_valid_table_name",
]
