"""Configuration loading and validation."""

from restgate.config.loader import load_config
from restgate.config.schema import (
    BackendConfig,
    GatewayConfig,
    LoggingConfig,
    ServerConfig,
    SqlAttemptConfig,
    SqlConfig,
)

__all__ = [
    "BackendConfig",
    "GatewayConfig",
    "LoggingConfig",
    "ServerConfig",
    "SqlAttemptConfig",
    "SqlConfig",
    "load_config",
]
