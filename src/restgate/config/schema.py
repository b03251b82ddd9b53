"""Pydantic models for restgate configuration.

Every model is frozen: the configuration is built once at startup and
passed explicitly to the components that need it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BackendConfig(_Frozen):
    """Connection settings for the PostgREST-style backing service."""

    url: str = "https://munene.shop"
    service_role_key: str | None = None
    service_role_key_env: str = "SUPABASE_SERVICE_ROLE_KEY"
    timeout: float = 30.0


class SqlAttemptConfig(_Frozen):
    """One RPC procedure that can run ad-hoc SQL, and its parameter name."""

    procedure: str
    parameter: str


class SqlConfig(_Frozen):
    """Raw SQL execution settings."""

    default_limit: int = Field(default=100, ge=1)
    attempts: tuple[SqlAttemptConfig, ...] = (
        SqlAttemptConfig(procedure="exec_sql", parameter="sql_query"),
        SqlAttemptConfig(procedure="execute_sql", parameter="sql_statement"),
    )
    setup_instructions: str = (
        "Run the create-exec-sql-function.sql file in Supabase Studio SQL Editor"
    )


class ServerConfig(_Frozen):
    """Inbound HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 3001
    public_url: str | None = None
    cors_origins: tuple[str, ...] = ("*",)

    @property
    def base_url(self) -> str:
        """URL callers use to reach this gateway."""
        return (self.public_url or f"http://localhost:{self.port}").rstrip("/")


class LoggingConfig(_Frozen):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    structured: bool = False


class GatewayConfig(_Frozen):
    """Top-level configuration for restgate."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    sql: SqlConfig = Field(default_factory=SqlConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
