"""Main CLI application.

Click commands for the restgate gateway: serve, mcp, tools, call, check.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import logging
import sys
from typing import TYPE_CHECKING, Any

import click

from restgate import __version__
from restgate.config.loader import load_config
from restgate.core.errors import ConfigError

if TYPE_CHECKING:
    from restgate.config.schema import GatewayConfig, LoggingConfig


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None, *, require_credential: bool = True) -> GatewayConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path, require_credential=require_credential)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


class _JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json_mod.dumps(entry)


def _setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger. Logs go to stderr; stdout carries MCP frames."""
    formatter: logging.Formatter
    if config.structured:
        formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=config.level.upper(), handlers=handlers, force=True)


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="restgate")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """restgate - MCP gateway to a PostgREST database API.

    Exposes table, SQL and analytics tools over MCP and HTTP.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Host to bind to (overrides config).")
@click.option(
    "--port", type=int, default=None, help="Port to bind to (overrides config)."
)
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the HTTP server (tool endpoints + MCP over SSE)."""
    import uvicorn

    from restgate.api.app import MCP_PATH, create_app

    config = _load_config(ctx.obj["config_path"])
    _setup_logging(config.logging)

    effective_host = host or config.server.host
    effective_port = port or config.server.port

    click.echo(f"MCP endpoint: {config.server.base_url}{MCP_PATH}", err=True)
    click.echo(f"Backing service: {config.backend.url}", err=True)

    app = create_app(config)
    uvicorn.run(app, host=effective_host, port=effective_port)


# ── mcp ─────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def mcp(ctx: click.Context) -> None:
    """Start the MCP server on stdio for AI agent integration."""
    from restgate.mcp.server import run_server
    from restgate.tools.dispatcher import ToolDispatcher

    config = _load_config(ctx.obj["config_path"])
    _setup_logging(config.logging)
    asyncio.run(run_server(ToolDispatcher(config)))


# ── tools ───────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the available tools."""
    from rich.console import Console
    from rich.table import Table

    from restgate.tools.catalog import TOOL_DEFINITIONS

    table = Table(title="restgate tools")
    table.add_column("Tool", style="bold cyan")
    table.add_column("Required")
    table.add_column("Description")
    for definition in TOOL_DEFINITIONS:
        required = ", ".join(definition.input_schema.get("required", [])) or "-"
        table.add_row(definition.name, required, definition.description)
    Console().print(table)


# ── call ────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "args_json",
    default="{}",
    help='Tool arguments as a JSON object, e.g. \'{"table_name": "products"}\'.',
)
@click.pass_context
def call(ctx: click.Context, name: str, args_json: str) -> None:
    """Invoke one tool and print its JSON result."""
    try:
        arguments = json_mod.loads(args_json)
    except json_mod.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e}")
        return
    if not isinstance(arguments, dict):
        _error("--args must be a JSON object")
        return

    config = _load_config(ctx.obj["config_path"])
    _setup_logging(config.logging)
    result = asyncio.run(_call_async(config, name, arguments))
    click.echo(result.text)
    if result.is_error:
        sys.exit(1)


async def _call_async(config: GatewayConfig, name: str, arguments: dict[str, Any]) -> Any:
    from restgate.tools.dispatcher import ToolDispatcher

    return await ToolDispatcher(config).dispatch(name, arguments)


# ── check ───────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Show the resolved configuration (the service key is never printed)."""
    config = _load_config(ctx.obj["config_path"], require_credential=False)
    key_state = "set" if config.backend.service_role_key else "MISSING"
    click.echo(f"Backing service: {config.backend.url}")
    click.echo(f"Service key ({config.backend.service_role_key_env}): {key_state}")
    click.echo(f"Request timeout: {config.backend.timeout}s")
    click.echo(f"Default SQL limit: {config.sql.default_limit}")
    procedures = ", ".join(a.procedure for a in config.sql.attempts)
    click.echo(f"SQL procedures: {procedures}")
    click.echo(f"Listening on: {config.server.host}:{config.server.port}")
    if not config.backend.service_role_key:
        sys.exit(1)
