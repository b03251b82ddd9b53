"""FastAPI application factory for the restgate HTTP surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request

from restgate import __version__

if TYPE_CHECKING:
    from restgate.backend.client import RestClient
    from restgate.config.schema import GatewayConfig

MCP_PATH = "/mcp"
MCP_MESSAGES_PATH = "/messages/"


def create_app(config: GatewayConfig | None = None, client: RestClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``client`` replaces the outbound REST client (tests inject one backed
    by ``httpx.MockTransport``).
    """
    from restgate.config.loader import load_config
    from restgate.tools.dispatcher import ToolDispatcher

    if config is None:
        config = load_config()

    app = FastAPI(
        title="restgate",
        description="MCP gateway to a PostgREST database API",
        version=__version__,
    )
    app.state.config = config
    app.state.dispatcher = ToolDispatcher(config, client=client)

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    from restgate.api.health import router as health_router
    from restgate.api.routes.tools import router as tools_router

    app.include_router(health_router)
    app.include_router(tools_router)

    _mount_mcp(app)

    @app.get("/")
    async def root(request: Request) -> dict[str, Any]:
        """Service info and entry points."""
        base = request.app.state.config.server.base_url
        return {
            "name": "restgate",
            "version": __version__,
            "mcp_endpoint": f"{base}{MCP_PATH}",
            "health_check": f"{base}/health",
            "tools_available": len(request.app.state.dispatcher.definitions()),
        }

    return app


def _mount_mcp(app: FastAPI) -> None:
    """Serve MCP over SSE: GET /mcp opens the stream, POST /messages/ feeds it."""
    from mcp.server.sse import SseServerTransport
    from starlette.responses import Response

    from restgate.mcp.server import create_server

    transport = SseServerTransport(MCP_MESSAGES_PATH)
    server = create_server(app.state.dispatcher)

    async def handle_sse(request: Request) -> Response:
        async with transport.connect_sse(
            request.scope, request.receive, request._send
        ) as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
        return Response()

    app.add_route(MCP_PATH, handle_sse, methods=["GET"])
    app.mount(MCP_MESSAGES_PATH, app=transport.handle_post_message)
