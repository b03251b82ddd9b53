"""Health check endpoint."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Liveness check: answers without touching the backing service."""
    config = request.app.state.config
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "backend_url": config.backend.url,
        "mcp_endpoint": f"{config.server.base_url}/mcp",
    }
