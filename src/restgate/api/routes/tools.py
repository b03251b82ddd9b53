"""Tool endpoints: catalog listing and one-shot invocation."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolCallRequest(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContentModel(BaseModel):
    type: str = "text"
    text: str


class ToolCallResponse(BaseModel):
    content: list[TextContentModel]
    isError: bool = False  # noqa: N815


@router.get("")
async def list_tools(request: Request) -> dict[str, Any]:
    """The static tool catalog."""
    dispatcher = request.app.state.dispatcher
    return {"tools": [d.to_dict() for d in dispatcher.definitions()]}


@router.post("/call", response_model=ToolCallResponse)
async def call_tool(body: ToolCallRequest, request: Request) -> ToolCallResponse:
    """Run one tool. Tool failures come back as ``isError: true`` with HTTP 200."""
    dispatcher = request.app.state.dispatcher
    result = await dispatcher.dispatch(body.name, body.arguments)
    return ToolCallResponse.model_validate(result.to_dict())
