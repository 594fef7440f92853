"""Chat API controller: message log, gateway proxy and client debug log."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.dependencies import get_db, get_gateway_client, get_settings
from app.domains.chat.gateway import GatewayClient
from app.domains.chat.service import ChatService, DebugLogService
from app.schemas.base import ResponseSchema
from app.schemas.chat import ChatRequest, DebugLogEntry, MessageCreate, MessageResponse

logger = logging.getLogger(__name__)

messages_router = APIRouter(prefix="/api/messages", tags=["chat"])
router = APIRouter(prefix="/api/chat", tags=["chat"])
debug_router = APIRouter(prefix="/api/debug", tags=["chat"])


@messages_router.get("", response_model=ResponseSchema)
async def get_messages(
    _request: Request,
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """Most recent messages, oldest first."""
    service = ChatService(db)
    messages = await service.list_messages(limit)

    return ResponseSchema(
        status="success",
        message="Messages retrieved successfully",
        data=[MessageResponse.model_validate(m).model_dump(mode="json") for m in messages],
    )


@messages_router.post("", response_model=ResponseSchema, status_code=201)
async def create_message(
    _request: Request,
    message_data: MessageCreate,
    db: AsyncSession = Depends(get_db),
):
    service = ChatService(db)
    message = await service.add_message(message_data.role, message_data.content)

    return ResponseSchema(
        status="success",
        message="Message created successfully",
        data=MessageResponse.model_validate(message).model_dump(mode="json"),
    )


@messages_router.delete("", response_model=ResponseSchema)
async def clear_messages(
    _request: Request,
    db: AsyncSession = Depends(get_db),
):
    service = ChatService(db)
    deleted = await service.clear_messages()

    return ResponseSchema(
        status="success", message="Messages cleared successfully", data={"deleted": deleted}
    )


@router.post("", response_model=ResponseSchema)
async def chat(
    _request: Request,
    chat_request: ChatRequest,
    db: AsyncSession = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway_client),
    settings: Settings = Depends(get_settings),
):
    """Send a message to the gateway and return (or stream) the reply."""
    service = ChatService(db, gateway=gateway, context_size=settings.chat_context_size)

    if chat_request.stream:
        events = await service.stream_message(chat_request.content)
        return StreamingResponse(
            events,
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    response = await service.send_message(chat_request.content)

    return ResponseSchema(
        status="success",
        message="Message sent successfully",
        data=response.model_dump(mode="json"),
    )


@debug_router.get("", response_model=ResponseSchema)
async def get_debug_log(settings: Settings = Depends(get_settings)):
    service = DebugLogService(settings.debug_log_file)
    return ResponseSchema(status="success", data={"logs": service.tail()})


@debug_router.post("", response_model=ResponseSchema)
async def append_debug_log(entry: DebugLogEntry, settings: Settings = Depends(get_settings)):
    service = DebugLogService(settings.debug_log_file)
    line = service.append(entry.msg)
    return ResponseSchema(status="success", data={"line": line})


@debug_router.delete("", response_model=ResponseSchema)
async def clear_debug_log(settings: Settings = Depends(get_settings)):
    service = DebugLogService(settings.debug_log_file)
    service.clear()
    return ResponseSchema(status="success", message="Debug log cleared", data=None)
