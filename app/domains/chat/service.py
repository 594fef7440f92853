"""Chat service layer: the message log, the gateway proxy and the client debug log."""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from sqlalchemy import delete, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.chat.gateway import NO_RESPONSE, GatewayClient
from app.exceptions.upstream import UpstreamServiceError
from app.schemas.chat import ChatResponse, MessageResponse
from models.message import Message, MessageRole

logger = logging.getLogger(__name__)

DEBUG_LOG_TAIL = 50


def format_sse(event: str, data: Any) -> str:
    """Encode one server-sent event."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


class ChatService:
    """Service class for the conversation log and the gateway round trip."""

    def __init__(
        self,
        db: AsyncSession,
        gateway: GatewayClient | None = None,
        context_size: int = 20,
    ):
        self.db = db
        self.gateway = gateway
        self.context_size = context_size

    async def list_messages(self, limit: int = 100) -> list[Message]:
        """The most recent ``limit`` messages in chronological order."""
        query = select(Message).order_by(desc(Message.created_at)).limit(limit)
        result = await self.db.execute(query)
        return list(reversed(result.scalars().all()))

    async def add_message(self, role: MessageRole, content: str) -> Message:
        message = Message(role=MessageRole(role).value, content=content)
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message

    async def clear_messages(self) -> int:
        result = await self.db.execute(delete(Message))
        await self.db.commit()
        logger.info("Cleared %d chat messages", result.rowcount)
        return result.rowcount

    async def send_message(self, content: str) -> ChatResponse:
        """Persist the user message, ask the gateway, persist and return the reply.

        On gateway failure the persisted user message travels in the error
        details so the caller still gets it back.
        """
        user_message = await self.add_message(MessageRole.USER, content)
        context = await self._context()

        try:
            reply = await self._require_gateway().complete(context)
        except UpstreamServiceError as e:
            e.details["user_message"] = MessageResponse.model_validate(user_message).model_dump(
                mode="json"
            )
            raise

        assistant_message = await self.add_message(MessageRole.ASSISTANT, reply)

        return ChatResponse(
            user_message=MessageResponse.model_validate(user_message),
            assistant_message=MessageResponse.model_validate(assistant_message),
        )

    async def stream_message(self, content: str) -> AsyncIterator[str]:
        """Persist the user message and return a generator of SSE frames.

        Frames: ``user`` (the persisted user message), one ``delta`` per reply
        fragment, then ``done`` (the persisted assistant message) or
        ``error``. The assistant message is only stored once the reply is
        complete.
        """
        user_message = await self.add_message(MessageRole.USER, content)
        context = await self._context()
        gateway = self._require_gateway()

        async def events() -> AsyncIterator[str]:
            yield format_sse(
                "user", MessageResponse.model_validate(user_message).model_dump(mode="json")
            )

            parts: list[str] = []
            upstream = gateway.stream(context)
            try:
                async for delta in upstream:
                    parts.append(delta)
                    yield format_sse("delta", {"content": delta})
            except UpstreamServiceError as e:
                yield format_sse("error", {"message": e.message, "error_code": e.error_code})
                return
            finally:
                await upstream.aclose()

            assistant_message = await self.add_message(
                MessageRole.ASSISTANT, "".join(parts) or NO_RESPONSE
            )
            yield format_sse(
                "done", MessageResponse.model_validate(assistant_message).model_dump(mode="json")
            )

        return events()

    async def _context(self) -> list[dict[str, str]]:
        messages = await self.list_messages(self.context_size)
        return [{"role": m.role, "content": m.content} for m in messages]

    def _require_gateway(self) -> GatewayClient:
        if self.gateway is None:
            raise RuntimeError("ChatService was created without a gateway client")
        return self.gateway


class DebugLogService:
    """Append-only text log the dashboard UI writes diagnostics to."""

    def __init__(self, path: Path):
        self.path = path

    def append(self, msg: str) -> str:
        line = f"[{datetime.now(UTC).isoformat().replace('+00:00', 'Z')}] {msg}"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as e:
            logger.error("Failed to write debug log %s: %s", self.path, e)
        logger.info("[CHAT DEBUG] %s", msg)
        return line

    def tail(self, count: int = DEBUG_LOG_TAIL) -> list[str]:
        if not self.path.exists():
            return []
        lines = [line for line in self.path.read_text(encoding="utf-8").split("\n") if line]
        return lines[-count:]

    def clear(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")
