"""HTTP client for the local OpenAI-compatible LLM gateway."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from app.core.config import Settings
from app.exceptions.upstream import GatewayError, GatewayTimeoutError

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response"


class GatewayClient:
    """Sends chat transcripts to the gateway, either whole or streamed.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` lets tests
    plug in an ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.url = settings.gateway_url
        self.token = settings.gateway_token
        self.model = settings.gateway_model
        self.agent_id = settings.gateway_agent_id
        self.timeout = settings.gateway_timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "x-openclaw-agent-id": self.agent_id}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _payload(
        self, messages: list[dict[str, str]], stream: bool, user: str | None = None
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": self.model, "messages": messages, "stream": stream}
        if user:
            payload["user"] = user
        return payload

    async def complete(self, messages: list[dict[str, str]], user: str | None = None) -> str:
        """Return the assistant reply for ``messages``.

        Raises:
            GatewayTimeoutError: The gateway did not answer within the timeout.
            GatewayError: Connection failure or a non-2xx status.
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    self.url, json=self._payload(messages, stream=False, user=user), headers=self._headers()
                )
        except httpx.TimeoutException as e:
            logger.error("Gateway request timed out: %s", e)
            raise GatewayTimeoutError() from e
        except httpx.HTTPError as e:
            logger.error("Gateway connection error: %s", e)
            raise GatewayError() from e

        if response.is_error:
            logger.error("Gateway error: %s %s", response.status_code, response.text)
            raise GatewayError(
                f"Gateway error: {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError("Gateway returned invalid JSON") from e
        return _message_content(data) or NO_RESPONSE

    async def stream(self, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        """Yield reply fragments as the gateway emits them.

        The upstream response is closed when this generator finishes or is
        closed by the consumer.
        """
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST", self.url, json=self._payload(messages, stream=True), headers=self._headers()
                ) as response:
                    if response.is_error:
                        body = (await response.aread()).decode("utf-8", errors="replace")
                        logger.error("Gateway error: %s %s", response.status_code, body)
                        raise GatewayError(
                            f"Gateway error: {response.status_code}",
                            details={"status_code": response.status_code},
                        )

                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        data = line[len("data:"):].strip()
                        if data == "[DONE]":
                            break
                        try:
                            chunk = json.loads(data)
                        except json.JSONDecodeError:
                            logger.warning("Skipping malformed gateway chunk: %r", data)
                            continue
                        delta = _delta_content(chunk)
                        if delta:
                            yield delta
        except httpx.TimeoutException as e:
            logger.error("Gateway stream timed out: %s", e)
            raise GatewayTimeoutError() from e
        except httpx.HTTPError as e:
            logger.error("Gateway stream error: %s", e)
            raise GatewayError() from e


def _message_content(data: dict[str, Any]) -> str | None:
    choices = data.get("choices") or []
    if not choices:
        return None
    return (choices[0].get("message") or {}).get("content")


def _delta_content(chunk: dict[str, Any]) -> str | None:
    choices = chunk.get("choices") or []
    if not choices:
        return None
    return (choices[0].get("delta") or {}).get("content")
