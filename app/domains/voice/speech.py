"""HTTP client for the Whisper transcription and text-to-speech APIs."""

import logging

import httpx

from app.core.config import Settings
from app.exceptions.upstream import SpeechNotConfiguredError, SpeechServiceError

logger = logging.getLogger(__name__)


class SpeechClient:
    """Transcribes audio and synthesises mp3 speech through an OpenAI-style API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.openai_api_key
        self.base_url = settings.openai_api_url.rstrip("/")
        self.whisper_model = settings.whisper_model
        self.tts_model = settings.tts_model
        self.tts_voice = settings.tts_voice
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        if not self.configured:
            raise SpeechNotConfiguredError()
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=60.0,
            transport=self.transport,
        )

    async def transcribe(
        self, audio: bytes, filename: str = "audio.webm", content_type: str | None = None
    ) -> str:
        """Return the stripped transcript (possibly empty)."""
        async with self._client() as client:
            try:
                response = await client.post(
                    "/audio/transcriptions",
                    files={"file": (filename, audio, content_type or "audio/webm")},
                    data={"model": self.whisper_model},
                )
            except httpx.HTTPError as e:
                logger.error("Whisper request failed: %s", e)
                raise SpeechServiceError("Transcription failed") from e

        if response.is_error:
            logger.error("Whisper error: %s %s", response.status_code, response.text)
            raise SpeechServiceError(
                "Transcription failed", details={"status_code": response.status_code}
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Whisper returned a non-JSON body: %r", response.text[:200])
            raise SpeechServiceError("Transcription failed") from e
        if not isinstance(data, dict):
            raise SpeechServiceError("Transcription failed")
        return (data.get("text") or "").strip()

    async def synthesize(self, text: str) -> bytes:
        """Return mp3 audio for ``text``."""
        async with self._client() as client:
            try:
                response = await client.post(
                    "/audio/speech",
                    json={
                        "model": self.tts_model,
                        "input": text,
                        "voice": self.tts_voice,
                        "response_format": "mp3",
                    },
                )
            except httpx.HTTPError as e:
                logger.error("TTS request failed: %s", e)
                raise SpeechServiceError("Speech synthesis failed") from e

        if response.is_error:
            logger.error("TTS error: %s %s", response.status_code, response.text)
            raise SpeechServiceError(
                "Speech synthesis failed", details={"status_code": response.status_code}
            )
        return response.content
