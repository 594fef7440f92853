"""Voice round trip: speech to text, text to the gateway, reply to speech."""

import base64
import logging

from app.domains.chat.gateway import GatewayClient
from app.domains.voice.speech import SpeechClient
from app.exceptions.upstream import (
    NoSpeechDetectedError,
    SpeechNotConfiguredError,
    SpeechServiceError,
)
from app.schemas.chat import VoiceResponse

logger = logging.getLogger(__name__)


class VoiceService:
    def __init__(self, gateway: GatewayClient, speech: SpeechClient, gateway_user: str):
        self.gateway = gateway
        self.speech = speech
        self.gateway_user = gateway_user

    async def process(
        self, audio: bytes, filename: str = "audio.webm", content_type: str | None = None
    ) -> VoiceResponse:
        """Transcribe, ask the gateway and synthesise the answer.

        A failed synthesis still returns the transcript and the text reply,
        just without audio.
        """
        if not self.speech.configured:
            raise SpeechNotConfiguredError()

        logger.info("Transcribing %d bytes of audio", len(audio))
        transcript = await self.speech.transcribe(audio, filename, content_type)
        if not transcript:
            raise NoSpeechDetectedError()
        logger.info("Transcript: %s", transcript)

        reply = await self.gateway.complete(
            [{"role": "user", "content": transcript}], user=self.gateway_user
        )
        logger.info("Gateway reply: %s", reply[:100])

        try:
            audio_reply = await self.speech.synthesize(reply)
        except SpeechServiceError:
            logger.warning("Returning voice reply without audio")
            return VoiceResponse(transcript=transcript, response=reply)

        logger.info("Synthesised %d bytes of speech", len(audio_reply))
        return VoiceResponse(
            transcript=transcript,
            response=reply,
            audio=base64.b64encode(audio_reply).decode("ascii"),
        )
