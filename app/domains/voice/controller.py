"""Voice API controller."""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from app.core.config import Settings
from app.core.dependencies import get_gateway_client, get_settings, get_speech_client
from app.domains.chat.gateway import GatewayClient
from app.domains.voice.service import VoiceService
from app.domains.voice.speech import SpeechClient
from app.exceptions.upstream import MissingAudioError
from app.schemas.base import ResponseSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/voice", tags=["voice"])


@router.post("", response_model=ResponseSchema)
async def voice(
    audio: UploadFile | None = File(None, description="Recorded audio (webm, mp3, wav...)"),
    gateway: GatewayClient = Depends(get_gateway_client),
    speech: SpeechClient = Depends(get_speech_client),
    settings: Settings = Depends(get_settings),
):
    """Transcribe the audio, ask the gateway and return the spoken reply."""
    if audio is None:
        raise MissingAudioError()

    payload = await audio.read()
    if not payload:
        raise MissingAudioError()

    service = VoiceService(gateway, speech, settings.voice_gateway_user)
    result = await service.process(payload, audio.filename or "audio.webm", audio.content_type)

    return ResponseSchema(
        status="success",
        message="Voice request processed",
        data=result.model_dump(mode="json"),
    )
