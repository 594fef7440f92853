# app/core/dependencies.py
"""FastAPI dependency providers shared by the domain controllers.

Tests override these through ``app.dependency_overrides`` to point the app at
a temporary database, a temporary data directory and mocked upstream HTTP.
"""
import logging

from fastapi import Depends

from app.core.config import Settings, settings
from app.database import get_db
from app.domains.chat.gateway import GatewayClient
from app.domains.voice.speech import SpeechClient

logger = logging.getLogger(__name__)

__all__ = ["get_db", "get_settings", "get_gateway_client", "get_speech_client"]


def get_settings() -> Settings:
    """Return the process-wide settings."""
    return settings


def get_gateway_client(app_settings: Settings = Depends(get_settings)) -> GatewayClient:
    return GatewayClient(app_settings)


def get_speech_client(app_settings: Settings = Depends(get_settings)) -> SpeechClient:
    return SpeechClient(app_settings)
