# ruff: noqa: D107
"""Exceptions for upstream services (LLM gateway, speech API)."""

from typing import Any

from .base import BaseAppException


class UpstreamServiceError(BaseAppException):
    """Base exception for failures of an external service."""

    def __init__(
        self,
        message: str = "Upstream service error occurred",
        error_code: str = "UPSTREAM_ERROR",
        details: dict[str, Any] | None = None,
        status_code: int = 502,
    ):
        super().__init__(
            message=message, status_code=status_code, error_code=error_code, details=details
        )


class GatewayError(UpstreamServiceError):
    """Exception raised when the LLM gateway fails or returns an error status."""

    def __init__(
        self,
        message: str = "Failed to connect to gateway",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "GATEWAY_ERROR", details)


class GatewayTimeoutError(UpstreamServiceError):
    """Exception raised when the LLM gateway does not answer in time."""

    def __init__(
        self,
        message: str = "Gateway request timed out",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "GATEWAY_TIMEOUT", details, status_code=504)


class SpeechServiceError(UpstreamServiceError):
    """Exception raised when transcription or speech synthesis fails."""

    def __init__(
        self,
        message: str = "Speech service error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "SPEECH_SERVICE_ERROR", details, status_code=500)


class SpeechNotConfiguredError(UpstreamServiceError):
    """Exception raised when no speech API key is configured."""

    def __init__(
        self,
        message: str = "OpenAI API key not configured",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "SPEECH_NOT_CONFIGURED", details, status_code=500)


class NoSpeechDetectedError(BaseAppException):
    """Raised when a transcription comes back empty."""

    def __init__(self, message: str = "No speech detected"):
        super().__init__(message=message, status_code=400, error_code="NO_SPEECH_DETECTED")


class MissingAudioError(BaseAppException):
    """Raised when a voice request carries no audio."""

    def __init__(self, message: str = "No audio file provided"):
        super().__init__(message=message, status_code=400, error_code="MISSING_AUDIO")


class GitHubCLIError(Exception):
    """Raised when the ``gh`` CLI fails or prints something that is not JSON."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
