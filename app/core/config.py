# python
# app/core/config.py
"""Configuration settings for the agent dashboard.

Uses Pydantic BaseSettings for environment variable management.
"""
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Agent Dashboard API", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode (echoes SQL)")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Storage Settings =====
    data_dir: Path = Field(
        default=Path.home() / "agent-dashboard" / "data",
        description="Directory holding the database and JSON snapshot files",
    )
    database_url: str | None = Field(default=None, description="Database connection URL")

    # ===== LLM Gateway (OpenAI-compatible) =====
    gateway_url: str = Field(
        default="http://127.0.0.1:18789/v1/chat/completions",
        description="Chat completions endpoint of the local gateway",
    )
    gateway_token: str | None = Field(default=None, description="Gateway bearer token")
    gateway_model: str = Field(default="openclaw", description="Model name sent to the gateway")
    gateway_agent_id: str = Field(default="main", description="Agent id header for the gateway")
    gateway_timeout: float = Field(default=120.0, description="Gateway request timeout in seconds")
    chat_context_size: int = Field(
        default=20, ge=1, le=200, description="Messages sent to the gateway as context"
    )

    # ===== Speech API =====
    openai_api_key: str | None = Field(default=None, description="Speech API key")
    openai_api_url: str = Field(default="https://api.openai.com/v1", description="Speech API base URL")
    whisper_model: str = Field(default="whisper-1", description="Transcription model")
    tts_model: str = Field(default="tts-1", description="Text-to-speech model")
    tts_voice: str = Field(default="alloy", description="Text-to-speech voice")
    voice_gateway_user: str = Field(default="dashboard-voice", description="Gateway user for voice")

    # ===== GitHub Sync =====
    github_project_number: str = Field(default="1", description="GitHub Project number")
    github_owner: str = Field(default="rodionsteshenko", description="GitHub Project owner")
    default_assignee: str = Field(default="coby", description="Assignee for unassigned items")

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="Log format")

    # ===== CORS Settings =====
    allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
        description="Allowed CORS origins (comma-separated)",
    )

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def has_voice_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def now_file(self) -> Path:
        return self.data_dir / "now.json"

    @property
    def quotes_file(self) -> Path:
        return self.data_dir / "quotes.json"

    @property
    def screenshots_dir(self) -> Path:
        return self.data_dir / "screenshots"

    @property
    def debug_log_file(self) -> Path:
        return self.data_dir / "chat-debug.log"

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
        return v

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_data_dir(cls, v):
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @model_validator(mode="after")
    def set_computed_fields(self):
        if not self.database_url:
            self.database_url = f"sqlite+aiosqlite:///{self.data_dir / 'tiles.db'}"
        return self


settings = Settings()


def get_config_summary() -> dict:
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
        "debug": settings.debug,
        "data_dir": str(settings.data_dir),
        "gateway_url": settings.gateway_url,
        "gateway_configured": bool(settings.gateway_token),
        "voice_enabled": settings.has_voice_enabled,
        "github_project": f"{settings.github_owner}/{settings.github_project_number}",
    }


__all__ = [
    "settings",
    "Settings",
    "get_config_summary",
    "EnvironmentEnum",
    "LogLevelEnum",
    "LogFormatEnum",
]
