"""
Unit tests for settings, logging setup and the dependency providers.
"""

import json
import logging
from pathlib import Path

import pytest

from app.core.config import EnvironmentEnum, LogFormatEnum, Settings, get_config_summary
from app.core.dependencies import get_gateway_client, get_settings, get_speech_client
from app.core.logging import JsonFormatter, configure_logging


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, tmp_path):
        settings = Settings(data_dir=tmp_path, _env_file=None)

        assert settings.gateway_model == "openclaw"
        assert settings.gateway_agent_id == "main"
        assert settings.chat_context_size == 20
        assert settings.default_assignee == "coby"
        assert settings.database_url == f"sqlite+aiosqlite:///{tmp_path / 'tiles.db'}"

    def test_derived_paths(self, tmp_path):
        settings = Settings(data_dir=tmp_path, _env_file=None)

        assert settings.now_file == tmp_path / "now.json"
        assert settings.quotes_file == tmp_path / "quotes.json"
        assert settings.screenshots_dir == tmp_path / "screenshots"
        assert settings.debug_log_file == tmp_path / "chat-debug.log"

    def test_explicit_database_url_wins(self, tmp_path):
        settings = Settings(data_dir=tmp_path, database_url="sqlite+aiosqlite:///:memory:", _env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_data_dir_expands_user(self):
        settings = Settings(data_dir="~/dash-data", _env_file=None)

        assert settings.data_dir == Path("~/dash-data").expanduser()

    @pytest.mark.parametrize(
        "raw,expected",
        [("dev", EnvironmentEnum.development), ("prod", EnvironmentEnum.production)],
    )
    def test_environment_aliases(self, raw, expected):
        assert Settings(environment=raw, _env_file=None).environment == expected

    def test_environment_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("GATEWAY_TIMEOUT", "5")

        settings = Settings(_env_file=None)

        assert settings.environment == EnvironmentEnum.staging
        assert settings.gateway_timeout == 5.0

    def test_allowed_origins_list(self):
        settings = Settings(allowed_origins=" http://a.test , ,http://b.test", _env_file=None)

        assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_voice_enabled_flag(self):
        assert Settings(openai_api_key="", _env_file=None).has_voice_enabled is False
        assert Settings(openai_api_key="sk-1", _env_file=None).has_voice_enabled is True

    def test_context_size_bounds(self):
        with pytest.raises(ValueError):
            Settings(chat_context_size=0, _env_file=None)

    def test_config_summary_hides_token(self):
        summary = get_config_summary()

        assert "gateway_token" not in summary
        assert "gateway_configured" in summary


class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "hello x"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.test"

    def test_configure_logging_sets_level(self, monkeypatch):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        monkeypatch.setattr("app.core.logging.settings.log_format", LogFormatEnum.json)
        try:
            configure_logging("WARNING")

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)


class TestDependencies:
    def test_clients_follow_settings(self, test_settings):
        gateway = get_gateway_client(test_settings)
        speech = get_speech_client(test_settings)

        assert gateway.url == test_settings.gateway_url
        assert gateway.token == "test-gateway-token"
        assert speech.configured is True
        assert speech.base_url == "http://speech.test/v1"

    def test_get_settings_is_module_settings(self):
        from app.core.config import settings

        assert get_settings() is settings
