import logging

import pytest

from anki_mcp.config import Settings


class TestSettings:
    """Test configuration from the environment."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.anki_url == "http://localhost:8765"
        assert settings.api_key is None
        assert settings.timeout is None
        assert settings.log_level == logging.WARNING

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "ANKI_CONNECT_URL": "http://192.168.1.100:8765",
                "ANKI_CONNECT_API_KEY": "test-api-key-123",
                "ANKI_CONNECT_TIMEOUT": "7.5",
                "ANKI_MCP_LOG_LEVEL": "debug",
            }
        )

        assert settings.anki_url == "http://192.168.1.100:8765"
        assert settings.api_key == "test-api-key-123"
        assert settings.timeout == 7.5
        assert settings.log_level == logging.DEBUG

    def test_empty_values_use_defaults(self):
        settings = Settings.from_env({"ANKI_CONNECT_URL": "", "ANKI_CONNECT_API_KEY": ""})

        assert settings.anki_url == "http://localhost:8765"
        assert settings.api_key is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("ANKI_CONNECT_URL", "http://anki:8765")

        assert Settings.from_env().anki_url == "http://anki:8765"

    @pytest.mark.parametrize("value", ["soon", "0", "-3", "nan", "inf"])
    def test_invalid_timeout(self, value):
        with pytest.raises(ValueError):
            Settings.from_env({"ANKI_CONNECT_TIMEOUT": value})

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level: LOUD"):
            Settings.from_env({"ANKI_MCP_LOG_LEVEL": "loud"})
