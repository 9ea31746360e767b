"""
Unit tests for configuration management.
"""

from datetime import timedelta
from pathlib import Path

import pytest

from lessonshop.utils.config import Config


ENV_VARS = [
    "STOREFRONT_API_URL",
    "STOREFRONT_HTTP_TIMEOUT",
    "STOREFRONT_BREAKER_THRESHOLD",
    "STOREFRONT_BREAKER_TIMEOUT",
    "STOREFRONT_MAX_PRICE",
    "OUTPUT_DIR",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove storefront variables and skip .env loading."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("lessonshop.utils.config.load_dotenv", lambda: None)
    return monkeypatch


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, clean_env):
        """Test values used when nothing is configured."""
        config = Config()

        assert config.api_url == "http://localhost:3000"
        assert config.http_timeout == 10.0
        assert config.breaker_threshold == 5
        assert config.breaker_timeout == timedelta(seconds=30)
        assert config.default_max_price == 9999
        assert config.output_dir == Path("output")
        assert config.log_level == "INFO"
        assert config.validate()

    def test_values_from_environment(self, clean_env):
        """Test values are read from environment variables."""
        clean_env.setenv("STOREFRONT_API_URL", "https://lessons.example.com")
        clean_env.setenv("STOREFRONT_HTTP_TIMEOUT", "2.5")
        clean_env.setenv("STOREFRONT_BREAKER_THRESHOLD", "3")
        clean_env.setenv("STOREFRONT_MAX_PRICE", "500")
        clean_env.setenv("LOG_LEVEL", "debug")

        config = Config()

        assert config.api_url == "https://lessons.example.com"
        assert config.http_timeout == 2.5
        assert config.breaker_threshold == 3
        assert config.default_max_price == 500
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("url", ["localhost:3000", "ftp://lessons.example.com", "http://"])
    def test_invalid_url(self, clean_env, url):
        """Test malformed service URLs are rejected."""
        clean_env.setenv("STOREFRONT_API_URL", url)

        with pytest.raises(ValueError, match="STOREFRONT_API_URL"):
            Config()

    def test_non_numeric_value(self, clean_env):
        """Test numeric settings must parse."""
        clean_env.setenv("STOREFRONT_BREAKER_THRESHOLD", "many")

        with pytest.raises(ValueError, match="STOREFRONT_BREAKER_THRESHOLD must be a number"):
            Config()

    def test_validate_collects_errors(self, clean_env):
        """Test validate reports every problem at once."""
        clean_env.setenv("STOREFRONT_HTTP_TIMEOUT", "0")
        clean_env.setenv("STOREFRONT_MAX_PRICE", "-1")
        clean_env.setenv("LOG_LEVEL", "LOUD")

        config = Config()

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "STOREFRONT_HTTP_TIMEOUT must be positive" in message
        assert "STOREFRONT_MAX_PRICE must not be negative" in message
        assert "LOG_LEVEL must be one of" in message

    def test_create_output_directories(self, clean_env, tmp_path):
        """Test log and export directories are created."""
        clean_env.setenv("OUTPUT_DIR", str(tmp_path / "out"))

        Config().create_output_directories()

        assert (tmp_path / "out" / "logs").is_dir()
        assert (tmp_path / "out" / "exports").is_dir()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
