"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from datetime import timedelta
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a ``.env``
    file if present) and provides validated access to the values.

    Attributes:
        api_url: Base URL of the catalog service
        http_timeout: HTTP transport timeout in seconds
        breaker_threshold: Consecutive failures before the breaker opens
        breaker_timeout: How long the breaker stays open
        default_max_price: Upper price bound of a fresh filter state
        output_dir: Output directory for exports and logs
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Catalog service: {config.api_url}")
    """

    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    @staticmethod
    def _validate_url(url: str, name: str) -> str:
        """
        Validate URL format and scheme.

        Raises:
            ValueError: If URL is invalid
        """
        parsed = urlparse(url)

        if not parsed.scheme:
            raise ValueError(f"{name} must include URL scheme (http/https)")

        if parsed.scheme not in ['http', 'https']:
            raise ValueError(f"{name} must use http or https scheme, got: {parsed.scheme}")

        if not parsed.netloc:
            raise ValueError(f"{name} must have a valid host")

        return url

    @staticmethod
    def _read_number(name: str, default: str, cast=int):
        raw = os.getenv(name, default)
        try:
            return cast(raw)
        except ValueError:
            raise ValueError(f"{name} must be a number, got: {raw}")

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        url = os.getenv("STOREFRONT_API_URL", "http://localhost:3000")
        self._api_url = self._validate_url(url, "STOREFRONT_API_URL")

        self._http_timeout = self._read_number("STOREFRONT_HTTP_TIMEOUT", "10", float)
        self._breaker_threshold = self._read_number("STOREFRONT_BREAKER_THRESHOLD", "5")
        self._breaker_timeout = self._read_number("STOREFRONT_BREAKER_TIMEOUT", "30", float)
        self._default_max_price = self._read_number("STOREFRONT_MAX_PRICE", "9999", float)

        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def api_url(self) -> str:
        """Get catalog service base URL."""
        return self._api_url

    @property
    def http_timeout(self) -> float:
        """Get HTTP transport timeout in seconds."""
        return self._http_timeout

    @property
    def breaker_threshold(self) -> int:
        return self._breaker_threshold

    @property
    def breaker_timeout(self) -> timedelta:
        return timedelta(seconds=self._breaker_timeout)

    @property
    def default_max_price(self) -> float:
        """Get the default upper bound of the price filter."""
        return self._default_max_price

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails, listing every problem
        """
        errors = []

        if self._http_timeout <= 0:
            errors.append("STOREFRONT_HTTP_TIMEOUT must be positive")

        if self._breaker_threshold <= 0:
            errors.append("STOREFRONT_BREAKER_THRESHOLD must be positive")

        if self._breaker_timeout <= 0:
            errors.append("STOREFRONT_BREAKER_TIMEOUT must be positive")

        if self._default_max_price < 0:
            errors.append("STOREFRONT_MAX_PRICE must not be negative")

        if self._log_level not in self.VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(self.VALID_LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        for directory in [self.output_dir / "logs", self.output_dir / "exports"]:
            directory.mkdir(parents=True, exist_ok=True)


# Singleton instance
config = Config()
