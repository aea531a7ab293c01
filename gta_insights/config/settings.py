import os
from typing import Optional
import logging

from gta_insights.utils.error_handler import AppError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_LOCATION = "Greater Toronto Area"


class ConfigurationError(AppError):
    """Raised at startup when a required setting is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class Settings:
    """
    Application settings loaded from environment variables with validation.
    """

    def __init__(self):
        # GenAI settings
        self.gemini_api_key = self._get_env("GEMINI_API_KEY")
        self.gemini_model = self._get_env("GEMINI_MODEL", DEFAULT_MODEL)

        # Location shown before the user picks one
        self.default_location = self._get_env("DEFAULT_LOCATION", DEFAULT_LOCATION)

        # Server settings
        self.host = self._get_env("HOST", "0.0.0.0")
        self.port = self._get_int("PORT", "8000")
        self.reload = self._get_env("RELOAD", "false").lower() == "true"
        self.log_level = self._get_env("LOG_LEVEL", "INFO").upper()

        # Rate limiting
        self.rate_limit_per_minute = self._get_int("RATE_LIMIT", "60")

        # Validate configuration
        self._validate_config()

    def _get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get an environment variable or return a default value
        """
        value = os.environ.get(key, default)
        if value is None:
            logger.warning(f"Environment variable {key} not set")
        return value

    def _get_int(self, key: str, default: str) -> int:
        raw = self._get_env(key, default)
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {raw!r}")

    def _validate_config(self):
        """
        Validate configuration. A missing API key is fatal: nothing in the
        application works without it.
        """
        if not self.gemini_api_key:
            logger.critical("CRITICAL: GEMINI_API_KEY environment variable is not set!")
            raise ConfigurationError("API key is missing. Please set GEMINI_API_KEY in your environment or .env file.")
        if self.rate_limit_per_minute <= 0:
            raise ConfigurationError("RATE_LIMIT must be a positive number of requests per minute")

    def __str__(self) -> str:
        """
        Return a string representation of the settings, masking sensitive values
        """
        return (
            f"Settings("
            f"gemini_api_key={'*****' if self.gemini_api_key else None}, "
            f"gemini_model={self.gemini_model}, "
            f"default_location={self.default_location}, "
            f"host={self.host}, "
            f"port={self.port}, "
            f"reload={self.reload}, "
            f"log_level={self.log_level}, "
            f"rate_limit_per_minute={self.rate_limit_per_minute}"
            f")"
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
