"""Runtime configuration for the action process.

Uses Pydantic Settings for type-safe, environment-based configuration. These
are process-level knobs (logging, HTTP client defaults); per-invocation
configuration arrives through ``ActionContext`` instead.
"""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Runtime settings with environment variable support."""

    environment: str = Field("development", alias="ACTION_ENVIRONMENT")
    version: str = Field("0.1.0", alias="ACTION_VERSION")

    # Logging configuration
    log_level: str = Field("INFO", alias="ACTION_LOG_LEVEL")
    log_format: str = Field("text", alias="ACTION_LOG_FORMAT")  # text or json

    # HTTP client configuration; None keeps the httpx default timeout
    http_timeout: float | None = Field(None, alias="ACTION_HTTP_TIMEOUT")
    user_agent: str | None = Field(None, alias="ACTION_USER_AGENT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v.lower()

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("HTTP timeout must be positive")
        return v


def get_settings() -> Settings:
    """Build a fresh settings instance from the environment."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance - will be created when first accessed
settings = None


def get_settings_instance() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global settings  # noqa: PLW0603
    if settings is None:
        settings = get_settings()
    return settings
