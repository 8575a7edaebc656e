"""Typed runtime settings with dotenv support and startup validation."""

import codecs
import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and upload handling.

    Environment variable names map directly to field names in uppercase.
    Example: `upload_text_encoding` reads from `UPLOAD_TEXT_ENCODING`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        upload_text_encoding: Codec used to decode uploaded file bytes into text.
        upload_max_bytes: Maximum accepted upload size in bytes.
        log_level: Standard logging level name for the package logger.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    upload_text_encoding: str = Field(default="windows-1252", min_length=1)
    upload_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    log_level: str = Field(default="INFO")

    @field_validator("upload_text_encoding")
    @classmethod
    def _validate_known_encoding(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        try:
            codecs.lookup(stripped_value)
        except LookupError as error:
            raise ValueError(f"unknown text encoding: {stripped_value}") from error
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized_value), int):
            raise ValueError(f"unsupported log level: {value}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
