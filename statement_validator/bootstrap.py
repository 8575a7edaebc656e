"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from statement_validator.api import create_api_application
from statement_validator.config import AppSettings, config_load_settings
from statement_validator.logging_setup import logging_configure


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    logging_configure(level=resolved_settings.log_level)
    return create_api_application(settings=resolved_settings)
