"""FastAPI application factory for the record validation service."""

from fastapi import FastAPI

from statement_validator.config import AppSettings

from .routers import api_create_health_router, api_create_records_router


def create_api_application(settings: AppSettings) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata and upload handling.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="Statement Record Validator")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identification metadata.

        Returns:
            dict[str, str]: Service name, status and environment.
        """

        return {
            "service": "statement-validator",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(settings=settings))
    application.include_router(api_create_records_router(settings=settings))

    return application
