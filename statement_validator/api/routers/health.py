"""Health endpoint router composition."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from statement_validator.adapters import SUPPORTED_RECORD_FORMATS
from statement_validator.config import AppSettings


def api_create_health_router(settings: AppSettings) -> APIRouter:
    """Create health-check router.

    Args:
        settings: Validated runtime settings exposed in the health payload.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when settings are missing.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health and intake configuration.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "environment": settings.environment_name,
            "supported_formats": list(SUPPORTED_RECORD_FORMATS),
            "upload_text_encoding": settings.upload_text_encoding,
            "upload_max_bytes": settings.upload_max_bytes,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
