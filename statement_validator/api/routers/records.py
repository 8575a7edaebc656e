"""Record validation API router for file upload and error-report endpoints."""

from __future__ import annotations

from typing import Final

from fastapi import APIRouter, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from statement_validator.adapters import RecordParseError, UnsupportedFileTypeError
from statement_validator.config import AppSettings
from statement_validator.jobs import FileValidationResult, job_resolve_file_format, job_validate_file
from statement_validator.logging_setup import logging_get_logger

LOGGER = logging_get_logger(__name__)

# numeric codes: the status constant names differ across Starlette releases
_HTTP_CONTENT_TOO_LARGE: Final[int] = 413
_HTTP_UNPROCESSABLE_CONTENT: Final[int] = 422


def api_create_records_router(settings: AppSettings) -> APIRouter:
    """Create records router with the upload-and-validate endpoint.

    Args:
        settings: Runtime settings used for decoding and upload limits.

    Returns:
        APIRouter: Router exposing record validation APIs.

    Raises:
        ValueError: Raised when settings are missing.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(prefix="/records", tags=["records"])

    @router.post("/validate")
    async def api_records_validate(
        request: Request,
        file_name: str = Query(min_length=1),
    ) -> JSONResponse:
        """Validate one uploaded CSV or XML file sent as the raw request body.

        Args:
            request: Incoming request carrying file bytes.
            file_name: Original file name; its extension selects the format.

        Returns:
            JSONResponse: Error-only report, or an error payload when the file is rejected.
        """

        try:
            job_resolve_file_format(file_name)
        except UnsupportedFileTypeError as error:
            payload = {
                "status": "error",
                "message": str(error),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

        payload_bytes = await api_read_limited_body(request, settings.upload_max_bytes)
        if payload_bytes is None:
            payload = {
                "status": "error",
                "message": f"uploaded file exceeds {settings.upload_max_bytes} bytes",
            }
            return JSONResponse(content=payload, status_code=_HTTP_CONTENT_TOO_LARGE)
        if not payload_bytes:
            payload = {
                "status": "error",
                "message": "uploaded file must not be empty",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        try:
            validation_result = await run_in_threadpool(
                job_validate_file,
                file_name,
                payload_bytes,
                settings.upload_text_encoding,
            )
        except RecordParseError as error:
            LOGGER.warning("File %s could not be processed: %s", file_name, error)
            payload = {
                "status": "error",
                "message": f"An error occurred during file parsing: {error}",
            }
            return JSONResponse(content=payload, status_code=_HTTP_UNPROCESSABLE_CONTENT)

        return JSONResponse(
            content=api_serialize_file_validation_result(validation_result),
            status_code=status.HTTP_200_OK,
        )

    return router


async def api_read_limited_body(request: Request, max_bytes: int) -> bytes | None:
    """Read the request body without buffering more than `max_bytes`.

    A declared `Content-Length` above the limit is rejected before any body
    bytes are read; otherwise the stream is consumed until it ends or passes
    the limit.

    Args:
        request: Incoming request carrying file bytes.
        max_bytes: Largest accepted body size.

    Returns:
        bytes | None: Complete body, or None when it exceeds the limit.
    """

    declared_length = request.headers.get("content-length", "")
    if declared_length.isdigit() and int(declared_length) > max_bytes:
        return None

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            LOGGER.info("Upload stream passed %d bytes; rejecting", max_bytes)
            return None
    return bytes(body)


def api_serialize_file_validation_result(validation_result: FileValidationResult) -> dict[str, object]:
    """Serialize one file validation result to a JSON response payload.

    Args:
        validation_result: Typed file validation result.

    Returns:
        dict[str, object]: JSON-serializable payload; error records keep their field order.
    """

    report = validation_result.report
    return {
        "file_name": validation_result.file_name,
        "file_format": validation_result.file_format,
        "phase_completed": report.phase_completed,
        "input_record_count": report.input_record_count,
        "error_count": len(report.error_records),
        "error_records": [error_record.error_record_as_dict() for error_record in report.error_records],
        "stage_timeline": report.stage_timeline,
    }
