"""API router package for endpoint composition."""

from .health import api_create_health_router
from .records import api_create_records_router, api_serialize_file_validation_result

__all__ = ["api_create_health_router", "api_create_records_router", "api_serialize_file_validation_result"]
