"""Job layer package for record intake and validation workflows."""

from .file_intake import (
	ACCEPTED_FILE_EXTENSIONS,
	FileValidationResult,
	job_decode_file_bytes,
	job_resolve_file_format,
	job_validate_file,
)
from .record_validation import CONSISTENCY_ERROR_SEPARATOR, job_validate_file_text, job_validate_records

__all__ = [
	"ACCEPTED_FILE_EXTENSIONS",
	"CONSISTENCY_ERROR_SEPARATOR",
	"FileValidationResult",
	"job_decode_file_bytes",
	"job_resolve_file_format",
	"job_validate_file",
	"job_validate_file_text",
	"job_validate_records",
]
