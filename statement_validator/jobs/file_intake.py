"""File intake gate: extension checks and text decoding ahead of validation."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Final

from statement_validator.adapters import (
    RecordParseError,
    UnsupportedFileTypeError,
    adapter_resolve_for_format,
)
from statement_validator.domain import RecordValidationReport
from statement_validator.logging_setup import logging_get_logger

from .record_validation import job_validate_file_text

LOGGER = logging_get_logger(__name__)

ACCEPTED_FILE_EXTENSIONS: Final[dict[str, str]] = {"csv": "csv", "xml": "xml"}

_BYTE_ORDER_MARKS: Final[tuple[tuple[bytes, str], ...]] = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


@dataclass(frozen=True)
class FileValidationResult:
    """Validation outcome for one accepted file.

    Attributes:
        file_name: Name of the submitted file.
        file_format: Resolved format discriminator.
        report: Error-only validation report.
    """

    file_name: str
    file_format: str
    report: RecordValidationReport


def job_resolve_file_format(file_name: str) -> str:
    """Resolve the format discriminator from a file name extension.

    Args:
        file_name: Submitted file name; only the text after the last dot is inspected.

    Returns:
        str: `csv` or `xml`.

    Raises:
        UnsupportedFileTypeError: Raised for any other or missing extension.
    """

    _, separator, extension = file_name.strip().rpartition(".")
    file_format = ACCEPTED_FILE_EXTENSIONS.get(extension.lower()) if separator else None
    if file_format is None:
        raise UnsupportedFileTypeError(
            f"Unsupported file type: {file_name}. Only CSV and XML files are accepted",
            file_name=file_name,
        )
    return file_format


def job_decode_file_bytes(payload_bytes: bytes, encoding: str) -> str:
    """Decode uploaded bytes into text.

    A leading byte order mark selects its own Unicode encoding and is dropped;
    otherwise the configured encoding is used.

    Args:
        payload_bytes: Raw file bytes.
        encoding: Fallback text encoding, e.g. `windows-1252`.

    Returns:
        str: Decoded text without byte order mark.

    Raises:
        RecordParseError: Raised when the bytes are not valid in the selected encoding.
    """

    selected_encoding = encoding
    content = payload_bytes
    for byte_order_mark, bom_encoding in _BYTE_ORDER_MARKS:
        if payload_bytes.startswith(byte_order_mark):
            selected_encoding = bom_encoding
            content = payload_bytes[len(byte_order_mark):]
            break

    try:
        return content.decode(selected_encoding)
    except UnicodeDecodeError as error:
        raise RecordParseError(f"File content is not valid {selected_encoding} text: {error}") from error


def job_validate_file(file_name: str, payload_bytes: bytes, encoding: str) -> FileValidationResult:
    """Gate, decode, parse and validate one submitted file.

    Args:
        file_name: Submitted file name.
        payload_bytes: Raw file bytes.
        encoding: Fallback text encoding.

    Returns:
        FileValidationResult: Resolved format and error-only report.

    Raises:
        UnsupportedFileTypeError: Raised when the extension is not accepted.
        RecordParseError: Raised when the content cannot be decoded or parsed.
    """

    file_format = job_resolve_file_format(file_name)
    raw_text = job_decode_file_bytes(payload_bytes, encoding)
    adapter = adapter_resolve_for_format(file_format)
    try:
        report = job_validate_file_text(raw_text, adapter)
    except RecordParseError as error:
        error.file_name = file_name
        raise

    LOGGER.info(
        "File %s (%s): %d record(s), %d error record(s) after %s phase",
        file_name,
        file_format,
        report.input_record_count,
        len(report.error_records),
        report.phase_completed,
    )
    return FileValidationResult(file_name=file_name, file_format=file_format, report=report)
