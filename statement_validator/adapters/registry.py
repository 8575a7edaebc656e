"""Format discriminator to adapter resolution."""

from __future__ import annotations

from typing import Final

from .csv_records import CsvRecordAdapter
from .interfaces import RecordAdapterPort
from .record_errors import UnsupportedFileTypeError
from .xml_records import XmlRecordAdapter

SUPPORTED_RECORD_FORMATS: Final[tuple[str, ...]] = ("csv", "xml")


def adapter_resolve_for_format(file_format: str) -> RecordAdapterPort:
    """Return a fresh adapter for one format discriminator.

    Args:
        file_format: Format discriminator, `csv` or `xml` (case-insensitive).

    Returns:
        RecordAdapterPort: Adapter able to parse the format.

    Raises:
        UnsupportedFileTypeError: Raised for any other discriminator.
    """

    normalized_format = file_format.strip().lower()
    if normalized_format == "csv":
        return CsvRecordAdapter()
    if normalized_format == "xml":
        return XmlRecordAdapter()
    raise UnsupportedFileTypeError(
        f"Unsupported file format: {file_format}. Supported formats: {', '.join(SUPPORTED_RECORD_FORMATS)}"
    )
