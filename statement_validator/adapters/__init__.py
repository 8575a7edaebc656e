"""Adapter layer package for file-format parsing boundaries."""

from .csv_records import CsvRecordAdapter
from .interfaces import RecordAdapterPort
from .record_errors import RecordIntakeError, RecordParseError, UnsupportedFileTypeError
from .registry import SUPPORTED_RECORD_FORMATS, adapter_resolve_for_format
from .xml_records import XmlRecordAdapter

__all__ = [
	"CsvRecordAdapter",
	"RecordAdapterPort",
	"RecordIntakeError",
	"RecordParseError",
	"SUPPORTED_RECORD_FORMATS",
	"UnsupportedFileTypeError",
	"XmlRecordAdapter",
	"adapter_resolve_for_format",
]
