"""Reporting package for rendering validation reports."""

from .table import (
    ERROR_RECORDS_TITLE,
    NO_ERROR_RECORDS_MESSAGE,
    report_format_cell,
    report_render_table,
    report_table_headers,
)

__all__ = [
    "ERROR_RECORDS_TITLE",
    "NO_ERROR_RECORDS_MESSAGE",
    "report_format_cell",
    "report_render_table",
    "report_table_headers",
]
