"""Plain-text table rendering for error-only validation reports."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from statement_validator.domain import ErrorRecord, domain_format_number

NO_ERROR_RECORDS_MESSAGE: Final[str] = "No error records found!"
ERROR_RECORDS_TITLE: Final[str] = "Records with Errors:"


def report_table_headers(error_records: Sequence[ErrorRecord]) -> list[str]:
    """Return table columns: the keys of the first error record, `errors` last."""

    if not error_records:
        return []
    return list(error_records[0].error_record_as_dict())


def report_format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return domain_format_number(value)
    return str(value)


def report_render_table(error_records: Sequence[ErrorRecord]) -> str:
    """Render error records as an aligned text table.

    Columns come from the first record; later records missing a column render
    an empty cell. Multi-line error text spans several table lines.

    Args:
        error_records: Report entries in file order.

    Returns:
        str: Rendered table, or the no-errors message for an empty report.
    """

    if not error_records:
        return NO_ERROR_RECORDS_MESSAGE

    headers = report_table_headers(error_records)
    row_cells: list[list[list[str]]] = []
    for error_record in error_records:
        payload = error_record.error_record_as_dict()
        row_cells.append([report_format_cell(payload.get(header)).split("\n") for header in headers])

    column_widths = [len(header) for header in headers]
    for cells in row_cells:
        for column_index, cell_lines in enumerate(cells):
            column_widths[column_index] = max(column_widths[column_index], *(len(line) for line in cell_lines))

    lines = [ERROR_RECORDS_TITLE, ""]
    lines.append(" | ".join(header.upper().ljust(width) for header, width in zip(headers, column_widths)).rstrip())
    lines.append("-+-".join("-" * width for width in column_widths))
    for cells in row_cells:
        line_count = max(len(cell_lines) for cell_lines in cells)
        for line_index in range(line_count):
            rendered_cells = [
                (cell_lines[line_index] if line_index < len(cell_lines) else "").ljust(width)
                for cell_lines, width in zip(cells, column_widths)
            ]
            lines.append(" | ".join(rendered_cells).rstrip())
    return "\n".join(lines)
