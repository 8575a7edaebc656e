"""CSV record adapter producing one raw field map per data row."""

from __future__ import annotations

import csv
import io

from statement_validator.domain import RawFieldMap
from statement_validator.logging_setup import logging_get_logger

from .interfaces import RecordAdapterPort
from .record_errors import RecordParseError

LOGGER = logging_get_logger(__name__)


class CsvRecordAdapter(RecordAdapterPort):
    """Header-driven CSV adapter.

    The first non-empty row is the header. Empty lines are skipped anywhere in
    the file. Short rows omit the missing keys so they fail structural
    validation downstream; cells beyond the header are dropped. A repeated
    header cell is renamed with a numeric suffix (`Mutation_1`), so the first
    column keeps the canonical name.
    """

    _FORMAT_NAME = "csv"

    def adapter_format_name(self) -> str:
        return self._FORMAT_NAME

    def adapter_reference_first(self) -> bool:
        return False

    def adapter_parse_records(self, raw_text: str) -> list[RawFieldMap]:
        """Parse CSV text into raw field maps keyed by header cells.

        Args:
            raw_text: Decoded CSV content.

        Returns:
            list[RawFieldMap]: Raw field maps in file order; empty when there is no data row.

        Raises:
            RecordParseError: Raised when the CSV reader aborts on the content.
        """

        text = raw_text[1:] if raw_text.startswith("\ufeff") else raw_text
        # a single cell may span the whole document
        if len(text) > csv.field_size_limit():
            csv.field_size_limit(len(text))
        try:
            rows = [row for row in csv.reader(io.StringIO(text, newline="")) if row]
        except csv.Error as error:
            raise RecordParseError(f"CSV content could not be read: {error}") from error

        if not rows:
            return []

        header, data_rows = _csv_deduplicate_header(rows[0]), rows[1:]
        records: list[RawFieldMap] = []
        for row_number, row in enumerate(data_rows, start=1):
            if len(row) > len(header):
                LOGGER.debug(
                    "Dropping %d surplus CSV cell(s) in data row %d",
                    len(row) - len(header),
                    row_number,
                )
            records.append({column_name: cell for column_name, cell in zip(header, row)})

        LOGGER.debug("Parsed %d CSV record(s) with %d header column(s)", len(records), len(header))
        return records


def _csv_deduplicate_header(header_cells: list[str]) -> list[str]:
    """Rename repeated header cells to `<name>_<n>`, skipping names already taken.

    Args:
        header_cells: Raw header row.

    Returns:
        list[str]: Header names, unique within the row.
    """

    used_names = set(header_cells)
    occurrence_counts: dict[str, int] = {}
    unique_cells: list[str] = []
    for cell in header_cells:
        seen_count = occurrence_counts.get(cell, 0)
        occurrence_counts[cell] = seen_count + 1
        if seen_count == 0:
            unique_cells.append(cell)
            continue

        suffix = seen_count
        renamed_cell = f"{cell}_{suffix}"
        while renamed_cell in used_names:
            suffix += 1
            renamed_cell = f"{cell}_{suffix}"
        used_names.add(renamed_cell)
        LOGGER.debug("Renaming repeated CSV header %r to %r", cell, renamed_cell)
        unique_cells.append(renamed_cell)
    return unique_cells
