"""Tests for the CSV record adapter."""

from statement_validator.adapters import CsvRecordAdapter
from statement_validator.jobs import job_validate_file_text

_CSV_HEADER = "Reference,AccountNumber,Description,Start Balance,Mutation,End Balance"


def test_csv_adapter_maps_data_rows_onto_header_cells() -> None:
    """Map each data row onto the raw header cells in source order.

    Returns:
        None: Assertions validate header-driven parsing.

    Raises:
        AssertionError: Raised when row mapping is incorrect.
    """

    raw_text = f'{_CSV_HEADER}\n1,NL91RABO0315273637,"Coffee, large",100,-2.5,97.5\n'

    records = CsvRecordAdapter().adapter_parse_records(raw_text)

    assert records == [
        {
            "Reference": "1",
            "AccountNumber": "NL91RABO0315273637",
            "Description": "Coffee, large",
            "Start Balance": "100",
            "Mutation": "-2.5",
            "End Balance": "97.5",
        }
    ]
    assert list(records[0])[0] == "Reference"


def test_csv_adapter_skips_blank_lines_and_handles_quoted_newlines() -> None:
    """Skip empty lines and keep quoted multi-line cells intact.

    Returns:
        None: Assertions validate CSV dialect handling.

    Raises:
        AssertionError: Raised when rows are lost or split.
    """

    raw_text = f'\r\n{_CSV_HEADER}\r\n\r\n1,A,"two\nlines",1,1,2\r\n\r\n2,B,plain,1,1,2\r\n'

    records = CsvRecordAdapter().adapter_parse_records(raw_text)

    assert [record["Reference"] for record in records] == ["1", "2"]
    assert records[0]["Description"] == "two\nlines"


def test_csv_adapter_omits_missing_cells_and_drops_surplus_cells() -> None:
    """Omit keys for short rows and ignore cells beyond the header.

    Returns:
        None: Assertions validate ragged row handling.

    Raises:
        AssertionError: Raised when ragged rows are mapped incorrectly.
    """

    raw_text = f"{_CSV_HEADER}\n1,A,short\n2,B,long,1,1,2,surplus\n"

    records = CsvRecordAdapter().adapter_parse_records(raw_text)

    assert records[0] == {"Reference": "1", "AccountNumber": "A", "Description": "short"}
    assert len(records[1]) == 6
    assert "surplus" not in records[1].values()


def test_csv_adapter_returns_no_records_for_empty_or_header_only_text() -> None:
    """Return zero records when there is no data row.

    Returns:
        None: Assertions validate empty input handling.

    Raises:
        AssertionError: Raised when records are produced from nothing.
    """

    adapter = CsvRecordAdapter()

    assert adapter.adapter_parse_records("") == []
    assert adapter.adapter_parse_records("\n\n") == []
    assert adapter.adapter_parse_records(f"{_CSV_HEADER}\n") == []


def test_csv_adapter_strips_byte_order_mark_from_first_header() -> None:
    """Drop a leading byte order mark so the first header stays clean.

    Returns:
        None: Assertions validate BOM handling.

    Raises:
        AssertionError: Raised when the BOM leaks into a key.
    """

    records = CsvRecordAdapter().adapter_parse_records(f"\ufeff{_CSV_HEADER}\n1,A,x,1,1,2\n")

    assert "Reference" in records[0]


def test_csv_adapter_reads_cells_beyond_default_reader_limit() -> None:
    """Read a description longer than the csv module's default field limit.

    Returns:
        None: Assertions validate that long cells validate like any other.

    Raises:
        AssertionError: Raised when a long cell aborts parsing.
    """

    long_description = "x" * 200_000
    raw_text = f"{_CSV_HEADER}\n1,1001,{long_description},100,20,120\n"

    records = CsvRecordAdapter().adapter_parse_records(raw_text)
    report = job_validate_file_text(raw_text, CsvRecordAdapter())

    assert records[0]["Description"] == long_description
    assert report.error_records == ()
    assert report.input_record_count == 1


def test_csv_adapter_renames_repeated_header_cells() -> None:
    """Suffix repeated header cells so the first column keeps its name.

    Returns:
        None: Assertions validate repeated header handling.

    Raises:
        AssertionError: Raised when a later column overwrites an earlier one.
    """

    raw_text = "Mutation,Mutation,Mutation_1,Mutation\n1,2,3,4\n"

    records = CsvRecordAdapter().adapter_parse_records(raw_text)

    assert records == [{"Mutation": "1", "Mutation_2": "2", "Mutation_1": "3", "Mutation_3": "4"}]


def test_csv_repeated_header_keeps_first_column_for_validation() -> None:
    """Validate the first of two same-named columns.

    Returns:
        None: Assertions validate that the first column's value is checked.

    Raises:
        AssertionError: Raised when the later column's value is validated.
    """

    raw_text = f"{_CSV_HEADER},Mutation\n1,1001,ok,100,20,120,33e\n"

    report = job_validate_file_text(raw_text, CsvRecordAdapter())

    assert report.error_records == ()


def test_csv_adapter_keeps_source_field_order_for_reports() -> None:
    """Report that CSV error records keep source field order.

    Returns:
        None: Assertions validate adapter metadata.

    Raises:
        AssertionError: Raised when adapter metadata is wrong.
    """

    adapter = CsvRecordAdapter()

    assert adapter.adapter_format_name() == "csv"
    assert adapter.adapter_reference_first() is False
