"""Tests for the command-line entrypoint exit codes and output."""

import json

import pytest

from statement_validator.main import main

_CSV_HEADER = "Reference,AccountNumber,Description,Start Balance,Mutation,End Balance"


@pytest.fixture
def isolated_workdir(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run each CLI test from an empty directory with default settings.

    Args:
        monkeypatch: Pytest fixture for environment isolation.
        tmp_path: Empty working directory.

    Returns:
        Path: Working directory for test files.
    """

    monkeypatch.chdir(tmp_path)
    for variable_name in ("UPLOAD_TEXT_ENCODING", "UPLOAD_MAX_BYTES"):
        monkeypatch.delenv(variable_name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return tmp_path


def test_main_validate_returns_zero_for_valid_file(isolated_workdir, capsys: pytest.CaptureFixture[str]) -> None:
    """Exit with 0 and print the no-errors message for a valid file.

    Returns:
        None: Assertions validate exit code and output.

    Raises:
        AssertionError: Raised when the exit code or output differs.
    """

    file_path = isolated_workdir / "valid.csv"
    file_path.write_text(f'{_CSV_HEADER}\n1,1001,"Valid record",100,20,120\n', encoding="windows-1252")

    exit_code = main(["validate", str(file_path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "No error records found!"


def test_main_validate_returns_one_and_prints_table(isolated_workdir, capsys: pytest.CaptureFixture[str]) -> None:
    """Exit with 1 and print the error table when records fail.

    Returns:
        None: Assertions validate exit code and table output.

    Raises:
        AssertionError: Raised when the exit code or output differs.
    """

    file_path = isolated_workdir / "records.xml"
    file_path.write_text(
        '<records><record reference="1" accountNumber="NL1" startBalance="100" mutation="10" '
        'endBalance="120" description="Off" /></records>',
        encoding="utf-8",
    )

    exit_code = main(["validate", str(file_path)])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert output.startswith("Records with Errors:")
    assert "Mismatching end balance: Expected: 110, Received: 120" in output


def test_main_validate_prints_json_report(isolated_workdir, capsys: pytest.CaptureFixture[str]) -> None:
    """Print the JSON report when requested.

    Returns:
        None: Assertions validate JSON output.

    Raises:
        AssertionError: Raised when the JSON payload differs.
    """

    file_path = isolated_workdir / "records.csv"
    file_path.write_text(f"{_CSV_HEADER}\n1,1001,x,1,33e,2\n", encoding="windows-1252")

    exit_code = main(["validate", str(file_path), "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["phase_completed"] == "structural"
    assert payload["error_records"][0]["mutation"] == "33e"


def test_main_validate_returns_two_for_rejected_files(isolated_workdir, capsys: pytest.CaptureFixture[str]) -> None:
    """Exit with 2 and report on stderr for rejected or unparseable files.

    Returns:
        None: Assertions validate rejection handling.

    Raises:
        AssertionError: Raised when rejected files are validated.
    """

    unsupported_path = isolated_workdir / "records.txt"
    unsupported_path.write_text("data", encoding="utf-8")
    broken_path = isolated_workdir / "broken.xml"
    broken_path.write_text("<records><record></records>", encoding="utf-8")

    assert main(["validate", str(unsupported_path)]) == 2
    assert "Unsupported file type: records.txt" in capsys.readouterr().err
    assert main(["validate", str(broken_path)]) == 2
    assert "An error occurred during file parsing" in capsys.readouterr().err
    assert main(["validate", str(isolated_workdir / "missing.csv")]) == 2
    assert "could not be read" in capsys.readouterr().err


def test_main_validate_requires_path(isolated_workdir) -> None:
    """Exit through argparse when `validate` has no path.

    Returns:
        None: Assertions validate argument checking.

    Raises:
        AssertionError: Raised when the command runs without a path.
    """

    with pytest.raises(SystemExit) as exit_info:
        main(["validate"])

    assert exit_info.value.code == 2
