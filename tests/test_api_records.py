"""Tests for API foundation, health and record validation endpoints."""

from fastapi.testclient import TestClient

from statement_validator.api import create_api_application
from statement_validator.config import AppSettings

_CSV_HEADER = "Reference,AccountNumber,Description,Start Balance,Mutation,End Balance"


def _build_client(upload_max_bytes: int = 1024 * 1024) -> TestClient:
    """Create a test client around a deterministic application.

    Args:
        upload_max_bytes: Upload size limit for the application.

    Returns:
        TestClient: Client bound to a fresh application instance.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    settings = AppSettings(
        environment_name="test",
        upload_text_encoding="windows-1252",
        upload_max_bytes=upload_max_bytes,
    )
    return TestClient(create_api_application(settings))


def test_api_foundation_and_health_report_service_metadata() -> None:
    """Return service metadata from the index and health endpoints.

    Returns:
        None: Assertions validate response payloads.

    Raises:
        AssertionError: Raised when payloads differ.
    """

    client = _build_client()

    index_response = client.get("/")
    health_response = client.get("/health")

    assert index_response.status_code == 200
    assert index_response.json() == {"service": "statement-validator", "status": "ready", "environment": "test"}
    assert health_response.status_code == 200
    assert health_response.json()["status"] == "ok"
    assert health_response.json()["supported_formats"] == ["csv", "xml"]
    assert health_response.json()["upload_text_encoding"] == "windows-1252"


def test_api_records_validate_returns_error_only_report() -> None:
    """Return the failing records of an uploaded CSV file.

    Returns:
        None: Assertions validate the success response.

    Raises:
        AssertionError: Raised when the report differs.
    """

    payload = "\n".join(
        (
            _CSV_HEADER,
            '1,1001,"First",100,20,120',
            '1,1001,"Second",100,20,120',
            '3,1003,"Third",100,10,120',
        )
    ).encode("windows-1252")

    response = _build_client().post("/records/validate", params={"file_name": "statement.csv"}, content=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["file_format"] == "csv"
    assert body["phase_completed"] == "consistency"
    assert body["input_record_count"] == 3
    assert body["error_count"] == 2
    assert [record["errors"] for record in body["error_records"]] == [
        "Duplicate record",
        "Mismatching end balance: Expected: 110, Received: 120",
    ]
    assert list(body["error_records"][1])[-1] == "errors"
    assert [event["stage"] for event in body["stage_timeline"]] == ["parse", "structural", "consistency"]


def test_api_records_validate_keeps_reference_first_for_xml() -> None:
    """Return XML error records with `reference` as the first key.

    Returns:
        None: Assertions validate JSON field order.

    Raises:
        AssertionError: Raised when key order differs.
    """

    payload = (
        b'<records><record description="x" accountNumber="NL1" startBalance="1" mutation="1" '
        b'endBalance="3" reference="4" /></records>'
    )

    response = _build_client().post("/records/validate", params={"file_name": "statement.xml"}, content=payload)

    assert response.status_code == 200
    assert list(response.json()["error_records"][0])[0] == "reference"
    assert response.json()["error_records"][0]["reference"] == 4


def test_api_records_validate_rejects_unsupported_file_type() -> None:
    """Return HTTP 415 for file names without an accepted extension.

    Returns:
        None: Assertions validate the type gate.

    Raises:
        AssertionError: Raised when the file is accepted.
    """

    response = _build_client().post("/records/validate", params={"file_name": "statement.txt"}, content=b"data")

    assert response.status_code == 415
    assert response.json() == {
        "status": "error",
        "message": "Unsupported file type: statement.txt. Only CSV and XML files are accepted",
    }


def test_api_records_validate_rejects_empty_and_oversized_bodies() -> None:
    """Return HTTP 400 for empty bodies and 413 for oversized ones.

    Returns:
        None: Assertions validate upload limits.

    Raises:
        AssertionError: Raised when the limits are not enforced.
    """

    client = _build_client(upload_max_bytes=16)

    empty_response = client.post("/records/validate", params={"file_name": "a.csv"}, content=b"")
    oversized_response = client.post("/records/validate", params={"file_name": "a.csv"}, content=b"x" * 17)

    assert empty_response.status_code == 400
    assert oversized_response.status_code == 413
    assert oversized_response.json()["message"] == "uploaded file exceeds 16 bytes"


def test_api_records_validate_returns_unprocessable_for_parse_failures() -> None:
    """Return HTTP 422 with a generic prefix when the file cannot be parsed.

    Returns:
        None: Assertions validate parse failure reporting.

    Raises:
        AssertionError: Raised when the failure is not reported.
    """

    response = _build_client().post(
        "/records/validate",
        params={"file_name": "broken.xml"},
        content=b"<records><record></records>",
    )

    assert response.status_code == 422
    assert response.json()["status"] == "error"
    assert response.json()["message"].startswith("An error occurred during file parsing: XML content could not")


def test_api_records_validate_requires_file_name() -> None:
    """Reject requests without the `file_name` query parameter.

    Returns:
        None: Assertions validate request validation.

    Raises:
        AssertionError: Raised when the request is accepted.
    """

    response = _build_client().post("/records/validate", content=b"data")

    assert response.status_code == 422


def test_api_records_validate_rejects_oversized_chunked_upload() -> None:
    """Return HTTP 413 for a chunked body that grows past the limit.

    Returns:
        None: Assertions validate the streamed size limit.

    Raises:
        AssertionError: Raised when the oversized stream is accepted.
    """

    client = _build_client(upload_max_bytes=16)

    def _chunks():
        yield b"Reference,Mutat"
        yield b"ion\n1,2\n"

    response = client.post("/records/validate", params={"file_name": "a.csv"}, content=_chunks())

    assert response.status_code == 413
    assert response.json()["message"] == "uploaded file exceeds 16 bytes"
