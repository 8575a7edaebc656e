"""Two-phase record validation pipeline producing error-only reports.

Phase one normalizes and structurally validates every record. Only when the
whole file is structurally valid does phase two run the duplicate and balance
checks; a single structural failure means the structural failures are the
complete report for that file.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import Final

from statement_validator.adapters import RecordAdapterPort
from statement_validator.domain import (
    PHASE_CONSISTENCY,
    PHASE_STRUCTURAL,
    AccountRecord,
    DuplicateReferenceDetector,
    ErrorRecord,
    RawFieldValue,
    RecordValidationReport,
    domain_build_stage_event,
    domain_check_end_balance,
    domain_normalize_record_keys,
    domain_validate_record_structure,
)
from statement_validator.logging_setup import logging_get_logger

LOGGER = logging_get_logger(__name__)

CONSISTENCY_ERROR_SEPARATOR: Final[str] = " &\n"


def job_validate_file_text(raw_text: str, adapter: RecordAdapterPort) -> RecordValidationReport:
    """Parse raw file text with one adapter and validate the resulting records.

    Args:
        raw_text: Fully materialized, decoded file content.
        adapter: Format adapter for the file.

    Returns:
        RecordValidationReport: Error-only report in file order.

    Raises:
        RecordParseError: Raised when the adapter cannot parse the text at all.
    """

    parse_started = time.monotonic()
    raw_records = adapter.adapter_parse_records(raw_text)
    parse_event = domain_build_stage_event(
        stage="parse",
        status="completed",
        started_monotonic=parse_started,
        details={"file_format": adapter.adapter_format_name(), "record_count": len(raw_records)},
    )
    return job_validate_records(
        raw_records=raw_records,
        reference_first=adapter.adapter_reference_first(),
        stage_timeline=[parse_event],
    )


def job_validate_records(
    raw_records: Sequence[Mapping[str, RawFieldValue]],
    reference_first: bool = False,
    stage_timeline: list[dict[str, object]] | None = None,
) -> RecordValidationReport:
    """Run the two-phase validation policy over one file's raw records.

    Args:
        raw_records: Raw field maps in original file order.
        reference_first: Whether error records present `reference` as their first field.
        stage_timeline: Optional events captured by earlier stages, extended in place.

    Returns:
        RecordValidationReport: Structural failures when any exist, else consistency failures.

    Raises:
        RuntimeError: This workflow does not raise for expected validation failures.
    """

    timeline = stage_timeline if stage_timeline is not None else []

    structural_started = time.monotonic()
    structural_failures: list[ErrorRecord] = []
    validated_records: list[AccountRecord] = []
    for raw_record in raw_records:
        normalized_record = domain_normalize_record_keys(raw_record)
        validation_result = domain_validate_record_structure(normalized_record)
        if validation_result.record is None:
            structural_failures.append(
                _job_build_error_record(
                    fields=normalized_record,
                    errors=validation_result.structural_format_issues(),
                    reference_first=reference_first,
                )
            )
            continue
        validated_records.append(validation_result.record)

    timeline.append(
        domain_build_stage_event(
            stage=PHASE_STRUCTURAL,
            status="failed" if structural_failures else "completed",
            started_monotonic=structural_started,
            details={"record_count": len(raw_records), "failure_count": len(structural_failures)},
        )
    )

    if structural_failures:
        timeline.append(
            domain_build_stage_event(
                stage=PHASE_CONSISTENCY,
                status="skipped",
                details={"reason": "structural failures present"},
            )
        )
        for failure in structural_failures:
            LOGGER.debug("Structural failure: %s", failure.errors)
        LOGGER.info(
            "Validated %d record(s): %d structural failure(s); consistency checks skipped",
            len(raw_records),
            len(structural_failures),
        )
        return RecordValidationReport(
            error_records=tuple(structural_failures),
            phase_completed=PHASE_STRUCTURAL,
            input_record_count=len(raw_records),
            stage_timeline=timeline,
        )

    consistency_started = time.monotonic()
    consistency_failures, duplicate_count, balance_failure_count = _job_run_consistency_checks(
        raw_records=raw_records,
        validated_records=validated_records,
        reference_first=reference_first,
    )
    timeline.append(
        domain_build_stage_event(
            stage=PHASE_CONSISTENCY,
            status="failed" if consistency_failures else "completed",
            started_monotonic=consistency_started,
            details={
                "failure_count": len(consistency_failures),
                "duplicate_count": duplicate_count,
                "balance_failure_count": balance_failure_count,
            },
        )
    )
    LOGGER.info(
        "Validated %d record(s): %d consistency failure(s) (%d duplicate, %d balance)",
        len(raw_records),
        len(consistency_failures),
        duplicate_count,
        balance_failure_count,
    )
    return RecordValidationReport(
        error_records=tuple(consistency_failures),
        phase_completed=PHASE_CONSISTENCY,
        input_record_count=len(raw_records),
        stage_timeline=timeline,
    )


def _job_run_consistency_checks(
    raw_records: Sequence[Mapping[str, RawFieldValue]],
    validated_records: list[AccountRecord],
    reference_first: bool,
) -> tuple[list[ErrorRecord], int, int]:
    """Run duplicate and balance checks per record in file order.

    Args:
        raw_records: Raw field maps in file order.
        validated_records: Canonical records aligned one-to-one with `raw_records`.
        reference_first: Whether error records present `reference` first.

    Returns:
        tuple[list[ErrorRecord], int, int]: Failing records, duplicate count, balance failure count.

    Raises:
        ValueError: Raised when the two sequences are not aligned.
    """

    if len(raw_records) != len(validated_records):
        raise ValueError("validated_records must align with raw_records")

    duplicate_detector = DuplicateReferenceDetector()
    failures: list[ErrorRecord] = []
    duplicate_count = 0
    balance_failure_count = 0

    for raw_record, record in zip(raw_records, validated_records):
        record_errors: list[str] = []

        duplicate_error = duplicate_detector.duplicate_register(record.reference)
        if duplicate_error is not None:
            duplicate_count += 1
            record_errors.append(duplicate_error)

        balance_error = domain_check_end_balance(record)
        if balance_error is not None:
            balance_failure_count += 1
            record_errors.append(balance_error)

        if not record_errors:
            continue

        normalized_record = domain_normalize_record_keys(raw_record)
        canonical_fields = record.account_record_as_fields()
        failures.append(
            _job_build_error_record(
                fields={key: canonical_fields.get(key, value) for key, value in normalized_record.items()},
                errors=CONSISTENCY_ERROR_SEPARATOR.join(record_errors),
                reference_first=reference_first,
            )
        )

    return failures, duplicate_count, balance_failure_count


def _job_build_error_record(
    fields: Mapping[str, object],
    errors: str,
    reference_first: bool,
) -> ErrorRecord:
    """Build one error record with presentation field ordering applied.

    Args:
        fields: Record fields in source order.
        errors: Joined error description.
        reference_first: Whether `reference` moves to the first position.

    Returns:
        ErrorRecord: Immutable error record.
    """

    ordered_fields = dict(fields)
    if reference_first and "reference" in ordered_fields:
        reference_value = ordered_fields.pop("reference")
        ordered_fields = {"reference": reference_value, **ordered_fields}
    return ErrorRecord(fields=ordered_fields, errors=errors)
