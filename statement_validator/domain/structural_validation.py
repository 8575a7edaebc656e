"""Structural validation of normalized records against the canonical schema."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .models import (
    NUMERIC_RECORD_FIELDS,
    AccountRecord,
    FieldIssue,
    StructuralValidationResult,
)


def domain_validate_record_structure(normalized_record: Mapping[str, object]) -> StructuralValidationResult:
    """Coerce one normalized record into an `AccountRecord`.

    Every failing field is reported, in canonical field order. Cross-field
    arithmetic and reference uniqueness are not inspected here.

    Args:
        normalized_record: Field map with normalized keys.

    Returns:
        StructuralValidationResult: Canonical record on success, else the ordered field issues.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        record = AccountRecord.model_validate(dict(normalized_record))
    except ValidationError as error:
        issues = tuple(_domain_build_field_issue(error_detail) for error_detail in error.errors(include_url=False))
        return StructuralValidationResult(issues=issues)
    return StructuralValidationResult(record=record)


def _domain_build_field_issue(error_detail: Mapping[str, Any]) -> FieldIssue:
    """Translate one pydantic error entry into a field issue.

    Args:
        error_detail: One entry of `ValidationError.errors()`.

    Returns:
        FieldIssue: Field path and human-readable message.
    """

    path = ".".join(str(location_part) for location_part in error_detail.get("loc", ()))
    if error_detail.get("type") != "missing":
        return FieldIssue(path=path, message=str(error_detail.get("msg", "")))

    # absent numeric fields coerce to NaN, absent text fields are undefined
    if path in NUMERIC_RECORD_FIELDS:
        return FieldIssue(path=path, message="Invalid input: expected number, received NaN")
    return FieldIssue(path=path, message="Invalid input: expected string, received undefined")
