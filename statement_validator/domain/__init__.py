"""Domain models and record rules shared across application layer boundaries."""

from .consistency_checks import (
    DUPLICATE_RECORD_MESSAGE,
    INVALID_BALANCE_NUMBER_MESSAGE,
    DuplicateReferenceDetector,
    domain_check_end_balance,
    domain_format_number,
    domain_round_to_cents,
)
from .key_normalization import domain_normalize_field_name, domain_normalize_record_keys
from .models import (
    ACCOUNT_RECORD_FIELDS,
    PHASE_CONSISTENCY,
    PHASE_STRUCTURAL,
    AccountRecord,
    ErrorRecord,
    FieldIssue,
    RawFieldMap,
    RawFieldValue,
    RecordValidationReport,
    StructuralValidationResult,
    domain_parse_numeric_text,
)
from .structural_validation import domain_validate_record_structure
from .timeline import domain_build_stage_event

__all__ = [
    "ACCOUNT_RECORD_FIELDS",
    "DUPLICATE_RECORD_MESSAGE",
    "INVALID_BALANCE_NUMBER_MESSAGE",
    "PHASE_CONSISTENCY",
    "PHASE_STRUCTURAL",
    "AccountRecord",
    "DuplicateReferenceDetector",
    "ErrorRecord",
    "FieldIssue",
    "RawFieldMap",
    "RawFieldValue",
    "RecordValidationReport",
    "StructuralValidationResult",
    "domain_build_stage_event",
    "domain_check_end_balance",
    "domain_format_number",
    "domain_normalize_field_name",
    "domain_normalize_record_keys",
    "domain_parse_numeric_text",
    "domain_round_to_cents",
    "domain_validate_record_structure",
]
