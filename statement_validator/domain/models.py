"""Typed domain models shared across runtime layers.

Raw records enter the system as loosely-keyed field maps. They only become
`AccountRecord` instances after key normalization and structural validation,
and only records that fail a check are turned into `ErrorRecord` values.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Annotated, Final, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

RawFieldValue = Union[str, int, float]
RawFieldMap = dict[str, RawFieldValue]

ACCOUNT_RECORD_FIELDS: Final[tuple[str, ...]] = (
    "reference",
    "accountNumber",
    "startBalance",
    "mutation",
    "endBalance",
    "description",
)
NUMERIC_RECORD_FIELDS: Final[frozenset[str]] = frozenset({"reference", "startBalance", "mutation", "endBalance"})

PHASE_STRUCTURAL: Final[str] = "structural"
PHASE_CONSISTENCY: Final[str] = "consistency"

_NUMBER_NAN_MESSAGE: Final[str] = "Invalid input: expected number, received NaN"
_DECIMAL_LITERAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY_LITERAL_PATTERN = re.compile(r"([+-]?)Infinity")
_RADIX_LITERAL_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def domain_describe_value_type(value: object) -> str:
    """Describe a raw value type using the vocabulary of validation messages.

    Args:
        value: Raw field value.

    Returns:
        str: Type label such as `number`, `string` or `undefined`.
    """

    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def domain_parse_numeric_text(text: str) -> float:
    """Parse numeric text with a strict ASCII numeric-literal grammar.

    Accepted forms are ASCII decimal literals with optional sign, fraction and
    exponent, signed `Infinity`, and unsigned `0x`/`0o`/`0b` integers. Blank
    text is zero. Anything else, including `inf`, `nan`, `1_000` and
    non-ASCII digits, is NaN.

    Args:
        text: Raw numeric text.

    Returns:
        float: Parsed value, NaN when the text is not numeric.
    """

    stripped_text = text.strip()
    if not stripped_text:
        return 0.0
    if _DECIMAL_LITERAL_PATTERN.fullmatch(stripped_text):
        return float(stripped_text)
    infinity_match = _INFINITY_LITERAL_PATTERN.fullmatch(stripped_text)
    if infinity_match is not None:
        return -math.inf if infinity_match.group(1) == "-" else math.inf
    if _RADIX_LITERAL_PATTERN.fullmatch(stripped_text):
        try:
            return float(int(stripped_text, 0))
        except OverflowError:
            return math.inf
    return math.nan


def domain_coerce_number(value: object) -> float:
    """Coerce one raw value into a finite number.

    Strings go through `domain_parse_numeric_text`, so a blank string coerces
    to zero.

    Args:
        value: Raw field value.

    Returns:
        float: Coerced finite number.

    Raises:
        PydanticCustomError: Raised when the value is not a finite number.
    """

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PydanticCustomError("number_coercion", _NUMBER_NAN_MESSAGE)

    if isinstance(value, str):
        number = domain_parse_numeric_text(value)
    else:
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf

    if math.isnan(number):
        raise PydanticCustomError("number_coercion", _NUMBER_NAN_MESSAGE)
    if math.isinf(number):
        raise PydanticCustomError(
            "number_coercion",
            "Invalid input: expected number, received {received}",
            {"received": "Infinity" if number > 0 else "-Infinity"},
        )
    return number


def _domain_coerce_reference(value: object) -> int:
    number = domain_coerce_number(value)
    if not number.is_integer():
        raise PydanticCustomError("int_type", "Invalid input: expected int, received number")
    if number < 0:
        raise PydanticCustomError("too_small", "Too small: expected number to be >=0")
    return int(number)


def _domain_require_string(value: object) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError(
            "string_type",
            "Invalid input: expected string, received {received}",
            {"received": domain_describe_value_type(value)},
        )
    return value


ReferenceNumber = Annotated[int, BeforeValidator(_domain_coerce_reference)]
CoercedNumber = Annotated[float, BeforeValidator(domain_coerce_number)]
RequiredText = Annotated[str, BeforeValidator(_domain_require_string)]


class AccountRecord(BaseModel):
    """Canonical, structurally valid transaction record.

    Attributes:
        reference: Non-negative transaction identifier, unique within one file.
        account_number: Account identifier text.
        start_balance: Balance before the mutation.
        mutation: Signed delta applied to the start balance.
        end_balance: Reported balance after the mutation.
        description: Free-text transaction description.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    reference: ReferenceNumber
    account_number: RequiredText = Field(alias="accountNumber")
    start_balance: CoercedNumber = Field(alias="startBalance")
    mutation: CoercedNumber
    end_balance: CoercedNumber = Field(alias="endBalance")
    description: RequiredText

    def account_record_as_fields(self) -> dict[str, object]:
        """Return canonical field map keyed by canonical field names."""

        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class FieldIssue:
    """One structural failure for one record field.

    Attributes:
        path: Dotted field path of the failing value.
        message: Human-readable failure message.
    """

    path: str
    message: str

    def field_issue_format(self) -> str:
        return f"Field - {self.path} Error - {self.message}"


@dataclass(frozen=True)
class StructuralValidationResult:
    """Outcome of structural validation: a canonical record or a non-empty issue list.

    Attributes:
        record: Canonical record when validation succeeded.
        issues: Ordered field issues when validation failed.
    """

    record: AccountRecord | None = None
    issues: tuple[FieldIssue, ...] = ()

    def __post_init__(self) -> None:
        if (self.record is None) == (not self.issues):
            raise ValueError("exactly one of record or issues must be provided")

    def structural_is_valid(self) -> bool:
        return self.record is not None

    def structural_format_issues(self) -> str:
        """Join all issue messages into one report string."""

        return " | ".join(issue.field_issue_format() for issue in self.issues)


@dataclass(frozen=True)
class ErrorRecord:
    """A failing record with its embedded error description.

    Attributes:
        fields: Ordered record fields as they should be presented.
        errors: One or more joined human-readable error messages.
    """

    fields: dict[str, object]
    errors: str

    def error_record_as_dict(self) -> dict[str, object]:
        """Return the presentation payload with `errors` as the last key."""

        payload = {key: value for key, value in self.fields.items() if key != "errors"}
        payload["errors"] = self.errors
        return payload


@dataclass(frozen=True)
class RecordValidationReport:
    """Result of one pipeline invocation over one file.

    Attributes:
        error_records: Failing records in original file order; empty when the file is valid.
        phase_completed: Last phase that ran (`structural` or `consistency`).
        input_record_count: Number of raw records received from the adapter.
        stage_timeline: Structured stage events captured during the run.
    """

    error_records: tuple[ErrorRecord, ...]
    phase_completed: str
    input_record_count: int
    stage_timeline: list[dict[str, object]] = field(default_factory=list)

    def report_is_valid(self) -> bool:
        return not self.error_records
