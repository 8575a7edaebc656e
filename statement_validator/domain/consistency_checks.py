"""Cross-field and cross-record consistency checks for validated records."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Final

from .models import AccountRecord

DUPLICATE_RECORD_MESSAGE: Final[str] = "Duplicate record"
INVALID_BALANCE_NUMBER_MESSAGE: Final[str] = "Invalid number format for balance or mutation."

_CENT_EXPONENT: Final[Decimal] = Decimal("0.01")
# wide enough to quantize any finite float without InvalidOperation
_ROUNDING_CONTEXT: Final[Context] = Context(prec=400, rounding=ROUND_HALF_UP)


def domain_format_number(value: float) -> str:
    """Render a number in its shortest round-trip form.

    Plain notation is used from 1e-6 up to below 1e21 (`110`, `110.5`,
    `0.000001`); outside that range the exponent is written without padding
    (`1e-7`, `1.5e+21`).

    Args:
        value: Finite or non-finite float value.

    Returns:
        str: Shortest text that reads back as the same value.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    shortest = Decimal(repr(abs(value)))
    _, digit_tuple, exponent = shortest.as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    digit_count = len(digits)
    point_position = digit_count + exponent

    if digit_count <= point_position <= 21:
        return sign + digits + "0" * (point_position - digit_count)
    if 0 < point_position <= 21:
        return sign + digits[:point_position] + "." + digits[point_position:]
    if -6 < point_position <= 0:
        return sign + "0." + "0" * -point_position + digits

    scientific_exponent = point_position - 1
    mantissa = digits[0] + ("." + digits[1:] if digit_count > 1 else "")
    exponent_sign = "+" if scientific_exponent > 0 else "-"
    return f"{sign}{mantissa}e{exponent_sign}{abs(scientific_exponent)}"


def domain_round_to_cents(value: float) -> str:
    """Format a finite float with exactly two decimals, rounding half away from zero.

    Rounding is applied to the exact binary value, matching fixed-point formatting.

    Args:
        value: Finite float value.

    Returns:
        str: Two-decimal text such as `110.00`.
    """

    if value == 0:
        # negative zero renders unsigned
        value = 0.0
    rounded_value = Decimal(value).quantize(_CENT_EXPONENT, context=_ROUNDING_CONTEXT)
    return f"{rounded_value:f}"


def domain_check_end_balance(record: AccountRecord) -> str | None:
    """Verify that `startBalance + mutation` matches `endBalance` at two decimals.

    Args:
        record: Structurally valid account record.

    Returns:
        str | None: Mismatch or number-format message, None when balances agree.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    start_balance = float(record.start_balance)
    mutation = float(record.mutation)
    end_balance = float(record.end_balance)

    if not all(math.isfinite(value) for value in (start_balance, mutation, end_balance)):
        return INVALID_BALANCE_NUMBER_MESSAGE

    calculated_end_balance = start_balance + mutation
    if not math.isfinite(calculated_end_balance):
        return INVALID_BALANCE_NUMBER_MESSAGE

    if domain_round_to_cents(calculated_end_balance) != domain_round_to_cents(end_balance):
        return (
            "Mismatching end balance: "
            f"Expected: {domain_format_number(calculated_end_balance)}, "
            f"Received: {domain_format_number(end_balance)}"
        )
    return None


class DuplicateReferenceDetector:
    """File-scoped tracker of references already seen in the current pipeline run.

    Create one instance per file; instances are never shared across runs.
    """

    def __init__(self) -> None:
        self._seen_references: set[int] = set()

    def duplicate_register(self, reference: int) -> str | None:
        """Register one reference in file order.

        Args:
            reference: Canonical record reference.

        Returns:
            str | None: Duplicate message for repeat occurrences, None for the first one.
        """

        if reference in self._seen_references:
            return DUPLICATE_RECORD_MESSAGE
        self._seen_references.add(reference)
        return None

    def duplicate_seen_count(self) -> int:
        return len(self._seen_references)
