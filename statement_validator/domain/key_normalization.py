"""Field-name normalization for loosely-keyed raw records."""

from __future__ import annotations

import re
from collections.abc import Mapping

from .models import RawFieldMap, RawFieldValue

_WHITESPACE_PATTERN = re.compile(r"\s+")


def domain_normalize_field_name(raw_key: str) -> str:
    """Normalize one raw field name into its canonical spelling.

    All whitespace is removed and only the first character is lower-cased, so
    `" Reference "` becomes `reference` and `AccountNumber` becomes
    `accountNumber`. Already-normalized names are returned unchanged.

    Args:
        raw_key: Raw field name from a header row or attribute.

    Returns:
        str: Normalized field name, possibly empty.
    """

    compact_key = _WHITESPACE_PATTERN.sub("", raw_key)
    return compact_key[:1].lower() + compact_key[1:]


def domain_normalize_record_keys(raw_record: Mapping[str, RawFieldValue]) -> RawFieldMap:
    """Return a new field map with normalized keys and untouched values.

    When two raw keys collapse onto one normalized key the later one wins.

    Args:
        raw_record: Raw field map produced by a format adapter.

    Returns:
        RawFieldMap: Field map keyed by normalized field names, in source order.
    """

    return {domain_normalize_field_name(raw_key): value for raw_key, value in raw_record.items()}
