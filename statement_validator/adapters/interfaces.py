"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from statement_validator.domain import RawFieldMap


class RecordAdapterPort(Protocol):
    """Port definition for turning raw file text into ordered raw field maps."""

    def adapter_format_name(self) -> str:
        """Return the format discriminator handled by this adapter.

        Returns:
            str: Lower-case format name such as `csv` or `xml`.

        Raises:
            RuntimeError: Raised when format metadata is unavailable.
        """

    def adapter_reference_first(self) -> bool:
        """Return whether error records should present `reference` as the first field.

        Returns:
            bool: True when the reference key must be moved to the front.

        Raises:
            RuntimeError: Raised when ordering metadata is unavailable.
        """

    def adapter_parse_records(self, raw_text: str) -> list[RawFieldMap]:
        """Parse fully materialized file text into raw field maps.

        Args:
            raw_text: Decoded file content.

        Returns:
            list[RawFieldMap]: One raw field map per record, in file order.

        Raises:
            RecordParseError: Raised when the text cannot be parsed at all.
        """
