"""Project-native typed exceptions for record intake failures."""

from __future__ import annotations


class RecordIntakeError(Exception):
    """Base exception for failures that stop a file before or during parsing.

    Attributes:
        file_name: Optional name of the file being processed.
    """

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name


class UnsupportedFileTypeError(RecordIntakeError, ValueError):
    """File extension or format discriminator is neither CSV nor XML."""


class RecordParseError(RecordIntakeError, ValueError):
    """Raw file content could not be decoded or parsed at all."""
