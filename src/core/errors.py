"""CSV image converter exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Ingest errors abort a run; convert errors stay local to one record.
"""

from __future__ import annotations


class CsvImageError(Exception):
    """Base exception for all converter failures."""


class CsvImageConfigError(CsvImageError):
    """Raised for invalid runtime configuration."""


class CsvImageIngestError(CsvImageError):
    """Raised for fatal input file failures."""


class MalformedRowError(CsvImageIngestError):
    """Raised when an input row is not a two-field CSV row."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class InputIOError(CsvImageIngestError):
    """Raised when the input file cannot be opened or read."""


class CsvImageConvertError(CsvImageError):
    """Raised for per-record conversion failures."""


class DecodeError(CsvImageConvertError):
    """Raised when a payload is not valid base64 or not an image."""

    def __init__(self, reason: str, detail: str = "") -> None:
        message = f"{reason}: {detail}" if detail else reason
        super().__init__(message)
        self.reason = reason


class EncodeError(CsvImageConvertError):
    """Raised when a decoded image cannot be re-encoded."""


class OutputIOError(CsvImageConvertError):
    """Raised when an output directory or file cannot be created."""


class InvalidIdentifierError(CsvImageConvertError):
    """Raised when a record identifier is not a safe file name."""
