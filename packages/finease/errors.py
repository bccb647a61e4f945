"""Error taxonomy for the ingestion pipeline.

Every user-facing failure carries an :class:`ErrorKind` plus structured
context so presentation layers (the CLI, or any other host) can format
messages independently of where the failure was raised.

Only extraction-side failures are raised to callers. Analysis failures are
masked by the fixed fallback result in :mod:`finease.analysis`.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum


class ErrorKind(StrEnum):
    MISSING_COLUMNS = "missing_columns"
    NO_VALID_ROWS = "no_valid_rows"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    EXTRACTION_EMPTY = "extraction_empty"
    EXTERNAL_CALL_FAILED = "external_call_failed"


class FinEaseError(Exception):
    """Base class for pipeline errors surfaced to the user."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingColumnsError(FinEaseError):
    """CSV header lacks a date-like and/or amount-like column."""

    kind = ErrorKind.MISSING_COLUMNS

    def __init__(self, columns: Sequence[str]) -> None:
        self.columns: tuple[str, ...] = tuple(columns)
        super().__init__(
            "CSV must have at least 'Date' and 'Amount' columns "
            f"(missing: {', '.join(self.columns)})."
        )


class NoValidRowsError(FinEaseError):
    """Parsing succeeded but zero rows survived filtering."""

    kind = ErrorKind.NO_VALID_ROWS

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        super().__init__("No valid transactions found.")


class UnsupportedFileTypeError(FinEaseError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE

    def __init__(self, filename: str | None, mime_type: str | None) -> None:
        self.filename = filename
        self.mime_type = mime_type
        super().__init__("Unsupported file format. Please upload CSV, PDF, or Image.")


class ExtractionEmptyError(FinEaseError):
    kind = ErrorKind.EXTRACTION_EMPTY

    def __init__(self, mime_type: str | None = None) -> None:
        self.mime_type = mime_type
        super().__init__("No transactions could be identified in this file.")


class ExternalCallError(FinEaseError):
    """The external extraction call raised or could not be issued."""

    kind = ErrorKind.EXTERNAL_CALL_FAILED

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")


__all__ = [
    "ErrorKind",
    "ExternalCallError",
    "ExtractionEmptyError",
    "FinEaseError",
    "MissingColumnsError",
    "NoValidRowsError",
    "UnsupportedFileTypeError",
]
