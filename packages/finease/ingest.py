"""File ingestion: route a statement file to CSV parsing or model extraction.

Unsupported types are rejected before any parsing. Empty results become
user-facing errors here (the normalizers themselves return ``[]``).
"""

from __future__ import annotations

import mimetypes
from enum import StrEnum
from os import PathLike
from pathlib import Path

from .config import Settings
from .csv_normalizer import parse_csv
from .errors import ExtractionEmptyError, NoValidRowsError, UnsupportedFileTypeError
from .extraction import extract_transactions_from_file
from .logging_setup import get_logger
from .models import Transaction

_logger = get_logger("finease.ingest")

_CSV_MIME_TYPES = frozenset({"text/csv", "text/plain"})


class FileKind(StrEnum):
    CSV = "csv"
    DOCUMENT = "document"


def guess_mime_type(filename: str) -> str | None:
    mime_type, _encoding = mimetypes.guess_type(filename)
    return mime_type


def detect_file_kind(filename: str | None, mime_type: str | None) -> FileKind:
    """Classify a file as CSV text or an extractable document (PDF/image)."""

    name = (filename or "").lower()
    mt = (mime_type or "").lower()
    if mt in _CSV_MIME_TYPES or name.endswith(".csv"):
        return FileKind.CSV
    if "image" in mt or mt == "application/pdf":
        return FileKind.DOCUMENT
    raise UnsupportedFileTypeError(filename, mime_type)


def load_transactions_from_bytes(
    data: bytes,
    *,
    filename: str,
    mime_type: str | None = None,
    settings: Settings | None = None,
) -> list[Transaction]:
    """Parse or extract transactions from raw file bytes.

    Raises
    ------
    UnsupportedFileTypeError
        Neither CSV nor PDF/image.
    MissingColumnsError
        CSV header lacks date/amount columns.
    NoValidRowsError
        CSV parsed but no row survived.
    ExternalCallError
        The extraction call failed.
    ExtractionEmptyError
        The extraction call returned no transactions.
    """

    mt = mime_type or guess_mime_type(filename)
    kind = detect_file_kind(filename, mt)
    _logger.info("ingest:start filename=%s kind=%s mime_type=%s", filename, kind, mt)

    if kind is FileKind.CSV:
        text = data.decode("utf-8-sig", errors="replace")
        transactions = parse_csv(text)
        if not transactions:
            raise NoValidRowsError(filename)
        return transactions

    if mt is None:
        raise UnsupportedFileTypeError(filename, mt)
    transactions = extract_transactions_from_file(
        data, mt, filename=Path(filename).name, settings=settings
    )
    if not transactions:
        raise ExtractionEmptyError(mt)
    return transactions


def load_transactions_from_file(
    path: str | PathLike[str],
    *,
    mime_type: str | None = None,
    settings: Settings | None = None,
) -> list[Transaction]:
    p = Path(path)
    # Reject by type before reading the file.
    detect_file_kind(p.name, mime_type or guess_mime_type(p.name))
    return load_transactions_from_bytes(
        p.read_bytes(), filename=p.name, mime_type=mime_type, settings=settings
    )


__all__ = [
    "FileKind",
    "detect_file_kind",
    "guess_mime_type",
    "load_transactions_from_bytes",
    "load_transactions_from_file",
]
