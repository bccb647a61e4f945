"""Lenient CSV→Transaction normalizer for arbitrary bank exports.

Column roles are discovered from the header row by case-insensitive substring
match against a fixed candidate table, so exports from different banks work
without per-provider adapters. Rows are split on commas outside double
quotes; this is intentionally a single-line, quote-aware split rather than a
full RFC 4180 reader (embedded newlines are not supported).

Rows whose amount does not parse to a positive number, or whose date cell is
empty, are dropped without being reported individually.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from .classifier import classification_text, is_discretionary
from .errors import MissingColumnsError
from .logging_setup import get_logger
from .models import UNCATEGORIZED, Transaction

_logger = get_logger("finease.csv_normalizer")

# Candidate substrings per logical column. A column resolves to the first
# header (in header order) that contains any of its candidates.
COLUMN_CANDIDATES: dict[str, tuple[str, ...]] = {
    "date": ("date",),
    "amount": ("amount", "debit", "cost"),
    "category": ("category", "description", "merchant"),
    "merchant": ("merchant", "description"),
}

_FIELD_SPLIT_RE = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')
_EDGE_QUOTE_RE = re.compile(r'^"|"$')
_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


class ColumnMap(NamedTuple):
    date: int
    amount: int
    category: int | None
    merchant: int | None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _find_column(headers: list[str], candidates: tuple[str, ...]) -> int | None:
    for i, header in enumerate(headers):
        if any(c in header for c in candidates):
            return i
    return None


def sniff_columns(header_line: str) -> ColumnMap:
    """Resolve column positions from a raw header line.

    Raises :class:`~finease.errors.MissingColumnsError` when no date-like or
    no amount-like header is present.
    """

    headers = [h.strip().strip('"').strip() for h in header_line.lower().split(",")]
    found = {name: _find_column(headers, cands) for name, cands in COLUMN_CANDIDATES.items()}

    date_idx = found["date"]
    amount_idx = found["amount"]
    if date_idx is None or amount_idx is None:
        raise MissingColumnsError(
            [name for name, idx in (("date", date_idx), ("amount", amount_idx)) if idx is None]
        )
    return ColumnMap(
        date=date_idx,
        amount=amount_idx,
        category=found["category"],
        merchant=found["merchant"],
    )


def split_row(line: str) -> list[str]:
    """Split a data row on commas that are not inside double quotes."""

    return [_EDGE_QUOTE_RE.sub("", v).strip() for v in _FIELD_SPLIT_RE.split(line.rstrip("\r"))]


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse a spend amount as a non-negative magnitude.

    Every character other than digits, ``-`` and ``.`` is discarded first, so
    currency symbols and thousands separators are ignored
    (``"₹1,500.50"`` → ``Decimal("1500.50")``). The longest leading numeric
    prefix is then parsed; ``None`` is returned when there is none.
    """

    if raw is None:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", raw)
    m = _LEADING_NUMBER_RE.match(cleaned)
    if m is None:
        return None
    try:
        value = Decimal(m.group(0))
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return abs(value)


def _cell(values: list[str], idx: int | None) -> str | None:
    if idx is None or idx >= len(values):
        return None
    return values[idx]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_csv(csv_text: str) -> list[Transaction]:
    """Parse delimited statement text into transactions, preserving row order.

    The first line is the header. An empty result is returned (not raised)
    when every data row was dropped; the caller decides whether that is an
    error.
    """

    lines = csv_text.strip().split("\n")
    columns = sniff_columns(lines[0])
    separate_merchant = columns.merchant is not None and columns.merchant != columns.category

    out: list[Transaction] = []
    dropped = 0
    for row_idx, line in enumerate(lines[1:]):
        values = split_row(line)

        amount = parse_amount(_cell(values, columns.amount))
        date = _cell(values, columns.date)
        if amount is None or amount <= 0 or not date:
            dropped += 1
            continue

        category = _cell(values, columns.category) or UNCATEGORIZED
        merchant = _cell(values, columns.merchant) or None
        text = classification_text(category, merchant if separate_merchant else None)

        out.append(
            Transaction(
                id=f"tx-{row_idx}",
                date=date,
                amount=amount,
                category=category,
                merchant=merchant,
                is_discretionary=is_discretionary(text),
            )
        )

    _logger.debug("parse_csv:done kept=%d dropped=%d", len(out), dropped)
    return out


__all__ = [
    "COLUMN_CANDIDATES",
    "ColumnMap",
    "parse_amount",
    "parse_csv",
    "sniff_columns",
    "split_row",
]
