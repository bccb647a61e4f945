"""Dashboard filters over an in-memory transaction list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from .dates import parse_date
from .models import Transaction

ALL_CATEGORIES = "All"


@dataclass(frozen=True, slots=True)
class FilterState:
    """Date range (inclusive), category and amount bounds; unset means open."""

    start_date: str | None = None
    end_date: str | None = None
    category: str = ALL_CATEGORIES
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    @property
    def is_default(self) -> bool:
        return self == FilterState()


def _matches(tx: Transaction, f: FilterState) -> bool:
    tx_date = parse_date(tx.date)
    start = parse_date(f.start_date)
    end = parse_date(f.end_date)
    # Transactions with unrecognized dates are never excluded by the date range.
    if tx_date is not None:
        if start is not None and tx_date < start:
            return False
        if end is not None and tx_date > end:
            return False

    if f.category != ALL_CATEGORIES and tx.category != f.category:
        return False

    if f.min_amount is not None and tx.amount < f.min_amount:
        return False
    if f.max_amount is not None and tx.amount > f.max_amount:
        return False
    return True


def apply_filters(transactions: Iterable[Transaction], filters: FilterState) -> list[Transaction]:
    return [tx for tx in transactions if _matches(tx, filters)]


def unique_categories(transactions: Iterable[Transaction]) -> list[str]:
    return sorted({tx.category for tx in transactions})


__all__ = ["ALL_CATEGORIES", "FilterState", "apply_filters", "unique_categories"]
