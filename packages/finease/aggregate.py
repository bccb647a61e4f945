"""Chart-ready reductions over a transaction sequence.

All functions are pure: they never mutate their input and always return
freshly built lists. Aggregation is one-directional (raw transactions in,
summaries out); feeding summaries back in is not supported.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from decimal import Decimal

from .dates import parse_date
from .models import (
    CategorySummary,
    ChartDataPoint,
    SpendingSummary,
    SpendingType,
    Transaction,
)

TOP_CATEGORIES = 8

_ZERO = Decimal("0")


def _date_sort_key(tx: Transaction) -> tuple[int, dt.date]:
    # Unrecognized dates share one key and sort after every parsed date,
    # keeping their relative input order (sorted() is stable).
    parsed = parse_date(tx.date)
    if parsed is None:
        return (1, dt.date.min)
    return (0, parsed)


def aggregate_daily_spending(transactions: Iterable[Transaction]) -> list[ChartDataPoint]:
    """Sum essential and discretionary spend per date.

    Emits exactly two points per date with activity, Essential first and
    Discretionary second, even when one of the sums is zero. Dates appear in
    ascending order.
    """

    ordered = sorted(transactions, key=_date_sort_key)

    totals: dict[str, list[Decimal]] = {}
    for tx in ordered:
        slot = totals.setdefault(tx.date, [_ZERO, _ZERO])
        if tx.is_discretionary:
            slot[1] += tx.amount
        else:
            slot[0] += tx.amount

    points: list[ChartDataPoint] = []
    for date, (essential, discretionary) in totals.items():
        points.append(ChartDataPoint(date=date, amount=essential, type=SpendingType.ESSENTIAL))
        points.append(
            ChartDataPoint(date=date, amount=discretionary, type=SpendingType.DISCRETIONARY)
        )
    return points


def aggregate_categories(
    transactions: Iterable[Transaction], *, limit: int = TOP_CATEGORIES
) -> list[CategorySummary]:
    """Return the ``limit`` largest categories by total spend, descending.

    Categories are matched exactly (case-sensitive). Equal totals keep the
    order in which their categories were first seen.
    """

    totals: dict[str, Decimal] = {}
    for tx in transactions:
        totals[tx.category] = totals.get(tx.category, _ZERO) + tx.amount

    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [CategorySummary(name=name, value=value) for name, value in ranked[:limit]]


def summarize_spending(transactions: Sequence[Transaction]) -> SpendingSummary:
    total = sum((tx.amount for tx in transactions), _ZERO)
    discretionary = sum((tx.amount for tx in transactions if tx.is_discretionary), _ZERO)
    ratio = (discretionary / total * 100) if total > 0 else _ZERO
    return SpendingSummary(
        total=total,
        essential=total - discretionary,
        discretionary=discretionary,
        discretionary_ratio=ratio,
        count=len(transactions),
    )


__all__ = [
    "TOP_CATEGORIES",
    "aggregate_categories",
    "aggregate_daily_spending",
    "summarize_spending",
]
