"""In-memory dashboard session state.

A session holds the loaded transactions, the latest analysis, the active
filters, and the last user-facing error. Nothing is persisted; loading new
data replaces everything wholesale, and a newly completed analysis simply
overwrites the previous one.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Callable, Sequence
from os import PathLike
from typing import Any

from .aggregate import aggregate_categories, aggregate_daily_spending, summarize_spending
from .analysis import analyze_spending_habits
from .config import Settings
from .dates import parse_date
from .errors import FinEaseError
from .filters import FilterState, apply_filters, unique_categories
from .ingest import load_transactions_from_file
from .logging_setup import get_logger
from .models import (
    AnalysisResult,
    CategorySummary,
    ChartDataPoint,
    SpendingSummary,
    Transaction,
)

Analyzer = Callable[[Sequence[Transaction]], AnalysisResult]

ANALYSIS_FAILED_MESSAGE = "Failed to analyze data. Please try again."

_logger = get_logger("finease.session")


class DashboardSession:
    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings
        self.transactions: tuple[Transaction, ...] | None = None
        self.analysis: AnalysisResult | None = None
        self.filters = FilterState()
        self.error: str | None = None

    # ---- Loading -------------------------------------------------------------

    def load(
        self,
        transactions: Sequence[Transaction],
        *,
        analyzer: Analyzer | None = None,
        analyze: bool = True,
    ) -> None:
        """Replace the session data and (by default) run a fresh analysis."""

        self.transactions = tuple(transactions)
        self.filters = FilterState()
        self.error = None
        self.analysis = None
        if not analyze:
            return

        run = analyzer or self._default_analyzer
        try:
            self.analysis = run(self.transactions)
        except Exception as e:  # noqa: BLE001 - surfaced via ``error`` like any load failure
            _logger.error("session:analysis_failed error=%s", e.__class__.__name__)
            self.error = ANALYSIS_FAILED_MESSAGE

    def load_file(
        self,
        path: str | PathLike[str],
        *,
        mime_type: str | None = None,
        analyzer: Analyzer | None = None,
        analyze: bool = True,
    ) -> bool:
        """Ingest a statement file; on failure record the message and return False."""

        self.error = None
        try:
            transactions = load_transactions_from_file(
                path, mime_type=mime_type, settings=self.settings
            )
        except FinEaseError as e:
            _logger.warning("session:load_failed kind=%s", e.kind)
            self.error = e.message
            return False
        self.load(transactions, analyzer=analyzer, analyze=analyze)
        return True

    def _default_analyzer(self, transactions: Sequence[Transaction]) -> AnalysisResult:
        return analyze_spending_habits(transactions, settings=self.settings)

    def reset(self) -> None:
        self.transactions = None
        self.analysis = None
        self.error = None
        self.filters = FilterState()

    # ---- Filters -------------------------------------------------------------

    def update_filters(self, **changes: Any) -> FilterState:
        self.filters = dataclasses.replace(self.filters, **changes)
        return self.filters

    def reset_filters(self) -> None:
        self.filters = FilterState()

    # ---- Derived views (always computed from the filtered set) --------------

    @property
    def filtered_transactions(self) -> list[Transaction]:
        if not self.transactions:
            return []
        return apply_filters(self.transactions, self.filters)

    @property
    def categories(self) -> list[str]:
        return unique_categories(self.transactions or ())

    @property
    def daily_data(self) -> list[ChartDataPoint]:
        return aggregate_daily_spending(self.filtered_transactions)

    @property
    def category_data(self) -> list[CategorySummary]:
        return aggregate_categories(self.filtered_transactions)

    @property
    def summary(self) -> SpendingSummary:
        return summarize_spending(self.filtered_transactions)

    def caption(self) -> str:
        """Return the "Showing X of Y transactions" footer line."""

        shown = self.filtered_transactions
        text = f"Showing {len(shown)} of {len(self.transactions or ())} transactions"
        if not shown:
            return text

        def key(tx: Transaction) -> tuple[bool, dt.date]:
            parsed = parse_date(tx.date)
            return (parsed is not None, parsed or dt.date.min)

        dated = [tx for tx in shown if parse_date(tx.date) is not None]
        span = dated or shown
        earliest = min(span, key=key).date
        latest = max(span, key=key).date
        return f"{text} from {earliest} to {latest}"


__all__ = ["ANALYSIS_FAILED_MESSAGE", "Analyzer", "DashboardSession"]
