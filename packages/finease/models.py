"""Data models for ``finease``.

Pipeline records (transactions, chart points, category totals) are frozen,
slotted dataclasses so they can be shared freely between the session and the
presentation layer without defensive copies. The analysis result is a
Pydantic model because it is validated straight from model output JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

UNCATEGORIZED = "Uncategorized"


class SpendingType(StrEnum):
    ESSENTIAL = "Essential"
    DISCRETIONARY = "Discretionary"


class StressLevel(StrEnum):
    """Ordered stress bands used by the scoring rubric."""

    STABLE = "Stable"
    MILD = "Mild"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single canonical spend record.

    ``amount`` is always a positive magnitude; ingestion drops sign. ``date``
    is kept as the string supplied by the source (``YYYY-MM-DD`` for
    extracted and sample data). ``is_discretionary`` is derived by
    :func:`finease.classifier.is_discretionary`, never taken from input.
    """

    id: str
    date: str
    amount: Decimal
    category: str = UNCATEGORIZED
    merchant: str | None = None
    is_discretionary: bool = False


@dataclass(frozen=True, slots=True)
class ChartDataPoint:
    date: str
    amount: Decimal
    type: SpendingType


@dataclass(frozen=True, slots=True)
class CategorySummary:
    name: str
    value: Decimal


@dataclass(frozen=True, slots=True)
class SpendingSummary:
    """Hard metrics over a transaction list.

    ``discretionary_ratio`` is a percentage in ``[0, 100]`` and is ``0`` when
    nothing was spent.
    """

    total: Decimal
    essential: Decimal
    discretionary: Decimal
    discretionary_ratio: Decimal
    count: int


class AnalysisResult(BaseModel):
    """Stress analysis as returned by the analysis call.

    Score range and level values are passed through as produced; bounds are
    not enforced here. Wire keys are camelCase (``recentChanges``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    score: float
    level: str
    observations: list[str]
    recent_changes: str = Field(alias="recentChanges")
    importance: str
    recommendations: list[str]


__all__ = [
    "UNCATEGORIZED",
    "AnalysisResult",
    "CategorySummary",
    "ChartDataPoint",
    "SpendingSummary",
    "SpendingType",
    "StressLevel",
    "Transaction",
]
