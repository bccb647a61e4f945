"""Public interface for the ``finease`` package.

This module exposes the pipeline functions, the dashboard session and the
public models/types as the stable import surface. There is no runtime logic
here, only symbol re-exports.
"""

from .aggregate import aggregate_categories, aggregate_daily_spending, summarize_spending
from .analysis import analyze_spending_habits, fallback_result, normalize_analysis_response
from .classifier import is_discretionary
from .csv_normalizer import parse_csv
from .errors import (
    ErrorKind,
    ExternalCallError,
    ExtractionEmptyError,
    FinEaseError,
    MissingColumnsError,
    NoValidRowsError,
    UnsupportedFileTypeError,
)
from .extraction import extract_transactions_from_file, normalize_extraction_response
from .filters import FilterState, apply_filters, unique_categories
from .ingest import load_transactions_from_bytes, load_transactions_from_file
from .json_repair import clean_json_string, repair_truncated_json
from .models import (
    AnalysisResult,
    CategorySummary,
    ChartDataPoint,
    SpendingSummary,
    SpendingType,
    StressLevel,
    Transaction,
)
from .sample import generate_sample_data
from .session import DashboardSession

__all__ = [
    # Pipeline
    "parse_csv",
    "is_discretionary",
    "aggregate_daily_spending",
    "aggregate_categories",
    "summarize_spending",
    "clean_json_string",
    "repair_truncated_json",
    "normalize_extraction_response",
    "normalize_analysis_response",
    "extract_transactions_from_file",
    "analyze_spending_habits",
    "fallback_result",
    "generate_sample_data",
    "load_transactions_from_bytes",
    "load_transactions_from_file",
    "apply_filters",
    "unique_categories",
    # Session
    "DashboardSession",
    "FilterState",
    # Models / types
    "Transaction",
    "ChartDataPoint",
    "CategorySummary",
    "SpendingSummary",
    "SpendingType",
    "StressLevel",
    "AnalysisResult",
    # Errors
    "ErrorKind",
    "FinEaseError",
    "MissingColumnsError",
    "NoValidRowsError",
    "UnsupportedFileTypeError",
    "ExtractionEmptyError",
    "ExternalCallError",
]
