"""Financial stress analysis via the Responses API.

Public API:
    - :func:`analyze_spending_habits` (issues the model call)
    - :func:`normalize_analysis_response` (pure; text → result)
    - :func:`fallback_result`

Analysis never raises to the caller. Any failure (missing API key, SDK or
network error, empty or unparseable output, a repaired payload that does not
match the result shape) yields :func:`fallback_result`.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from openai.types.responses import ResponseTextConfigParam
from pydantic import ValidationError

from . import llm, prompting
from .config import Settings
from .json_repair import loads_lenient
from .logging_setup import get_logger
from .models import AnalysisResult, StressLevel, Transaction

_logger = get_logger("finease.analysis")

# Wire-shaped (camelCase) so it can serve as a golden fixture as-is.
FALLBACK_PAYLOAD: dict[str, Any] = {
    "score": 50,
    "level": StressLevel.MILD.value,
    "observations": [
        "AI service is momentarily overloaded.",
        "Manual review of the transaction log is recommended.",
    ],
    "recentChanges": "Analysis unavailable.",
    "importance": "Please retry the analysis in a few moments.",
    "recommendations": ["Check internet connection.", "Ensure file is readable."],
}


def fallback_result() -> AnalysisResult:
    return AnalysisResult.model_validate(FALLBACK_PAYLOAD)


def normalize_analysis_response(text: str | None) -> AnalysisResult:
    """Parse (repairing if needed) model text into an :class:`AnalysisResult`.

    Score and level are returned as produced, without range or enum checks.
    """

    data = loads_lenient(text, operation="analyze_spending")
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        _logger.warning(
            "analyze_spending:invalid_shape errors=%d using_fallback=true", e.error_count()
        )
        return fallback_result()


def analyze_spending_habits(
    transactions: Sequence[Transaction], *, settings: Settings | None = None
) -> AnalysisResult:
    """Score financial stress for ``transactions``; never raises."""

    cfg = settings or Settings.from_env()
    user_content = prompting.build_analysis_user_content(
        transactions, log_limit=cfg.transaction_log_limit
    )

    t0 = time.perf_counter()
    try:
        client = llm.create_client()
        resp = client.responses.create(
            model=cfg.analysis_model,
            instructions=prompting.ANALYSIS_SYSTEM_INSTRUCTIONS,
            input=user_content,
            text=ResponseTextConfigParam(format=prompting.build_analysis_response_format()),
        )
        text = llm.response_text(resp)
    except Exception as e:  # noqa: BLE001 - analysis failures are masked by the fallback
        _logger.error(
            "analyze_spending:failed latency_ms=%.2f error=%s using_fallback=true",
            (time.perf_counter() - t0) * 1000.0,
            e.__class__.__name__,
        )
        return fallback_result()

    result = normalize_analysis_response(text)
    _logger.info(
        "analyze_spending:done transactions=%d score=%s level=%s latency_ms=%.2f",
        len(transactions),
        result.score,
        result.level,
        (time.perf_counter() - t0) * 1000.0,
    )
    return result


__all__ = [
    "FALLBACK_PAYLOAD",
    "analyze_spending_habits",
    "fallback_result",
    "normalize_analysis_response",
]
