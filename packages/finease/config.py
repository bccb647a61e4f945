"""Runtime settings read from ``FINEASE_*`` environment variables.

The CLI loads a local ``.env`` (python-dotenv) before settings are read, so
values may come from either the process environment or that file. Settings
are resolved per call rather than at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_EXTRACTION_MODEL = "gpt-4.1-mini"
_DEFAULT_ANALYSIS_MODEL = "gpt-4.1"
_DEFAULT_EXTRACTION_MAX_OUTPUT_TOKENS = 8192
_DEFAULT_TRANSACTION_LOG_LIMIT = 40


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True, slots=True)
class Settings:
    """Model names and request limits for the two external calls."""

    extraction_model: str = _DEFAULT_EXTRACTION_MODEL
    analysis_model: str = _DEFAULT_ANALYSIS_MODEL
    extraction_max_output_tokens: int = _DEFAULT_EXTRACTION_MAX_OUTPUT_TOKENS
    # Number of most recent transactions rendered into the analysis prompt.
    transaction_log_limit: int = _DEFAULT_TRANSACTION_LOG_LIMIT

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            extraction_model=os.getenv("FINEASE_EXTRACTION_MODEL") or _DEFAULT_EXTRACTION_MODEL,
            analysis_model=os.getenv("FINEASE_ANALYSIS_MODEL") or _DEFAULT_ANALYSIS_MODEL,
            extraction_max_output_tokens=_env_int(
                "FINEASE_EXTRACTION_MAX_OUTPUT_TOKENS", _DEFAULT_EXTRACTION_MAX_OUTPUT_TOKENS
            ),
            transaction_log_limit=_env_int(
                "FINEASE_TRANSACTION_LOG_LIMIT", _DEFAULT_TRANSACTION_LOG_LIMIT
            ),
        )


def has_api_key() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


__all__ = ["Settings", "has_api_key"]
