"""Prompt construction and strict response formats for the two model calls.

This module builds:
- The extraction request content (file part + instruction) and its
  ``json_schema`` response format.
- The analysis system instructions, the metrics/transaction-log user content,
  and the analysis ``json_schema`` response format.

Nothing here performs I/O; :mod:`finease.extraction` and
:mod:`finease.analysis` issue the calls.
"""

from __future__ import annotations

import base64
import datetime as dt
from collections.abc import Sequence
from typing import Any

from openai.types.responses.response_format_text_json_schema_config_param import (
    ResponseFormatTextJSONSchemaConfigParam,
)

from .aggregate import summarize_spending
from .dates import parse_date
from .models import StressLevel, Transaction

EXTRACTION_LIMIT = 50

EXTRACTION_INSTRUCTION = (
    "Extract financial transactions from this document into a JSON array. "
    "Use YYYY-MM-DD format for dates. Ignore running balances. "
    f"IMPORTANT: Limit to the first {EXTRACTION_LIMIT} transactions to ensure the JSON "
    "response is complete and valid. Do not truncate the JSON output."
)

ANALYSIS_SYSTEM_INSTRUCTIONS = """\
You are a Forensic Financial Analyst and Behavioral Economist.
Analyze the provided transaction log and metrics to calculate a "Financial Stress Score".

REQUIREMENTS:
1. **Be Factual**: cite specific amounts, dates, and merchants in your observations. Do not just say "spending increased", say "Spending increased due to ₹2000 at Amazon on 10/12".
2. **Detect Patterns**: Look for "doom spending" (small, frequent discretionary purchases), large impulse buys, or late-night spending clusters.
3. **Tone**: Professional, objective, direct, yet constructive.

SCORING RUBRIC (0-100):
- 0-30 (Stable): <30% discretionary, consistent essential payments.
- 31-60 (Mild): 30-50% discretionary, occasional spikes.
- 61-80 (High): 50-70% discretionary, frequent impulse buys, irregular frequency.
- 81-100 (Critical): >70% discretionary, rapid depletion, gambling/high-risk merchants.

OUTPUT SCHEMA:
Return strictly JSON."""


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def build_extraction_input(data: bytes, mime_type: str, *, filename: str) -> list[dict[str, Any]]:
    """Return Responses API ``input`` carrying the document and the instruction.

    PDFs are sent as an ``input_file`` part, images as ``input_image``; both
    use a base64 data URL.
    """

    encoded = base64.b64encode(data).decode("ascii")
    data_url = f"data:{mime_type};base64,{encoded}"
    if mime_type == "application/pdf":
        file_part: dict[str, Any] = {
            "type": "input_file",
            "filename": filename,
            "file_data": data_url,
        }
    else:
        file_part = {"type": "input_image", "image_url": data_url, "detail": "high"}
    return [
        {
            "role": "user",
            "content": [file_part, {"type": "input_text", "text": EXTRACTION_INSTRUCTION}],
        }
    ]


def build_extraction_response_format() -> ResponseFormatTextJSONSchemaConfigParam:
    """Strict schema for extracted rows.

    Strict schemas need an object root, so the array is wrapped under
    ``transactions``; :mod:`finease.extraction` unwraps it.
    """

    return {
        "type": "json_schema",
        "name": "extracted_transactions",
        "schema": {
            "type": "object",
            "properties": {
                "transactions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "date": {"type": "string", "description": "YYYY-MM-DD"},
                            "amount": {
                                "type": "number",
                                "description": "Transaction amount (positive number)",
                            },
                            "category": {"type": "string", "description": "Best guess category"},
                            "merchant": {
                                "type": ["string", "null"],
                                "description": "Merchant name",
                            },
                        },
                        "required": ["date", "amount", "category", "merchant"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["transactions"],
            "additionalProperties": False,
        },
        "strict": True,
    }


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


def _most_recent_first(transactions: Sequence[Transaction]) -> list[Transaction]:
    def key(tx: Transaction) -> tuple[bool, dt.date]:
        parsed = parse_date(tx.date)
        return (parsed is not None, parsed or dt.date.min)

    return sorted(transactions, key=key, reverse=True)


def format_transaction_line(tx: Transaction) -> str:
    return f"{tx.date}: {tx.merchant or tx.category} (₹{tx.amount:.2f})"


def build_analysis_user_content(transactions: Sequence[Transaction], *, log_limit: int) -> str:
    """Render hard metrics plus the ``log_limit`` most recent transactions."""

    summary = summarize_spending(transactions)
    recent = _most_recent_first(transactions)[:log_limit]
    lines = [
        "Perform forensic analysis on this financial data:",
        "HARD METRICS:",
        f"- Total Spent: ₹{summary.total:.2f}",
        f"- Essential Expenses: ₹{summary.essential:.2f}",
        (
            f"- Discretionary Expenses: ₹{summary.discretionary:.2f} "
            f"({summary.discretionary_ratio:.1f}%)"
        ),
        f"- Transaction Count: {summary.count}",
        "",
        f"TRANSACTION LOG (Last {log_limit}):",
    ]
    lines.extend(format_transaction_line(tx) for tx in recent)
    return "\n".join(lines)


def build_analysis_response_format() -> ResponseFormatTextJSONSchemaConfigParam:
    return {
        "type": "json_schema",
        "name": "stress_analysis",
        "schema": {
            "type": "object",
            "properties": {
                "score": {
                    "type": "number",
                    "description": "Stress score 0-100 based on the rubric",
                },
                "level": {
                    "type": "string",
                    "enum": [level.value for level in StressLevel],
                    "description": "Stress level category",
                },
                "observations": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "3 specific observations citing dates and amounts.",
                },
                "recentChanges": {
                    "type": "string",
                    "description": (
                        "Factual comparison of recent vs older transactions in the list."
                    ),
                },
                "importance": {
                    "type": "string",
                    "description": (
                        "The single most critical financial habit identified in this dataset."
                    ),
                },
                "recommendations": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "3 actionable, specific steps to reduce the score.",
                },
            },
            "required": [
                "score",
                "level",
                "observations",
                "recentChanges",
                "importance",
                "recommendations",
            ],
            "additionalProperties": False,
        },
        "strict": True,
    }


__all__ = [
    "ANALYSIS_SYSTEM_INSTRUCTIONS",
    "EXTRACTION_INSTRUCTION",
    "EXTRACTION_LIMIT",
    "build_analysis_response_format",
    "build_analysis_user_content",
    "build_extraction_input",
    "build_extraction_response_format",
    "format_transaction_line",
]
