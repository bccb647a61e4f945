"""Transaction extraction from PDF/image statements via the Responses API.

Public API:
    - :func:`extract_transactions_from_file` (issues the model call)
    - :func:`normalize_extraction_response` (pure; maps model text to records)

Extraction failures are user-visible: SDK/network errors are wrapped in
:class:`~finease.errors.ExternalCallError`. An empty result is returned as
``[]``; :mod:`finease.ingest` decides whether that is an error.
"""

from __future__ import annotations

import json
import time
from decimal import Decimal
from typing import Any

from openai.types.responses import ResponseTextConfigParam
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import llm, prompting
from .classifier import classification_text, is_discretionary
from .config import Settings
from .errors import ExternalCallError
from .json_repair import clean_json_string, loads_strict, repair_truncated_json
from .logging_setup import get_logger
from .models import UNCATEGORIZED, Transaction

_logger = get_logger("finease.extraction")


class _ExtractedItem(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    date: str = Field(min_length=1)
    amount: Decimal = Field(allow_inf_nan=False)
    category: str | None = None
    merchant: str | None = None


def _unwrap_truncated_object(cleaned: str) -> str:
    # ``{"transactions": [ ... `` cut short: hand the inner array to the
    # array repair rather than the object heuristic.
    if cleaned.startswith("{"):
        start = cleaned.find("[")
        if start != -1:
            return cleaned[start:]
    return cleaned


def _decode(text: str | None) -> Any:
    cleaned = clean_json_string(text)
    try:
        return loads_strict(cleaned)
    except json.JSONDecodeError as e:
        _logger.warning("extract_transactions:parse_failed attempting_repair error=%s", e.msg)
    return loads_strict(repair_truncated_json(_unwrap_truncated_object(cleaned)))


def normalize_extraction_response(text: str | None) -> list[Transaction]:
    """Map extraction output text to transactions.

    Accepts a bare JSON array or the ``{"transactions": [...]}`` wrapper,
    optionally fenced and possibly truncated. A non-array payload yields
    ``[]``. Elements that are not objects, lack a date, or carry no numeric
    amount are skipped.
    """

    data = _decode(text)
    if isinstance(data, dict) and isinstance(data.get("transactions"), list):
        data = data["transactions"]
    if not isinstance(data, list):
        return []

    out: list[Transaction] = []
    for idx, raw in enumerate(data):
        try:
            item = _ExtractedItem.model_validate(raw)
        except ValidationError as e:
            _logger.warning(
                "extract_transactions:item_skipped index=%d errors=%d", idx, e.error_count()
            )
            continue
        category = item.category or UNCATEGORIZED
        out.append(
            Transaction(
                id=f"extracted-{idx}",
                date=item.date,
                amount=abs(item.amount),
                category=category,
                merchant=item.merchant or None,
                is_discretionary=is_discretionary(
                    classification_text(item.category, item.merchant)
                ),
            )
        )
    return out


def extract_transactions_from_file(
    data: bytes,
    mime_type: str,
    *,
    filename: str = "statement",
    settings: Settings | None = None,
) -> list[Transaction]:
    """Send a statement document to the model and return extracted transactions."""

    cfg = settings or Settings.from_env()
    _logger.info(
        "extract_transactions:start mime_type=%s bytes=%d model=%s",
        mime_type,
        len(data),
        cfg.extraction_model,
    )

    t0 = time.perf_counter()
    try:
        client = llm.create_client()
        resp = client.responses.create(
            model=cfg.extraction_model,
            input=prompting.build_extraction_input(data, mime_type, filename=filename),
            text=ResponseTextConfigParam(format=prompting.build_extraction_response_format()),
            max_output_tokens=cfg.extraction_max_output_tokens,
        )
    except Exception as e:  # noqa: BLE001 - any SDK/transport failure is user-visible
        _logger.error(
            "extract_transactions:failed latency_ms=%.2f error=%s",
            (time.perf_counter() - t0) * 1000.0,
            e.__class__.__name__,
        )
        raise ExternalCallError(
            "Transaction extraction", str(e) or e.__class__.__name__
        ) from e

    transactions = normalize_extraction_response(llm.response_text(resp))
    _logger.info(
        "extract_transactions:done count=%d latency_ms=%.2f",
        len(transactions),
        (time.perf_counter() - t0) * 1000.0,
    )
    return transactions


__all__ = ["extract_transactions_from_file", "normalize_extraction_response"]
