"""Cleaning and best-effort repair of model-produced JSON text.

Model output may arrive wrapped in a Markdown code fence and may be cut short
when the generator hits its output-token cap. The repair here is deliberately
narrow:

- arrays: cut after the last complete ``}`` and close with ``]``;
- objects: append ``"}`` (salvages only truncation inside a final string
  value).

Anything else yields the sentinel ``"{}"``. Callers rely on repair failing
predictably outside that scope (the analysis path falls back to a fixed
result), so the heuristic must stay exactly this simple.
"""

from __future__ import annotations

import json
import re
from typing import Any

from .logging_setup import get_logger

REPAIR_FAILED = "{}"

_logger = get_logger("finease.json_repair")

_LEADING_FENCE_RE = re.compile(r"^```(?:[A-Za-z][\w-]*)?\s*")
_TRAILING_FENCE_RE = re.compile(r"\s*```$")


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"non-standard constant {name}", name, 0)


def loads_strict(text: str) -> Any:
    """``json.loads`` that rejects ``NaN``/``Infinity`` and over-deep nesting.

    Both surface as :class:`json.JSONDecodeError` so callers handle them like
    any other malformed payload.
    """

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise json.JSONDecodeError("document nested too deeply", text, 0) from e


def clean_json_string(text: str | None) -> str:
    """Strip surrounding whitespace and an enclosing code fence.

    Empty input becomes ``"[]"``. Text without a leading fence passes through
    unchanged apart from whitespace trimming.
    """

    if not text:
        return "[]"
    clean = text.strip()
    if clean.startswith("```"):
        clean = _LEADING_FENCE_RE.sub("", clean, count=1)
        clean = _TRAILING_FENCE_RE.sub("", clean, count=1)
    return clean


def repair_truncated_json(json_str: str) -> str:
    """Return parseable JSON text for ``json_str``, or :data:`REPAIR_FAILED`.

    Valid input is returned unchanged (trimmed).
    """

    trimmed = json_str.strip()
    try:
        loads_strict(trimmed)
        return trimmed
    except json.JSONDecodeError:
        pass

    if trimmed.startswith("["):
        last_brace = trimmed.rfind("}")
        if last_brace != -1:
            candidate = trimmed[: last_brace + 1] + "]"
            try:
                loads_strict(candidate)
                return candidate
            except json.JSONDecodeError:
                _logger.warning("json_repair:array_failed length=%d", len(trimmed))

    if trimmed.startswith("{") and trimmed.rfind('"') != -1:
        candidate = trimmed + '"}'
        try:
            loads_strict(candidate)
            return candidate
        except json.JSONDecodeError:
            _logger.warning("json_repair:object_failed length=%d", len(trimmed))

    return REPAIR_FAILED


def loads_lenient(text: str | None, *, operation: str) -> Any:
    """Clean, parse, and on failure repair then parse model output.

    Never raises for malformed text: an unsalvageable payload decodes to the
    empty object ``{}``.
    """

    cleaned = clean_json_string(text)
    try:
        return loads_strict(cleaned)
    except json.JSONDecodeError as e:
        _logger.warning("%s:parse_failed attempting_repair error=%s", operation, e.msg)
    return loads_strict(repair_truncated_json(cleaned))


__all__ = [
    "REPAIR_FAILED",
    "clean_json_string",
    "loads_lenient",
    "loads_strict",
    "repair_truncated_json",
]
