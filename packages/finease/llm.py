"""OpenAI Responses API access shared by extraction and analysis.

No side effects at import time: the client is created per call so tests can
monkeypatch ``finease.llm.OpenAI`` with a stub exposing
``responses.create(**kwargs)``.
"""

from __future__ import annotations

from typing import Any

from openai import OpenAI


def create_client() -> OpenAI:
    # Reads OPENAI_API_KEY from the environment; raises OpenAIError when unset.
    return OpenAI()


def response_text(resp: Any) -> str:
    """Return the text output of a Responses API result.

    Prefers ``resp.output_text``; falls back to ``resp.output[0].content[0].text``
    (or its ``value`` attribute on SDKs that wrap text in an object). Returns
    ``""`` when no text can be located so callers can apply their own
    empty-output handling.
    """

    text = getattr(resp, "output_text", None)
    if isinstance(text, str) and text:
        return text

    output = getattr(resp, "output", None)
    if not output:
        return ""
    content = getattr(output[0], "content", None)
    if not content:
        return ""
    node = getattr(content[0], "text", None)
    if isinstance(node, str):
        return node
    value = getattr(node, "value", None)
    return value if isinstance(value, str) else ""


__all__ = ["OpenAI", "create_client", "response_text"]
