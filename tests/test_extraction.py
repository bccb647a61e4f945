import json
from decimal import Decimal
from typing import Any

import pytest

from finease.config import Settings
from finease.errors import ErrorKind, ExternalCallError
from finease.extraction import extract_transactions_from_file, normalize_extraction_response
from finease.models import UNCATEGORIZED
from tests.helpers.openai_stub import OpenAIStub, install_openai_stub


def _rows() -> list[dict[str, Any]]:
    return [
        {"date": "2024-03-01", "amount": 1250.5, "category": "Groceries", "merchant": "BigBasket"},
        {"date": "2024-03-02", "amount": -349.0, "category": "Food", "merchant": "Swiggy"},
    ]


# ---- Pure normalization --------------------------------------------------------


def test_bare_array_maps_to_transactions():
    out = normalize_extraction_response(json.dumps(_rows()))

    assert [t.id for t in out] == ["extracted-0", "extracted-1"]
    assert out[0].amount == Decimal("1250.5")
    assert out[1].amount == Decimal("349")
    assert out[0].merchant == "BigBasket"
    assert out[0].is_discretionary is False
    assert out[1].is_discretionary is True


def test_wrapper_object_and_code_fence_are_accepted():
    text = "```json\n" + json.dumps({"transactions": _rows()}) + "\n```"
    out = normalize_extraction_response(text)
    assert [t.date for t in out] == ["2024-03-01", "2024-03-02"]


def test_truncated_wrapper_keeps_complete_items():
    full = json.dumps({"transactions": _rows()})
    truncated = full[: full.rindex("}", 0, len(full) - 2)]  # cut inside the last item

    out = normalize_extraction_response(truncated)

    assert len(out) == 1
    assert out[0].merchant == "BigBasket"


def test_missing_category_defaults_and_invalid_items_are_skipped():
    text = json.dumps(
        [
            {"date": "2024-03-03", "amount": 99.25, "category": "", "merchant": None},
            {"date": "2024-03-04", "amount": "n/a", "category": "Misc"},
            {"amount": 10, "category": "Misc"},
            "not an object",
        ]
    )

    out = normalize_extraction_response(text)

    assert len(out) == 1
    assert out[0].category == UNCATEGORIZED
    assert out[0].merchant is None
    assert out[0].id == "extracted-0"


@pytest.mark.parametrize("text", ['{"score": 1}', "garbage", "", "42"])
def test_non_array_payload_yields_empty_list(text: str):
    assert normalize_extraction_response(text) == []


# ---- Model call -----------------------------------------------------------------


def test_extract_pdf_sends_file_part_and_schema(monkeypatch: pytest.MonkeyPatch):
    stub = install_openai_stub(
        monkeypatch, OpenAIStub(json.dumps({"transactions": _rows()}))
    )

    out = extract_transactions_from_file(
        b"%PDF-1.4 fake",
        "application/pdf",
        filename="march.pdf",
        settings=Settings(extraction_model="test-extract", extraction_max_output_tokens=1234),
    )

    assert len(out) == 2
    assert len(stub.calls) == 1
    call = stub.calls[0]
    assert call["model"] == "test-extract"
    assert call["max_output_tokens"] == 1234
    parts = call["input"][0]["content"]
    assert parts[0]["type"] == "input_file"
    assert parts[0]["filename"] == "march.pdf"
    assert parts[0]["file_data"].startswith("data:application/pdf;base64,")
    assert "first 50 transactions" in parts[1]["text"]
    fmt = call["text"]["format"]
    assert fmt["type"] == "json_schema" and fmt["strict"] is True


def test_extract_image_uses_input_image(monkeypatch: pytest.MonkeyPatch):
    stub = install_openai_stub(monkeypatch, OpenAIStub("[]"))

    out = extract_transactions_from_file(b"\x89PNG", "image/png", settings=Settings())

    assert out == []
    part = stub.calls[0]["input"][0]["content"][0]
    assert part["type"] == "input_image"
    assert part["image_url"].startswith("data:image/png;base64,")


def test_sdk_failure_is_wrapped(monkeypatch: pytest.MonkeyPatch):
    install_openai_stub(monkeypatch, OpenAIStub(error=RuntimeError("503 overloaded")))

    with pytest.raises(ExternalCallError) as ei:
        extract_transactions_from_file(b"x", "image/jpeg", settings=Settings())

    assert ei.value.kind is ErrorKind.EXTERNAL_CALL_FAILED
    assert "503 overloaded" in ei.value.message
    assert isinstance(ei.value.__cause__, RuntimeError)


def test_missing_api_key_surfaces_as_external_call_error():
    # No stub: the real client refuses to construct without OPENAI_API_KEY.
    with pytest.raises(ExternalCallError):
        extract_transactions_from_file(b"x", "application/pdf", settings=Settings())


def test_non_standard_constants_and_deep_nesting_yield_empty_list():
    nan_row = '[{"date": "2024-03-01", "amount": NaN, "category": "Misc", "merchant": null}]'
    assert normalize_extraction_response(nan_row) == []
    assert normalize_extraction_response("[" * 100000) == []
