import json

import pytest

from finease.json_repair import (
    REPAIR_FAILED,
    clean_json_string,
    loads_lenient,
    loads_strict,
    repair_truncated_json,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('```json\n[{"a":1}]\n```', '[{"a":1}]'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('  [{"a":1}]  ', '[{"a":1}]'),
        ("", "[]"),
        (None, "[]"),
    ],
)
def test_clean_json_string(raw, expected):
    assert clean_json_string(raw) == expected


def test_truncated_array_is_cut_after_last_complete_object():
    repaired = repair_truncated_json('[{"a":1},{"a":2},{"a":')
    assert repaired == '[{"a":1},{"a":2}]'
    assert json.loads(repaired) == [{"a": 1}, {"a": 2}]


def test_truncated_object_inside_final_string_is_closed():
    repaired = repair_truncated_json('{"score": 50, "level": "Mi')
    assert json.loads(repaired) == {"score": 50, "level": "Mi"}


def test_valid_json_passes_through():
    assert repair_truncated_json(' {"a": [1, 2]} ') == '{"a": [1, 2]}'


@pytest.mark.parametrize(
    "broken",
    [
        "[1, 2,",  # array without any object to cut back to
        '{"observations": ["a", "b"',  # truncated inside an array value
        "not json at all",
    ],
)
def test_unsalvageable_input_returns_sentinel(broken: str):
    assert repair_truncated_json(broken) == REPAIR_FAILED


def test_loads_lenient_never_raises():
    assert loads_lenient('```json\n[{"a":1},{"a"\n```', operation="t") == [{"a": 1}]
    assert loads_lenient("garbage", operation="t") == {}
    assert loads_lenient(None, operation="t") == []


@pytest.mark.parametrize("text", ["NaN", '{"a": Infinity}', "[-Infinity]"])
def test_loads_strict_rejects_non_standard_constants(text: str):
    with pytest.raises(json.JSONDecodeError):
        loads_strict(text)


def test_loads_strict_reports_deep_nesting_as_decode_error():
    with pytest.raises(json.JSONDecodeError):
        loads_strict("[" * 100000)
    assert repair_truncated_json("[" * 100000) == REPAIR_FAILED
