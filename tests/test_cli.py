import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import finease.cli as cli_mod
from tests.helpers.openai_stub import OpenAIStub, install_openai_stub

runner = CliRunner()

_CSV = (
    "Date,Description,Amount\n"
    "2024-01-01,Monthly Rent,15000\n"
    "2024-01-02,Starbucks,350.50\n"
    "2024-01-03,BigBasket Groceries,1800\n"
)

_ANALYSIS = {
    "score": 35,
    "level": "Mild",
    "observations": ["o1", "o2", "o3"],
    "recentChanges": "Steady.",
    "importance": "Cafe habit.",
    "recommendations": ["r1", "r2", "r3"],
}


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # The root callback would bind a handler to the runner's temporary stderr.
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **kw: None)


def _write_csv(tmp_path: Path) -> Path:
    path = tmp_path / "statement.csv"
    path.write_text(_CSV, encoding="utf-8")
    return path


def test_analyze_json_with_filters(tmp_path: Path):
    path = _write_csv(tmp_path)

    result = runner.invoke(
        cli_mod.app,
        ["analyze", str(path), "--no-ai", "--json", "--start-date", "2024-01-02"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["analysis"] is None
    assert [t["merchant"] for t in payload["transactions"]] == ["Starbucks", "BigBasket Groceries"]
    assert payload["summary"]["count"] == 2
    assert payload["caption"] == "Showing 2 of 3 transactions from 2024-01-02 to 2024-01-03"
    assert payload["transactions"][0]["isDiscretionary"] is True


def test_analyze_renders_tables_and_analysis(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    stub = install_openai_stub(monkeypatch, OpenAIStub(json.dumps(_ANALYSIS)))
    path = _write_csv(tmp_path)

    result = runner.invoke(cli_mod.app, ["analyze", str(path)])

    assert result.exit_code == 0, result.output
    assert len(stub.calls) == 1
    assert "Financial Stress Analysis" in result.output
    assert "Spending Summary" in result.output
    assert "Showing 3 of 3 transactions" in result.output


def test_analyze_missing_columns_exits_1(tmp_path: Path):
    path = tmp_path / "bad.csv"
    path.write_text("Foo,Bar\n1,2\n", encoding="utf-8")

    result = runner.invoke(cli_mod.app, ["analyze", str(path), "--no-ai"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_analyze_unsupported_type_exits_1(tmp_path: Path):
    path = tmp_path / "notes.docx"
    path.write_bytes(b"PK")

    result = runner.invoke(cli_mod.app, ["analyze", str(path), "--no-ai"])

    assert result.exit_code == 1
    assert "Unsupported file format" in result.output


def test_analyze_rejects_bad_date(tmp_path: Path):
    path = _write_csv(tmp_path)

    result = runner.invoke(cli_mod.app, ["analyze", str(path), "--start-date", "someday"])

    assert result.exit_code == 2


def test_sample_json_is_seeded():
    args = ["sample", "--seed", "11", "--no-ai", "--json"]

    first = runner.invoke(cli_mod.app, args)
    second = runner.invoke(cli_mod.app, args)

    assert first.exit_code == 0, first.output
    assert json.loads(first.stdout)["summary"] == json.loads(second.stdout)["summary"]
    categories = {c["name"] for c in json.loads(first.stdout)["categories"]}
    assert {"Rent", "Groceries"} <= categories


def test_sample_without_api_key_shows_fallback():
    result = runner.invoke(cli_mod.app, ["sample", "--seed", "1", "--json"])

    assert result.exit_code == 0, result.output
    analysis = json.loads(result.stdout)["analysis"]
    assert analysis["recentChanges"] == "Analysis unavailable."
