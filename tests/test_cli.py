"""Tests for the Typer CLI surface."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

import briefly.cli as cli_mod
from briefly.cli import app
from briefly.llm_schema import RecipeResult
from briefly.models import RecordDraft
from briefly.store import JsonlRecordStore

runner = CliRunner()

ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "BRIEFLY_VARIANT",
    "LOG_LEVEL",
    "DATA_DIR",
    "DEBUG_DIR",
    "FETCH_TIMEOUT_S",
    "MAX_FOCUS_CHARS",
    "MIN_TEXT_CHARS",
)


@pytest.fixture
def env(monkeypatch, tmp_path):
    # setenv first so values written by load_dotenv are undone after each test
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-0123456789")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    # keep log lines out of the captured command output
    monkeypatch.setattr(cli_mod, "setup_logging", lambda level: None)
    return tmp_path


def test_summarize_text_reports_error_payload(env) -> None:
    short = env / "short.txt"
    short.write_text("two eggs", encoding="utf-8")

    result = runner.invoke(app, ["summarize-text", "--file", str(short)])

    assert result.exit_code == 1
    assert "FAILED VALIDATION_FAILED" in result.output
    payload = json.loads(result.output[result.output.index("{"):])
    assert payload["errorCode"] == "VALIDATION_FAILED"
    assert payload["recoverable"] is False
    assert "50 characters" in payload["error"]
    assert "Tip:" not in result.output


def test_history_prints_camel_case_records(env) -> None:
    store = JsonlRecordStore(env / "data" / "records.jsonl")
    asyncio.run(
        store.create(RecordDraft(url="https://x/r", result=RecipeResult(title="R", total_time="5 min", is_recipe=True)))
    )

    result = runner.invoke(app, ["history", "--limit", "5"])

    assert result.exit_code == 0
    [row] = json.loads(result.output)
    assert row["url"] == "https://x/r"
    assert "createdAt" in row
    assert row["result"]["totalTime"] == "5 min"
    assert row["result"]["isRecipe"] is True


def test_history_without_records(env) -> None:
    result = runner.invoke(app, ["history"])

    assert result.exit_code == 0
    assert "No records yet." in result.output
