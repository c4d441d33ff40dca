"""Unit tests for LLM reply parsing and field coercion."""

import json

import pytest

from briefly.errors import StructuringError
from briefly.llm_parser import parse_narrative_output, parse_recipe_output
from briefly.normalize import (
    coerce_bool,
    coerce_choice,
    coerce_optional_str,
    coerce_str,
    coerce_str_list,
)


def test_bad_array_fields_are_coerced_not_fatal() -> None:
    raw = json.dumps({"ingredients": "not-an-array", "steps": [1, 2, "ok"], "isRecipe": True})

    result = parse_recipe_output(raw)

    assert result.ingredients == []
    assert result.steps == ["ok"]
    assert result.is_recipe is True
    assert result.title == "Untitled recipe"


def test_full_recipe_reply() -> None:
    raw = json.dumps(
        {
            "isRecipe": True,
            "title": "  Pancakes ",
            "servings": 4,
            "totalTime": "20 minutes",
            "ingredients": ["1 cup flour", "", "2 eggs", None],
            "steps": ["Mix.", "Fry."],
        }
    )

    result = parse_recipe_output(raw)

    assert result.title == "Pancakes"
    assert result.servings == "4"
    assert result.total_time == "20 minutes"
    assert result.ingredients == ["1 cup flour", "2 eggs"]
    assert result.steps == ["Mix.", "Fry."]


def test_missing_validity_flag_rejects() -> None:
    result = parse_recipe_output('{"title": "Soup", "ingredients": ["water"]}')
    assert result.is_recipe is False


def test_string_validity_flag_is_not_trusted() -> None:
    result = parse_recipe_output('{"isRecipe": "true"}')
    assert result.is_recipe is False


@pytest.mark.parametrize("raw", ["not json at all", '{"title": "Soup"', "", "   ", "[1, 2]", '"just a string"'])
def test_invalid_reply_raises_structuring_error(raw: str) -> None:
    with pytest.raises(StructuringError):
        parse_recipe_output(raw)
    with pytest.raises(StructuringError):
        parse_narrative_output(raw)


def test_narrative_defaults_and_tone_fallback() -> None:
    result = parse_narrative_output('{"summary": "Things happened.", "tone": "gloomy", "keywords": "x"}')

    assert result.summary == "Things happened."
    assert result.tone == "neutral"
    assert result.keywords == []
    assert result.is_political is False
    assert result.political_topics == []


def test_narrative_political_topics_cleared_when_not_political() -> None:
    raw = json.dumps(
        {
            "summary": "A recipe blog post.",
            "keywords": ["bread", "flour"],
            "tone": "Enthusiastic",
            "isPolitical": False,
            "politicalTopics": ["tax policy"],
        }
    )

    result = parse_narrative_output(raw)

    assert result.tone == "enthusiastic"
    assert result.political_topics == []


def test_narrative_political_topics_kept_when_political() -> None:
    raw = json.dumps(
        {"summary": "Parliament voted.", "isPolitical": True, "politicalTopics": ["tax policy", 3]}
    )
    result = parse_narrative_output(raw)
    assert result.political_topics == ["tax policy"]


def test_coercers() -> None:
    assert coerce_str(None, "d") == "d"
    assert coerce_str("   ", "d") == "d"
    assert coerce_str(5, "d") == "d"
    assert coerce_optional_str(True) is None
    assert coerce_optional_str(2.5) == "2.5"
    assert coerce_optional_str("") is None
    assert coerce_str_list({"a": 1}) == []
    assert coerce_str_list([" a ", 1, "b"]) == ["a", "b"]
    assert coerce_bool(1) is False
    assert coerce_bool(None, default=True) is True
    assert coerce_choice("URGENT", ("urgent",), "neutral") == "urgent"
    assert coerce_choice(None, ("urgent",), "neutral") == "neutral"
