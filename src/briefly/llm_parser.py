from __future__ import annotations

import json
from typing import Any, Dict

from briefly.errors import StructuringError
from briefly.llm_schema import TONES, NarrativeResult, RecipeResult
from briefly.normalize import (
    FieldPolicy,
    coerce_bool,
    coerce_choice,
    coerce_optional_str,
    coerce_str,
    coerce_str_list,
    normalize_fields,
)

NARRATIVE_POLICY: FieldPolicy = {
    "summary": ("summary", coerce_str),
    "keywords": ("keywords", coerce_str_list),
    "tone": ("tone", lambda v: coerce_choice(v, TONES, "neutral")),
    "is_political": ("isPolitical", coerce_bool),
    "political_topics": ("politicalTopics", coerce_str_list),
}

RECIPE_POLICY: FieldPolicy = {
    "title": ("title", lambda v: coerce_str(v, "Untitled recipe")),
    "servings": ("servings", coerce_optional_str),
    "total_time": ("totalTime", coerce_optional_str),
    "ingredients": ("ingredients", coerce_str_list),
    "steps": ("steps", coerce_str_list),
    "is_recipe": ("isRecipe", coerce_bool),
}


def load_json_object(raw_text: str) -> Dict[str, Any]:
    """
    Parse raw LLM output into a JSON object.
    Raises StructuringError on empty output, invalid JSON or a non-object value.
    """
    if not raw_text or not raw_text.strip():
        raise StructuringError("empty reply")

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise StructuringError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StructuringError(f"invalid JSON: expected an object, got {type(data).__name__}")

    return data


def parse_recipe_output(raw_text: str) -> RecipeResult:
    return RecipeResult(**normalize_fields(load_json_object(raw_text), RECIPE_POLICY))


def parse_narrative_output(raw_text: str) -> NarrativeResult:
    fields = normalize_fields(load_json_object(raw_text), NARRATIVE_POLICY)
    if not fields["is_political"]:
        fields["political_topics"] = []
    return NarrativeResult(**fields)
