"""Unit tests for the structuring adapter with a mocked OpenAI client."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from briefly.errors import StructuringError
from briefly.llm_client import StructuringAdapter
from briefly.llm_schema import NarrativeResult, RecipeResult
from briefly.variants import NARRATIVE, RECIPE


def _client(output_text) -> MagicMock:
    client = MagicMock()
    client.responses.create = AsyncMock(return_value=MagicMock(output_text=output_text))
    return client


@pytest.mark.asyncio
async def test_structure_sends_instructions_and_text() -> None:
    client = _client(json.dumps({"isRecipe": True, "title": "Bread", "ingredients": ["flour"], "steps": ["Bake."]}))
    adapter = StructuringAdapter(client, model="test-model")

    result = await adapter.structure("Ingredients: flour. Bake it.", RECIPE)

    assert isinstance(result, RecipeResult)
    assert result.title == "Bread"

    kwargs = client.responses.create.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["text"] == {"format": {"type": "json_object"}}
    system, user = kwargs["input"]
    assert system["role"] == "system"
    assert "JSON" in system["content"]
    assert "Ingredients: flour. Bake it." in user["content"]
    assert '"isRecipe"' in user["content"]
    client.responses.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_structure_narrative_variant() -> None:
    client = _client(json.dumps({"summary": "Short.", "keywords": ["a"], "tone": "urgent"}))

    result = await StructuringAdapter(client).structure("Some article text", NARRATIVE)

    assert isinstance(result, NarrativeResult)
    assert result.tone == "urgent"


@pytest.mark.asyncio
async def test_invalid_json_is_fatal_and_not_retried() -> None:
    client = _client("Sure! Here is your recipe: {title: bread")

    with pytest.raises(StructuringError) as exc_info:
        await StructuringAdapter(client).structure("text", RECIPE)

    assert "invalid JSON" in str(exc_info.value)
    assert client.responses.create.await_count == 1


@pytest.mark.asyncio
async def test_missing_output_text_raises() -> None:
    client = _client(None)

    with pytest.raises(StructuringError):
        await StructuringAdapter(client).structure("text", RECIPE)
