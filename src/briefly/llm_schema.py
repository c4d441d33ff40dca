from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

TONES = ("neutral", "optimistic", "pessimistic", "critical", "enthusiastic", "urgent")

Tone = Literal["neutral", "optimistic", "pessimistic", "critical", "enthusiastic", "urgent"]


class NarrativeResult(BaseModel):
    """
    Summary/tone metadata for an article.
    Built from already-normalized values (see llm_parser), never straight from the LLM reply.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["narrative"] = "narrative"

    summary: str = Field(default="", description="Concise summary in 3-5 sentences.")
    keywords: List[str] = Field(default_factory=list, description="5-7 key nouns or noun phrases.")
    tone: Tone = "neutral"
    is_political: bool = Field(default=False, alias="isPolitical")
    political_topics: List[str] = Field(default_factory=list, alias="politicalTopics")


class RecipeResult(BaseModel):
    """
    Ingredients/steps extracted from a recipe page.
    `is_recipe` is the validity flag: false means the text was not a recipe.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["recipe"] = "recipe"

    title: str = "Untitled recipe"
    servings: Optional[str] = None
    total_time: Optional[str] = Field(default=None, alias="totalTime")
    ingredients: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    is_recipe: bool = Field(default=False, alias="isRecipe")


StructuringResult = Annotated[Union[NarrativeResult, RecipeResult], Field(discriminator="kind")]
