from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict

from briefly.errors import ErrorCode
from briefly.focus import FocusOptions
from briefly.llm_parser import parse_narrative_output, parse_recipe_output
from briefly.llm_schema import NarrativeResult, RecipeResult, StructuringResult
from briefly.prompts import build_narrative_prompt, build_recipe_prompt


@dataclass(frozen=True)
class Variant:
    """
    Everything that differs between deployments of the pipeline:
    prompt, reply parser, validity check, focus markers and rejection wording.
    """

    name: str
    build_prompt: Callable[[str], str]
    parse: Callable[[str], StructuringResult]
    is_valid: Callable[[StructuringResult], bool]
    rejection_code: ErrorCode
    rejection_message: str
    focus_options: FocusOptions = field(default_factory=FocusOptions)

    def with_max_chars(self, max_chars: int) -> "Variant":
        return replace(self, focus_options=replace(self.focus_options, max_chars=max_chars))


def _recipe_is_valid(result: StructuringResult) -> bool:
    return isinstance(result, RecipeResult) and result.is_recipe


def _narrative_is_valid(result: StructuringResult) -> bool:
    # No validity flag in this schema; an empty summary leaves nothing to keep
    return isinstance(result, NarrativeResult) and bool(result.summary)


RECIPE = Variant(
    name="recipe",
    build_prompt=build_recipe_prompt,
    parse=parse_recipe_output,
    is_valid=_recipe_is_valid,
    rejection_code=ErrorCode.NOT_A_RECIPE,
    rejection_message=(
        "This doesn't look like a cooking recipe. "
        "Make sure the page or pasted text includes ingredients and steps."
    ),
    focus_options=FocusOptions(markers=("ingredients", "ingredient")),
)

NARRATIVE = Variant(
    name="narrative",
    build_prompt=build_narrative_prompt,
    parse=parse_narrative_output,
    is_valid=_narrative_is_valid,
    rejection_code=ErrorCode.CONTENT_REJECTED,
    rejection_message="I couldn't find an article to summarize in this content.",
)

VARIANTS: Dict[str, Variant] = {v.name: v for v in (RECIPE, NARRATIVE)}


def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant {name!r}; expected one of {sorted(VARIANTS)}") from None
