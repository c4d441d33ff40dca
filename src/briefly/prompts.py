from __future__ import annotations

from briefly.llm_schema import TONES

SYSTEM_PROMPT = """You are a precise information extraction system.
You must return ONLY valid JSON.
Do not include explanations, markdown, or extra text.
"""


def build_recipe_prompt(text: str) -> str:
    """
    Prompt for RecipeResult. Key names here are the ones llm_parser reads.
    """
    return f"""
Extract the cooking recipe from the page text below and return a JSON object with this exact structure:

{{
  "isRecipe": true,
  "title": "Recipe name",
  "servings": "4 servings",
  "totalTime": "45 minutes",
  "ingredients": ["1 cup flour", "2 eggs"],
  "steps": ["Preheat the oven to 180C.", "Whisk the eggs."]
}}

Rules:
- Output ONLY JSON
- Set "isRecipe" to false if the text is not a cooking recipe; other fields may then be empty
- "ingredients": one string per ingredient, with quantity and unit as written
- "steps": one string per instruction, in order, without numbering
- "servings" and "totalTime" are null when the text does not state them
- Ignore comments, ads, navigation and unrelated stories around the recipe

Page text:
\"\"\"
{text}
\"\"\"
""".strip()


def build_narrative_prompt(text: str) -> str:
    """
    Prompt for NarrativeResult.
    """
    tones = ", ".join(f'"{t}"' for t in TONES)
    return f"""
Analyze the article below and return a JSON object with this exact structure:

{{
  "summary": "3-5 sentence concise summary",
  "keywords": ["keyword1", "keyword2"],
  "tone": "neutral",
  "isPolitical": false,
  "politicalTopics": []
}}

Rules:
- Output ONLY JSON
- "keywords": 5-7 key nouns or noun phrases
- "tone": one of {tones}
- "isPolitical": true only if politics, government or public policy are central to the article
- "politicalTopics": 0-5 policy topics (e.g. "climate policy", "immigration"); empty when not political

Article text:
\"\"\"
{text}
\"\"\"
""".strip()
