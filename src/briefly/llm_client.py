from __future__ import annotations

import logging

from openai import AsyncOpenAI

from briefly.errors import StructuringError
from briefly.llm_schema import StructuringResult
from briefly.prompts import SYSTEM_PROMPT
from briefly.variants import Variant

log = logging.getLogger("briefly.llm")


class StructuringAdapter:
    """
    Thin wrapper around OpenAI that turns focused text into a validated result.
    One request per call; a malformed reply is fatal for that call.
    """

    def __init__(self, client: AsyncOpenAI, model: str = "gpt-4o-mini") -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_api_key(cls, api_key: str, model: str = "gpt-4o-mini") -> "StructuringAdapter":
        return cls(AsyncOpenAI(api_key=api_key), model=model)

    async def structure(self, text: str, variant: Variant) -> StructuringResult:
        """
        Send text with the variant's instructions and return the normalized result.
        Raises StructuringError when the reply is missing or is not a JSON object.
        """
        prompt = variant.build_prompt(text)
        log.debug("Sending %s prompt to LLM (%s chars)", variant.name, len(prompt))

        response = await self._client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            text={"format": {"type": "json_object"}},
            temperature=0.2,
        )

        raw_text = getattr(response, "output_text", None)
        if not isinstance(raw_text, str):
            raise StructuringError("LLM response did not contain text output")

        log.debug("Raw LLM output: %s", raw_text)

        return variant.parse(raw_text)
