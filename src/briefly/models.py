from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from briefly.llm_schema import RecipeResult, StructuringResult

MANUAL_INPUT_URL = "manual-input"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ExtractedDocument:
    title: str
    content: str
    strategy: str

    @property
    def word_count(self) -> int:
        return len(self.content.split())


class RecordDraft(BaseModel):
    """
    A structured result ready to be persisted. The store assigns id/created_at.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    result: StructuringResult


class DomainRecord(BaseModel):
    """
    One persisted pipeline run. Created once, read many times, never updated.
    Serialized with camelCase keys (`by_alias=True`); either spelling is accepted on load.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    url: str
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    result: StructuringResult


def assemble_record(
    result: StructuringResult,
    url: Optional[str] = None,
    title: Optional[str] = None,
) -> RecordDraft:
    """
    Merge a structured result with request metadata.

    - missing url -> "manual-input" (pasted text with no source)
    - a non-blank caller title replaces the extracted recipe title
    """
    if title and title.strip() and isinstance(result, RecipeResult):
        result = result.model_copy(update={"title": title.strip()})

    return RecordDraft(url=(url or "").strip() or MANUAL_INPUT_URL, result=result)
