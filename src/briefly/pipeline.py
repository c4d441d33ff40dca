from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import List, Optional

from briefly.errors import (
    ContentRejected,
    ErrorCode,
    PipelineError,
    ValidationFailed,
    classify,
)
from briefly.extract import extract_document
from briefly.focus import focus
from briefly.http_client import HttpFetcher
from briefly.llm_client import StructuringAdapter
from briefly.models import DomainRecord, ExtractedDocument, assemble_record
from briefly.store import RecordStore
from briefly.variants import Variant

log = logging.getLogger("briefly.pipeline")


def write_debug_dump(debug_dir: Path, url: str, doc: ExtractedDocument) -> Optional[Path]:
    """
    Write the extracted text to <debug_dir>/extracted_<ms>.txt for inspection.
    Failures are logged and ignored; this never affects the request.
    """
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        path = debug_dir / f"extracted_{int(time.time() * 1000)}.txt"
        path.write_text(
            "\n".join(
                [
                    f"URL: {url}",
                    f"TITLE: {doc.title}",
                    f"STRATEGY: {doc.strategy}",
                    "",
                    "================ EXTRACTED CONTENT ================",
                    "",
                    doc.content,
                    "",
                    "====================================================",
                ]
            ),
            encoding="utf-8",
        )
    except OSError as e:
        log.warning("Failed to write debug extraction file: %s", e)
        return None

    log.info("Extracted content saved to %s", path)
    return path


class Pipeline:
    """
    fetch -> extract (primary, then fallbacks) -> focus -> structure -> persist.

    Holds only injected collaborators and fixed settings, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        adapter: StructuringAdapter,
        store: RecordStore,
        variant: Variant,
        *,
        min_text_chars: int = 50,
        min_primary_chars: int = 500,
        min_words: int = 30,
        debug_dir: Optional[Path] = None,
    ) -> None:
        self.fetcher = fetcher
        self.adapter = adapter
        self.store = store
        self.variant = variant
        self.min_text_chars = min_text_chars
        self.min_primary_chars = min_primary_chars
        self.min_words = min_words
        self.debug_dir = debug_dir

    async def from_url(self, url: str) -> DomainRecord:
        """
        Build a record from a web page. Raises PipelineError.
        """
        log.info("Processing URL %s (%s)", url, self.variant.name)
        try:
            fetched = await self.fetcher.fetch(url)
            doc = await asyncio.to_thread(
                extract_document,
                fetched.html,
                fetched.final_url,
                min_primary_chars=self.min_primary_chars,
                min_words=self.min_words,
            )
            if self.debug_dir is not None:
                await asyncio.to_thread(write_debug_dump, self.debug_dir, url, doc)

            return await self._structure_and_save(doc.content, url=url)
        except Exception as e:
            raise self._fail(e, url) from e

    async def from_text(
        self,
        text: str,
        title: Optional[str] = None,
        source_url: Optional[str] = None,
    ) -> DomainRecord:
        """
        Build a record from pasted text, for pages that block scraping.
        Text shorter than min_text_chars is rejected before any other work.
        """
        source = source_url or "pasted text"
        try:
            if not isinstance(text, str) or len(text.strip()) < self.min_text_chars:
                raise ValidationFailed(
                    f"Please provide at least {self.min_text_chars} characters of text."
                )
            log.info("Processing pasted text (%d chars, %s)", len(text), self.variant.name)

            return await self._structure_and_save(text, url=source_url, title=title)
        except Exception as e:
            raise self._fail(e, source) from e

    async def history(self, limit: int = 20) -> List[DomainRecord]:
        return await self.store.list_recent(limit)

    async def _structure_and_save(
        self,
        text: str,
        *,
        url: Optional[str],
        title: Optional[str] = None,
    ) -> DomainRecord:
        focused = focus(text, self.variant.focus_options)
        log.debug("Focused text: %d of %d chars", len(focused), len(text))

        result = await self.adapter.structure(focused, self.variant)
        if not self.variant.is_valid(result):
            raise ContentRejected(f"Structured result rejected by {self.variant.name} validity check")

        record = await self.store.create(assemble_record(result, url=url, title=title))
        log.info("Saved record %s for %s", record.id, record.url)
        return record

    def _fail(self, exc: Exception, source: str) -> PipelineError:
        error = classify(exc, self.variant)
        if error.code is ErrorCode.UNKNOWN:
            log.exception("Unexpected failure for %s", source)
        else:
            log.warning("Failed for %s: %s (%s)", source, error.code.value, exc)
        return error
