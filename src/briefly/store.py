from __future__ import annotations

import asyncio
import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, Iterator, List, Protocol

from pydantic import ValidationError

from briefly.models import DomainRecord, RecordDraft, utc_now

log = logging.getLogger("briefly.store")


class RecordStore(Protocol):
    async def create(self, draft: RecordDraft) -> DomainRecord: ...

    async def list_recent(self, limit: int = 20) -> List[DomainRecord]: ...


def append_jsonl(path: Path, obj: Dict[str, Any]) -> None:
    """
    Append one JSON object as one JSONL line.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    line = json.dumps(obj, ensure_ascii=False)
    with path.open("a", encoding="utf-8") as f:
        f.write(line + "\n")
        f.flush()


def iter_jsonl(path: Path) -> Iterator[Dict[str, Any]]:
    """
    Iterate JSONL as dictionaries.
    Skips empty lines and lines that are not valid JSON; a missing file yields nothing.
    """
    if not path.exists():
        return

    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                log.warning("Skipping corrupt line %d in %s: %s", lineno, path, e)


class JsonlRecordStore:
    """
    Append-only record store backed by one JSONL file.
    Records are never rewritten; file access runs in a worker thread.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    async def create(self, draft: RecordDraft) -> DomainRecord:
        record = DomainRecord(
            id=uuid.uuid4().hex,
            url=draft.url,
            created_at=utc_now(),
            result=draft.result,
        )
        await asyncio.to_thread(self._append, record)
        return record

    async def list_recent(self, limit: int = 20) -> List[DomainRecord]:
        if limit <= 0:
            return []
        return await asyncio.to_thread(self._read_recent, limit)

    def _append(self, record: DomainRecord) -> None:
        with self._lock:
            append_jsonl(self.path, record.model_dump(mode="json", by_alias=True))

    def _read_recent(self, limit: int) -> List[DomainRecord]:
        with self._lock:
            rows = list(iter_jsonl(self.path))

        indexed = []
        for i, obj in enumerate(rows):
            try:
                indexed.append((i, DomainRecord.model_validate(obj)))
            except ValidationError as e:
                log.warning("Skipping invalid record %d in %s: %s", i + 1, self.path, e)

        # Later lines win ties on created_at
        indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [rec for _, rec in indexed[:limit]]
