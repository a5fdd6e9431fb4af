"""
In-memory prompt store.

Keeps records in a dictionary guarded by a lock. Not persistent across
restarts; used by the CLI, the API and the tests.
"""

import logging
import threading
import uuid
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..domains import Domain
from ..exceptions import InvalidInputError, PromptNotFoundError
from ..models import RefinedPrompt
from .store import PromptRecord, PromptStore

logger = logging.getLogger(__name__)


class InMemoryPromptStore(PromptStore):
    """
    Thread-safe in-memory PromptStore.

    Usage:
        store = InMemoryPromptStore()
        prompt_id = store.save(engine.process("create a login form"), {"tags": ["auth"]})
        record = store.get(prompt_id)
    """

    def __init__(self):
        self._records: Dict[str, PromptRecord] = {}
        # Insertion sequence, used to order records saved within the same instant
        self._sequence: Dict[str, int] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def save(self, refined_prompt: RefinedPrompt, metadata: Optional[Dict[str, Any]] = None) -> str:
        if not isinstance(refined_prompt, RefinedPrompt):
            raise InvalidInputError("refined_prompt", f"expected RefinedPrompt, got {type(refined_prompt).__name__}")

        extra = dict(metadata or {})
        tags = extra.pop("tags", None) or ()
        if isinstance(tags, str):
            tags = [tags]
        is_public = bool(extra.pop("is_public", False))

        record = PromptRecord(
            id=str(uuid.uuid4()),
            original=refined_prompt.original,
            refined=refined_prompt.refined,
            domain=refined_prompt.domain,
            template=refined_prompt.template,
            score=refined_prompt.score,
            created_at=datetime.now(timezone.utc),
            metadata={**refined_prompt.metadata.to_dict(), **extra},
            tags=tuple(sorted({str(tag).strip().lower() for tag in tags if str(tag).strip()})),
            is_public=is_public,
        )

        with self._lock:
            self._counter += 1
            self._records[record.id] = record
            self._sequence[record.id] = self._counter

        logger.info(f"Saved prompt {record.id} ({record.domain.value}, overall={record.score.overall:.4f})")
        return record.id

    def get(self, prompt_id: str, record_usage: bool = True) -> PromptRecord:
        with self._lock:
            record = self._records.get(prompt_id)
            if record is None:
                raise PromptNotFoundError(prompt_id)
            if not record_usage:
                return record
            record = replace(record, usage_count=record.usage_count + 1)
            self._records[prompt_id] = record
        return record

    def search(
        self,
        query: str = "",
        domain: Optional[Domain] = None,
        tags: Optional[Sequence[str]] = None,
        min_score: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[PromptRecord]:
        wanted_domain = None
        if domain is not None:
            wanted_domain = Domain.parse(domain)
            if wanted_domain is None:
                raise InvalidInputError("domain", f"'{domain}' is not a supported domain")
        if min_score is not None and (isinstance(min_score, bool) or not isinstance(min_score, (int, float))):
            raise InvalidInputError("min_score", f"must be a number, got {min_score!r}")
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
            raise InvalidInputError("limit", "must be a positive integer")

        needle = (query or "").strip().lower()
        if isinstance(tags, str):
            tags = [tags]
        wanted_tags = {str(tag).strip().lower() for tag in (tags or ()) if str(tag).strip()}

        with self._lock:
            candidates = [(record, self._sequence[record.id]) for record in self._records.values()]

        matches = []
        for record, sequence in candidates:
            if needle and needle not in record.original.lower() and needle not in record.refined.lower():
                continue
            if wanted_domain is not None and record.domain is not wanted_domain:
                continue
            if wanted_tags and not wanted_tags.issubset(record.tags):
                continue
            if min_score is not None and record.score.overall < min_score:
                continue
            matches.append((record, sequence))

        matches.sort(key=lambda item: (-item[0].score.overall, -item[1]))
        results = [record for record, _ in matches]
        return results[:limit] if limit is not None else results

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            records = list(self._records.values())

        by_domain: Dict[str, List[float]] = defaultdict(list)
        for record in records:
            by_domain[record.domain.value].append(record.score.overall)

        return {
            "total": len(records),
            "public": sum(1 for record in records if record.is_public),
            "average_score": round(sum(r.score.overall for r in records) / len(records), 4) if records else 0.0,
            "by_domain": {
                domain: {"count": len(scores), "average_score": round(sum(scores) / len(scores), 4)}
                for domain, scores in sorted(by_domain.items())
            },
        }

    def clear(self) -> None:
        """Remove every record (useful for testing)."""
        with self._lock:
            self._records.clear()
            self._sequence.clear()
