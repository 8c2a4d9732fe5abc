"""Recompute stored search keys for existing posts and users.

Used after bulk imports, for documents written before the key fields
existed, or after a change to normalize_search_text. Only documents whose
stored key differs from the recomputed one are written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blogsearch.application.services.search_index import search_fields_for
from blogsearch.domain.enums import EntityKind
from blogsearch.infrastructure.firebase._rest_client import (
    MAX_BATCH_WRITES,
    FirestoreRESTClient,
)
from blogsearch.infrastructure.firebase.collections import SEARCH_COLLECTIONS

logger = logging.getLogger(__name__)


@dataclass
class BackfillReport:
    """Counts for one collection."""

    kind: EntityKind
    scanned: int = 0
    updated: int = 0


class FirestoreSearchKeyBackfill:
    """Rewrites title_normalized / username_normalized in batched commits."""

    def __init__(self, client: FirestoreRESTClient, batch_size: int = MAX_BATCH_WRITES) -> None:
        if not 1 <= batch_size <= MAX_BATCH_WRITES:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_WRITES}")
        self._client = client
        self._batch_size = batch_size

    async def run(self, kind: EntityKind, dry_run: bool = False) -> BackfillReport:
        """Scan one collection and fix stale keys; dry_run only counts."""
        collection = SEARCH_COLLECTIONS[kind]
        report = BackfillReport(kind=kind)
        pending: list[dict] = []
        async for snapshot in self._client.collection(collection).stream():
            report.scanned += 1
            data = snapshot.to_dict()
            fields = search_fields_for(kind, data)
            if all(data.get(k) == v for k, v in fields.items()):
                continue
            report.updated += 1
            pending.append({"path": f"{collection}/{snapshot.id}", "data": fields, "merge": True})
            if len(pending) >= self._batch_size:
                await self._flush(pending, dry_run)
                pending = []
        await self._flush(pending, dry_run)
        logger.info(
            "Search key backfill %s: scanned=%d updated=%d dry_run=%s",
            collection,
            report.scanned,
            report.updated,
            dry_run,
        )
        return report

    async def run_all(self, dry_run: bool = False) -> list[BackfillReport]:
        return [await self.run(kind, dry_run=dry_run) for kind in EntityKind]

    async def _flush(self, writes: list[dict], dry_run: bool) -> None:
        if not writes or dry_run:
            return
        await self._client.batch_write(writes)
