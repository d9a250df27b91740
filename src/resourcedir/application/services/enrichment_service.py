from __future__ import annotations

import logging
import math
import threading
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Sequence

from resourcedir.application.services.metadata_resolver import MetadataResolver
from resourcedir.core.config import DEFAULT_LOOKUP_TIMEOUT_SECONDS, DEFAULT_LOOKUP_WORKERS
from resourcedir.core.links import classify
from resourcedir.domain.models.metadata import LinkClassification, MetadataResult
from resourcedir.domain.models.resource import UNTITLED, EnrichedResource, StoredResource

logger = logging.getLogger(__name__)

ItemCallback = Callable[[int, EnrichedResource], None]


def build_enriched(
    record: StoredResource,
    classification: LinkClassification,
    metadata: MetadataResult,
) -> EnrichedResource:
    return EnrichedResource(
        id=record.id,
        title=record.title,
        description=record.description,
        link=record.link,
        created_at=record.created_at,
        is_collection=classification.is_collection,
        collection_id=classification.collection_id,
        item_id=classification.item_id,
        display_title=metadata.title or record.title or UNTITLED,
        thumbnail=metadata.thumbnail,
        author_name=metadata.author_name,
        author_url=metadata.author_url,
        published_at=metadata.upload_date or record.created_at,
        embed_html=metadata.html,
        metadata_ok=metadata.ok,
    )


class EnrichmentService:
    """Turns stored records into display-ready resources.

    Lookups fan out over a thread pool, one per distinct link in the batch.
    The result keeps the input order and always has one entry per input
    record; a failed lookup only reduces that record to its stored fields.
    A lookup still running after ``lookup_timeout_seconds`` is abandoned and
    degraded, so one slow endpoint cannot hold up the batch.
    """

    _WAIT_POLL_SECONDS = 0.05

    def __init__(
        self,
        resolver: MetadataResolver,
        max_workers: int = DEFAULT_LOOKUP_WORKERS,
        lookup_timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        self.resolver = resolver
        self.max_workers = max(1, int(max_workers))
        self.lookup_timeout_seconds = float(lookup_timeout_seconds)

    def enrich(
        self,
        records: Sequence[StoredResource],
        on_item: ItemCallback | None = None,
    ) -> list[EnrichedResource]:
        if not records:
            return []

        indexes_by_link: dict[str, list[int]] = {}
        for idx, record in enumerate(records):
            indexes_by_link.setdefault(record.link, []).append(idx)

        results: list[EnrichedResource | None] = [None] * len(records)
        worker_count = min(self.max_workers, len(indexes_by_link))
        logger.debug(
            "Enriching %d record(s) across %d distinct link(s) with %d worker(s)",
            len(records),
            len(indexes_by_link),
            worker_count,
        )

        def settle(link: str, classification: LinkClassification, metadata: MetadataResult) -> None:
            for idx in indexes_by_link[link]:
                enriched = build_enriched(records[idx], classification, metadata)
                results[idx] = enriched
                if on_item is not None:
                    on_item(idx, enriched)

        started_at: dict[str, float] = {}
        started_lock = threading.Lock()

        def lookup(link: str) -> tuple[LinkClassification, MetadataResult]:
            with started_lock:
                started_at[link] = time.perf_counter()
            return self._lookup(link)

        # Queued lookups wait behind at most this many rounds of busy workers.
        waves = math.ceil(len(indexes_by_link) / worker_count)
        batch_deadline = time.perf_counter() + self.lookup_timeout_seconds * waves

        executor = ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="resourcedir-enrich")
        try:
            future_map = {executor.submit(lookup, link): link for link in indexes_by_link}
            pending = set(future_map)
            while pending:
                done, pending = wait(pending, timeout=self._WAIT_POLL_SECONDS, return_when=FIRST_COMPLETED)
                for future in done:
                    link = future_map[future]
                    try:
                        classification, metadata = future.result()
                    except Exception as exc:
                        logger.warning("Enrichment of %s failed; using stored fields: %s", link, exc)
                        classification, metadata = classify(link), MetadataResult.degraded(str(exc))
                    settle(link, classification, metadata)

                now_ts = time.perf_counter()
                with started_lock:
                    started = dict(started_at)
                for future in list(pending):
                    link = future_map[future]
                    deadline = (
                        started[link] + self.lookup_timeout_seconds if link in started else batch_deadline
                    )
                    if now_ts < deadline:
                        continue
                    pending.discard(future)
                    future.cancel()
                    logger.warning(
                        "Metadata lookup for %s exceeded %.1fs; using stored fields",
                        link,
                        self.lookup_timeout_seconds,
                    )
                    settle(link, classify(link), MetadataResult.degraded("timed out"))
        finally:
            # Abandoned lookups keep their thread until the client gives up.
            executor.shutdown(wait=False, cancel_futures=True)

        return [item for item in results if item is not None]

    def _lookup(self, link: str) -> tuple[LinkClassification, MetadataResult]:
        return classify(link), self.resolver.resolve(link)
