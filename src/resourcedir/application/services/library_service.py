from __future__ import annotations

import logging
from dataclasses import dataclass

from resourcedir.application.services.enrichment_service import (
    EnrichmentService,
    ItemCallback,
    build_enriched,
)
from resourcedir.application.services.layout_service import LayoutPreferences
from resourcedir.application.services.metadata_resolver import MetadataResolver
from resourcedir.application.services.presentation_service import (
    ExternalViewingListener,
    PresentationStateMachine,
)
from resourcedir.application.services.resource_service import ResourceService, SubmitResult
from resourcedir.application.services.watch_state_service import WatchStateStore
from resourcedir.core.config import AppPaths, EnrichmentSettings, load_enrichment_settings
from resourcedir.core.links import classify
from resourcedir.domain.models.metadata import MetadataResult
from resourcedir.infrastructure.db.repos.resource_repo import ResourceRepo
from resourcedir.infrastructure.local.store import LocalStateStore
from resourcedir.infrastructure.oembed.client import MetadataClient, OEmbedClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RefreshResult:
    success: bool
    message: str
    count: int
    degraded: int = 0


class LibrarySession:
    """Composition root for one library surface.

    Owns the presentation state machine and the watch state; the CLI builds
    one per invocation and the web app one per process.
    """

    def __init__(
        self,
        resource_service: ResourceService,
        enrichment_service: EnrichmentService,
        watch_state: WatchStateStore,
        layout: LayoutPreferences,
        on_external_viewing: ExternalViewingListener | None = None,
    ) -> None:
        self.resource_service = resource_service
        self.enrichment_service = enrichment_service
        self.watch_state = watch_state
        self.layout = layout
        self.presentation = PresentationStateMachine(
            watch_state=watch_state,
            on_external_viewing=on_external_viewing,
        )

    @classmethod
    def open(
        cls,
        paths: AppPaths,
        settings: EnrichmentSettings | None = None,
        client: MetadataClient | None = None,
        on_external_viewing: ExternalViewingListener | None = None,
    ) -> LibrarySession:
        settings = settings or load_enrichment_settings()
        if client is None:
            client = OEmbedClient(
                endpoint=settings.oembed_endpoint,
                timeout_seconds=settings.lookup_timeout_seconds,
            )
        local_store = LocalStateStore(paths.local_state_path)
        return cls(
            resource_service=ResourceService(ResourceRepo(paths.db_path)),
            enrichment_service=EnrichmentService(
                MetadataResolver(client),
                max_workers=settings.max_workers,
                lookup_timeout_seconds=settings.lookup_timeout_seconds,
            ),
            watch_state=WatchStateStore(local_store),
            layout=LayoutPreferences(local_store),
            on_external_viewing=on_external_viewing,
        )

    def submit(self, title: str, description: str, link: str) -> SubmitResult:
        return self.resource_service.create(title, description, link)

    def refresh(self, offline: bool = False, on_item: ItemCallback | None = None) -> RefreshResult:
        listing = self.resource_service.list_all()
        if not listing.success:
            return RefreshResult(success=False, message=listing.message, count=0)

        if offline:
            enriched = [
                build_enriched(record, classify(record.link), MetadataResult.degraded())
                for record in listing.records
            ]
        else:
            enriched = self.enrichment_service.enrich(listing.records, on_item=on_item)

        self.presentation.replace_resources(enriched)
        degraded = sum(1 for item in enriched if not item.metadata_ok)
        if degraded and not offline:
            logger.info("%d of %d resource(s) fell back to stored fields", degraded, len(enriched))
        return RefreshResult(
            success=True,
            message=listing.message,
            count=len(enriched),
            degraded=degraded,
        )
