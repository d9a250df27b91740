from __future__ import annotations

import logging
from dataclasses import replace
from typing import AbstractSet, Callable, Iterable, Sequence

from resourcedir.application.services.watch_state_service import WatchStateStore
from resourcedir.core.errors import ResourceNotFoundError
from resourcedir.domain.models.presentation import PresentationState, SelectionResult, ViewMode
from resourcedir.domain.models.resource import EnrichedResource

logger = logging.getLogger(__name__)

ExternalViewingListener = Callable[[EnrichedResource], None]


def matches_query(resource: EnrichedResource, search_query: str) -> bool:
    if search_query == "":
        return True
    needle = search_query.casefold()
    for haystack in (resource.display_title, resource.title, resource.description, resource.author_name):
        if haystack and needle in haystack.casefold():
            return True
    return False


def filter_resources(
    resources: Iterable[EnrichedResource],
    search_query: str,
    watched_only: bool,
    watched_ids: AbstractSet[str],
) -> list[EnrichedResource]:
    return [
        resource
        for resource in resources
        if matches_query(resource, search_query) and (not watched_only or resource.id in watched_ids)
    ]


class PresentationStateMachine:
    """Selection, view mode and filter state for one library surface.

    ``filtered_view()`` is recomputed from scratch on every call.
    """

    def __init__(
        self,
        watch_state: WatchStateStore,
        resources: Sequence[EnrichedResource] = (),
        on_external_viewing: ExternalViewingListener | None = None,
    ) -> None:
        self.watch_state = watch_state
        self.on_external_viewing = on_external_viewing
        self.state = PresentationState()
        self._resources: list[EnrichedResource] = []
        self._by_id: dict[str, EnrichedResource] = {}
        self.replace_resources(resources)

    @property
    def resources(self) -> list[EnrichedResource]:
        return list(self._resources)

    def replace_resources(self, resources: Sequence[EnrichedResource]) -> None:
        self._resources = list(resources)
        self._by_id = {resource.id: resource for resource in self._resources}
        if self.state.selected_id is not None and self.state.selected_id not in self._by_id:
            self.state = replace(self.state, selected_id=None)

    def select_resource(self, resource_id: str) -> SelectionResult:
        resource = self._by_id.get(resource_id)
        if resource is None:
            raise ResourceNotFoundError(f"Resource not found: {resource_id}")
        if self.state.selected_id == resource_id:
            return SelectionResult(changed=False, offer_external_viewing=False)

        self.state = replace(self.state, selected_id=resource_id)
        if not resource.is_collection:
            return SelectionResult(changed=True, offer_external_viewing=False)

        logger.debug("Offering external viewing for collection %s", resource.collection_id)
        if self.on_external_viewing is not None:
            self.on_external_viewing(resource)
        return SelectionResult(changed=True, offer_external_viewing=True)

    def deselect(self) -> None:
        self.state = replace(self.state, selected_id=None)

    def set_view_mode(self, mode: ViewMode | str) -> None:
        view_mode = ViewMode.parse(mode)
        if view_mode is ViewMode.LIST:
            self.state = replace(self.state, view_mode=view_mode, selected_id=None)
        else:
            self.state = replace(self.state, view_mode=view_mode)

    def set_search_query(self, search_query: str) -> None:
        self.state = replace(self.state, search_query=str(search_query or ""))

    def set_watched_only(self, watched_only: bool) -> None:
        self.state = replace(self.state, watched_only=bool(watched_only))

    def selected(self) -> EnrichedResource | None:
        if self.state.selected_id is None:
            return None
        return self._by_id.get(self.state.selected_id)

    def filtered_view(self) -> list[EnrichedResource]:
        return filter_resources(
            self._resources,
            self.state.search_query,
            self.state.watched_only,
            self.watch_state.all(),
        )
