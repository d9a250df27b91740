from __future__ import annotations

import json
import logging

from resourcedir.infrastructure.local.store import LocalStateStore

logger = logging.getLogger(__name__)

WATCHED_KEY = "watchedVideos"


class WatchStateStore:
    """Local set of watched resource ids.

    Loaded once on construction; every toggle writes the full set back.
    """

    def __init__(self, store: LocalStateStore, key: str = WATCHED_KEY) -> None:
        self.store = store
        self.key = key
        # dict keys keep insertion order, like the persisted array
        self._watched: dict[str, None] = dict.fromkeys(self._load())

    def toggle(self, resource_id: str) -> bool:
        updated = dict(self._watched)
        if resource_id in updated:
            del updated[resource_id]
        else:
            updated[resource_id] = None
        # in-memory state only changes once the write has succeeded
        self._persist(updated)
        self._watched = updated
        return resource_id in updated

    def is_watched(self, resource_id: str) -> bool:
        return resource_id in self._watched

    def all(self) -> frozenset[str]:
        return frozenset(self._watched)

    def ordered(self) -> list[str]:
        return list(self._watched)

    def _load(self) -> list[str]:
        raw = self.store.get_item(self.key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored watch state under %r is not valid JSON; starting empty", self.key)
            return []
        if not isinstance(payload, list):
            logger.warning("Stored watch state under %r is not a list; starting empty", self.key)
            return []
        return [str(item) for item in payload if isinstance(item, (str, int))]

    def _persist(self, watched: dict[str, None]) -> None:
        self.store.set_item(self.key, json.dumps(list(watched)))
