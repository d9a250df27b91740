from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from resourcedir.core.files import write_text_atomic

logger = logging.getLogger(__name__)


class LocalStateStore:
    """File-backed string key/value store scoped to one local user.

    Values are opaque strings (callers JSON-encode them). Every write rewrites
    the whole file atomically.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable local state file %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring local state file %s with non-object payload", self.path)
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        write_text_atomic(self.path, json.dumps(data, ensure_ascii=True, indent=2, sort_keys=True))
