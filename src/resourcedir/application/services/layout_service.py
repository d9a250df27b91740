from __future__ import annotations

import json
import logging

from resourcedir.core.errors import ValidationError
from resourcedir.infrastructure.local.store import LocalStateStore

logger = logging.getLogger(__name__)

SIDEBAR_WIDTH_KEY = "sidebarWidth"
DEFAULT_SIDEBAR_WIDTH = 350
MIN_SIDEBAR_WIDTH_OPEN = 200
MIN_SIDEBAR_WIDTH_COLLAPSED = 60
MAX_SIDEBAR_VIEWPORT_FRACTION = 0.5


def clamp_sidebar_width(requested: float, viewport_width: float, collapsed: bool = False) -> int:
    if viewport_width <= 0:
        raise ValidationError(f"Viewport width must be positive, got {viewport_width}")
    min_width = MIN_SIDEBAR_WIDTH_COLLAPSED if collapsed else MIN_SIDEBAR_WIDTH_OPEN
    max_width = viewport_width * MAX_SIDEBAR_VIEWPORT_FRACTION
    return int(max(min_width, min(requested, max_width)))


class LayoutPreferences:
    def __init__(self, store: LocalStateStore) -> None:
        self.store = store

    def sidebar_width(self) -> int:
        raw = self.store.get_item(SIDEBAR_WIDTH_KEY)
        if raw is None:
            return DEFAULT_SIDEBAR_WIDTH
        try:
            value = int(float(json.loads(raw)))
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.warning("Stored sidebar width %r is unreadable; using default", raw)
            return DEFAULT_SIDEBAR_WIDTH
        return value if value > 0 else DEFAULT_SIDEBAR_WIDTH

    def set_sidebar_width(self, requested: float, viewport_width: float, collapsed: bool = False) -> int:
        width = clamp_sidebar_width(requested, viewport_width, collapsed=collapsed)
        self.store.set_item(SIDEBAR_WIDTH_KEY, json.dumps(width))
        return width
