from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from resourcedir.core.errors import ValidationError


class ViewMode(str, Enum):
    LIST = "list"
    TABLE = "table"

    @classmethod
    def parse(cls, value: ViewMode | str) -> ViewMode:
        if isinstance(value, ViewMode):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == "resources":
            return cls.LIST
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValidationError(f"Unknown view mode: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class PresentationState:
    selected_id: str | None = None
    view_mode: ViewMode = ViewMode.LIST
    search_query: str = ""
    watched_only: bool = False


@dataclass(frozen=True, slots=True)
class SelectionResult:
    changed: bool
    offer_external_viewing: bool
