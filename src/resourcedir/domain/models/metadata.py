from __future__ import annotations

from dataclasses import dataclass

from resourcedir.domain.models.resource import Thumbnail


@dataclass(frozen=True, slots=True)
class LinkClassification:
    is_collection: bool
    collection_id: str | None = None
    item_id: str | None = None


@dataclass(frozen=True, slots=True)
class MetadataResult:
    ok: bool
    title: str | None = None
    thumbnail: Thumbnail | None = None
    author_name: str | None = None
    author_url: str | None = None
    upload_date: str | None = None
    html: str | None = None
    error: str | None = None

    @classmethod
    def degraded(cls, error: str | None = None) -> MetadataResult:
        return cls(ok=False, error=error)
