from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

UNTITLED = "Untitled"
EMBED_BASE_URL = "https://www.youtube.com/embed"


@dataclass(frozen=True, slots=True)
class StoredResource:
    id: str
    title: str
    description: str
    link: str
    created_at: str


@dataclass(frozen=True, slots=True)
class Thumbnail:
    url: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True, slots=True)
class EnrichedResource:
    """A stored resource plus everything resolved for display.

    Produced once per enrichment pass and treated as read-only afterwards.
    """

    id: str
    title: str
    description: str
    link: str
    created_at: str
    is_collection: bool
    display_title: str
    collection_id: str | None = None
    item_id: str | None = None
    thumbnail: Thumbnail | None = None
    author_name: str | None = None
    author_url: str | None = None
    published_at: str | None = None
    embed_html: str | None = None
    metadata_ok: bool = False

    @property
    def embed_url(self) -> str:
        if self.is_collection and self.collection_id:
            return f"{EMBED_BASE_URL}/videoseries?list={quote(self.collection_id, safe='')}"
        if self.item_id:
            return f"{EMBED_BASE_URL}/{self.item_id}"
        return self.link

    @property
    def kind_label(self) -> str:
        return "Playlist" if self.is_collection else "Video"
