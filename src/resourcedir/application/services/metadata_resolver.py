from __future__ import annotations

import logging
from typing import Any

from resourcedir.core.errors import MetadataLookupError
from resourcedir.core.time import normalize_upload_date
from resourcedir.domain.models.metadata import MetadataResult
from resourcedir.domain.models.resource import Thumbnail
from resourcedir.infrastructure.oembed.client import MetadataClient

logger = logging.getLogger(__name__)


def _clean_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


def _clean_dimension(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def normalize_payload(payload: dict[str, Any]) -> MetadataResult:
    """Map provider oEmbed fields onto a MetadataResult.

    Missing or wrongly typed fields are left absent.
    """
    thumbnail_url = _clean_str(payload.get("thumbnail_url"))
    thumbnail = None
    if thumbnail_url:
        thumbnail = Thumbnail(
            url=thumbnail_url,
            width=_clean_dimension(payload.get("thumbnail_width")),
            height=_clean_dimension(payload.get("thumbnail_height")),
        )
    return MetadataResult(
        ok=True,
        title=_clean_str(payload.get("title")),
        thumbnail=thumbnail,
        author_name=_clean_str(payload.get("author_name")),
        author_url=_clean_str(payload.get("author_url")),
        upload_date=normalize_upload_date(payload.get("upload_date")),
        html=_clean_str(payload.get("html")),
    )


class MetadataResolver:
    def __init__(self, client: MetadataClient) -> None:
        self.client = client

    def resolve(self, link: str) -> MetadataResult:
        try:
            payload = self.client.fetch(link)
        except MetadataLookupError as exc:
            logger.warning("Metadata lookup degraded: %s", exc)
            return MetadataResult.degraded(str(exc))
        except Exception as exc:
            logger.warning("Metadata lookup for %s failed unexpectedly: %s", link, exc)
            return MetadataResult.degraded(str(exc))

        if not isinstance(payload, dict):
            logger.warning("Metadata lookup for %s returned %s, expected an object", link, type(payload).__name__)
            return MetadataResult.degraded("non-object payload")
        return normalize_payload(payload)
