from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

from resourcedir.domain.models.metadata import LinkClassification

COLLECTION_QUERY_KEY = "list"
ITEM_ID_LENGTH = 11

_ITEM_ID_RE = re.compile(
    r"^.*(youtu\.be/|v/|u/\w/|embed/|shorts/|watch\?v=|&v=)([^#&?]*).*",
)


def extract_collection_id(link: object) -> str | None:
    if not isinstance(link, str) or not link.strip():
        return None
    try:
        query = urlsplit(link.strip()).query
        params = parse_qs(query)
    except ValueError:
        return None
    for value in params.get(COLLECTION_QUERY_KEY, []):
        value = value.strip()
        if value:
            return value
    return None


def extract_item_id(link: object) -> str | None:
    if not isinstance(link, str):
        return None
    match = _ITEM_ID_RE.match(link.strip())
    if match is None:
        return None
    candidate = match.group(2)
    return candidate if len(candidate) == ITEM_ID_LENGTH else None


def classify(link: object) -> LinkClassification:
    """Tell a single-item link from a collection link. Never raises."""
    collection_id = extract_collection_id(link)
    return LinkClassification(
        is_collection=collection_id is not None,
        collection_id=collection_id,
        item_id=extract_item_id(link),
    )
