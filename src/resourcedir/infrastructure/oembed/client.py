from __future__ import annotations

import http.client
import json
import urllib.parse
import urllib.request
from typing import Any, Protocol
from urllib.error import HTTPError

from resourcedir.core.config import DEFAULT_LOOKUP_TIMEOUT_SECONDS, DEFAULT_OEMBED_ENDPOINT
from resourcedir.core.errors import MetadataLookupError

USER_AGENT = "resourcedir-oembed/1.0"


class MetadataClient(Protocol):
    def fetch(self, link: str) -> dict[str, Any]:  # pragma: no cover - Protocol signature
        ...


class OEmbedClient:
    """Fetches raw provider JSON for a link from an oEmbed endpoint."""

    def __init__(
        self,
        endpoint: str = DEFAULT_OEMBED_ENDPOINT,
        timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds

    def build_lookup_url(self, link: str) -> str:
        query = urllib.parse.urlencode({"url": link, "format": "json"})
        return f"{self.endpoint}?{query}"

    def fetch(self, link: str) -> dict[str, Any]:
        url = self.build_lookup_url(link)
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as exc:
            raise MetadataLookupError(f"oEmbed lookup returned HTTP {exc.code} for {link}") from exc
        except (OSError, http.client.HTTPException, ValueError) as exc:
            raise MetadataLookupError(f"oEmbed lookup failed for {link}: {exc}") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MetadataLookupError(f"oEmbed lookup returned non-JSON content for {link}") from exc
        if not isinstance(payload, dict):
            raise MetadataLookupError(f"oEmbed lookup returned a non-object payload for {link}")
        return payload
