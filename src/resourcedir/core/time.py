from __future__ import annotations

from datetime import datetime, timezone


def now_utc_iso() -> str:
    """Return an RFC 3339/ISO timestamp in UTC with seconds precision."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def normalize_upload_date(value: object) -> str | None:
    """Normalize provider upload dates to ISO form.

    Providers send either ISO strings or compact ``YYYYMMDD`` dates. Anything
    unparseable is passed through stripped so nothing is lost.
    """
    raw = str(value or "").strip()
    if not raw:
        return None
    if len(raw) == 8 and raw.isdigit():
        try:
            return datetime.strptime(raw, "%Y%m%d").date().isoformat()
        except ValueError:
            return raw
    return raw
