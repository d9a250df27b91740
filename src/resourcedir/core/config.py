from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    project_root: Path
    data_dir: Path
    db_path: Path
    local_state_path: Path


@dataclass(frozen=True)
class EnrichmentSettings:
    oembed_endpoint: str
    lookup_timeout_seconds: float
    max_workers: int


DEFAULT_DATA_DIRNAME = ".resourcedir"
DEFAULT_OEMBED_ENDPOINT = "https://www.youtube.com/oembed"
DEFAULT_LOOKUP_TIMEOUT_SECONDS = 5.0
DEFAULT_LOOKUP_WORKERS = 8


def load_paths(project_root: Path | None = None) -> AppPaths:
    root = (project_root or Path.cwd()).expanduser().resolve()

    home_raw = os.getenv("RESOURCEDIR_HOME")
    if home_raw:
        data_dir = Path(home_raw).expanduser().resolve()
    else:
        data_dir = root / DEFAULT_DATA_DIRNAME

    return AppPaths(
        project_root=root,
        data_dir=data_dir,
        db_path=data_dir / "resourcedir.db",
        local_state_path=data_dir / "local_state.json",
    )


def load_enrichment_settings() -> EnrichmentSettings:
    endpoint = (os.getenv("RESOURCEDIR_OEMBED_URL") or "").strip().rstrip("/")
    return EnrichmentSettings(
        oembed_endpoint=endpoint or DEFAULT_OEMBED_ENDPOINT,
        lookup_timeout_seconds=read_float_env(
            "RESOURCEDIR_LOOKUP_TIMEOUT_SECONDS", DEFAULT_LOOKUP_TIMEOUT_SECONDS
        ),
        max_workers=read_int_env("RESOURCEDIR_LOOKUP_WORKERS", DEFAULT_LOOKUP_WORKERS),
    )


def read_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
