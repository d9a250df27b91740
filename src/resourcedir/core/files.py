from __future__ import annotations

import os
from pathlib import Path


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_text_atomic(dst: Path, text: str) -> None:
    ensure_directory(dst.parent)
    temp_path = dst.parent / f".{dst.name}.tmp"
    temp_path.write_text(text, encoding="utf-8")
    os.replace(temp_path, dst)
