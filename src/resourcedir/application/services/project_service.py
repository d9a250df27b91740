from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from resourcedir.core.config import AppPaths
from resourcedir.core.errors import ProjectNotInitializedError
from resourcedir.core.files import ensure_directory
from resourcedir.infrastructure.db.sqlite import initialize_schema


@dataclass(slots=True)
class InitResult:
    paths_created: list[Path]
    db_path: Path


class ProjectService:
    def __init__(self, paths: AppPaths) -> None:
        self.paths = paths

    def init_project(self) -> InitResult:
        paths_created: list[Path] = []

        if not self.paths.data_dir.exists():
            paths_created.append(self.paths.data_dir)
        ensure_directory(self.paths.data_dir)

        initialize_schema(self.paths.db_path)

        return InitResult(paths_created=paths_created, db_path=self.paths.db_path)

    def is_initialized(self) -> bool:
        return self.paths.db_path.exists()

    def require_initialized(self) -> None:
        if not self.is_initialized():
            raise ProjectNotInitializedError(
                f"Project is not initialized. Run 'resdir init' first in {self.paths.project_root}"
            )
