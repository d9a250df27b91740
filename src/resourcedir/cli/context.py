from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from resourcedir.application.services.library_service import LibrarySession
from resourcedir.application.services.presentation_service import ExternalViewingListener
from resourcedir.application.services.project_service import ProjectService
from resourcedir.core.config import AppPaths


@dataclass(slots=True)
class CLIContext:
    paths: AppPaths
    console: Console

    def open_session(self, on_external_viewing: ExternalViewingListener | None = None) -> LibrarySession:
        project_service = ProjectService(self.paths)
        project_service.require_initialized()
        project_service.init_project()
        return LibrarySession.open(self.paths, on_external_viewing=on_external_viewing)
