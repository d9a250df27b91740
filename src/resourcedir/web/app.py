from __future__ import annotations

import threading
from dataclasses import asdict, is_dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from resourcedir.application.services.library_service import LibrarySession
from resourcedir.application.services.project_service import ProjectService
from resourcedir.core.config import AppPaths, EnrichmentSettings
from resourcedir.core.errors import ResourceNotFoundError, ValidationError
from resourcedir.domain.models.resource import EnrichedResource
from resourcedir.infrastructure.oembed.client import MetadataClient


class CreateResourceRequest(BaseModel):
    title: str = ""
    description: str = ""
    link: str = ""


class SelectRequest(BaseModel):
    resource_id: str


class ViewModeRequest(BaseModel):
    mode: str


class SearchRequest(BaseModel):
    query: str = ""


class WatchedOnlyRequest(BaseModel):
    enabled: bool


class SidebarWidthRequest(BaseModel):
    width: float
    viewport_width: float
    collapsed: bool = False


def _jsonable(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


def _resource_payload(resource: EnrichedResource, watched: frozenset[str]) -> dict[str, Any]:
    payload = asdict(resource)
    payload["embed_url"] = resource.embed_url
    payload["kind"] = resource.kind_label
    payload["watched"] = resource.id in watched
    return payload


def create_app(
    paths: AppPaths,
    settings: EnrichmentSettings | None = None,
    metadata_client: MetadataClient | None = None,
) -> FastAPI:
    app = FastAPI(title="Resource Directory", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    project_service = ProjectService(paths)
    project_service.init_project()
    session = LibrarySession.open(paths, settings=settings, client=metadata_client)
    session_lock = threading.Lock()
    library_loaded = False

    def ensure_library_loaded(force: bool = False) -> None:
        nonlocal library_loaded
        if library_loaded and not force:
            return
        result = session.refresh()
        if not result.success:
            raise HTTPException(status_code=500, detail=result.message)
        library_loaded = True

    def library_payload() -> dict[str, Any]:
        watched = session.watch_state.all()
        presentation = session.presentation
        selected = presentation.selected()
        visible = presentation.filtered_view()
        return {
            "ok": True,
            "state": _jsonable(presentation.state),
            "count": len(visible),
            "total": len(presentation.resources),
            "resources": [_resource_payload(r, watched) for r in visible],
            "selected": _resource_payload(selected, watched) if selected is not None else None,
        }

    @app.post("/api/init")
    def api_init() -> dict[str, Any]:
        result = project_service.init_project()
        return {
            "ok": True,
            "db_path": str(result.db_path),
            "paths_created": [str(p) for p in result.paths_created],
        }

    @app.post("/api/resources")
    def api_create_resource(req: CreateResourceRequest) -> dict[str, Any]:
        nonlocal library_loaded
        result = session.submit(req.title, req.description, req.link)
        if result.success:
            with session_lock:
                library_loaded = False
        return {
            "success": result.success,
            "message": result.message,
            "resource": _jsonable(result.resource) if result.resource is not None else None,
        }

    @app.get("/api/resources")
    def api_list_resources() -> dict[str, Any]:
        result = session.resource_service.list_all()
        return {
            "success": result.success,
            "message": result.message,
            "count": len(result.records),
            "resources": _jsonable(result.records),
        }

    @app.get("/api/library")
    def api_library(refresh: bool = Query(default=False)) -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded(force=refresh)
            return library_payload()

    @app.post("/api/library/refresh")
    def api_library_refresh() -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded(force=True)
            return library_payload()

    @app.post("/api/library/select")
    def api_library_select(req: SelectRequest) -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded()
            try:
                selection = session.presentation.select_resource(req.resource_id)
            except ResourceNotFoundError as exc:
                raise HTTPException(status_code=404, detail=str(exc)) from exc
            payload = library_payload()
        payload["changed"] = selection.changed
        payload["offer_external_viewing"] = selection.offer_external_viewing
        return payload

    @app.post("/api/library/deselect")
    def api_library_deselect() -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded()
            session.presentation.deselect()
            return library_payload()

    @app.post("/api/library/view")
    def api_library_view(req: ViewModeRequest) -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded()
            try:
                session.presentation.set_view_mode(req.mode)
            except ValidationError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            return library_payload()

    @app.post("/api/library/search")
    def api_library_search(req: SearchRequest) -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded()
            session.presentation.set_search_query(req.query)
            return library_payload()

    @app.post("/api/library/watched-only")
    def api_library_watched_only(req: WatchedOnlyRequest) -> dict[str, Any]:
        with session_lock:
            ensure_library_loaded()
            session.presentation.set_watched_only(req.enabled)
            return library_payload()

    @app.get("/api/watched")
    def api_watched() -> dict[str, Any]:
        with session_lock:
            ids = session.watch_state.ordered()
        return {"ok": True, "count": len(ids), "watched": ids}

    @app.post("/api/watched/{resource_id}/toggle")
    def api_toggle_watched(resource_id: str) -> dict[str, Any]:
        with session_lock:
            watched = session.watch_state.toggle(resource_id)
        return {"ok": True, "resource_id": resource_id, "watched": watched}

    @app.get("/api/preferences/sidebar-width")
    def api_sidebar_width() -> dict[str, Any]:
        return {"ok": True, "width": session.layout.sidebar_width()}

    @app.post("/api/preferences/sidebar-width")
    def api_set_sidebar_width(req: SidebarWidthRequest) -> dict[str, Any]:
        try:
            width = session.layout.set_sidebar_width(
                req.width,
                req.viewport_width,
                collapsed=req.collapsed,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"ok": True, "width": width}

    return app
