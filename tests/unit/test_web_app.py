from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from resourcedir.core.config import AppPaths, EnrichmentSettings
from resourcedir.core.errors import MetadataLookupError
from resourcedir.web.app import create_app

VIDEO_LINK = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
PLAYLIST_LINK = "https://www.youtube.com/playlist?list=PL123"
BROKEN_LINK = "https://youtu.be/abc12345678"


class _FakeClient:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def fetch(self, link: str) -> dict[str, Any]:
        self.calls.append(link)
        if link == VIDEO_LINK:
            return {
                "title": "Never Gonna Give You Up",
                "author_name": "Rick Astley",
                "thumbnail_url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
                "upload_date": "20091025",
            }
        if link == PLAYLIST_LINK:
            return {"title": "Lecture Series", "author_name": "MIT OCW"}
        raise MetadataLookupError("oEmbed lookup returned HTTP 404")


def _client(tmp_path: Path) -> tuple[TestClient, _FakeClient]:
    project_root = tmp_path / "proj"
    project_root.mkdir(parents=True, exist_ok=True)
    data_dir = project_root / ".resourcedir"
    paths = AppPaths(
        project_root=project_root,
        data_dir=data_dir,
        db_path=data_dir / "resourcedir.db",
        local_state_path=data_dir / "local_state.json",
    )
    fake = _FakeClient()
    settings = EnrichmentSettings(oembed_endpoint="http://oembed.invalid", lookup_timeout_seconds=1.0, max_workers=4)
    return TestClient(create_app(paths, settings=settings, metadata_client=fake)), fake


def _add(client: TestClient, title: str, link: str) -> str:
    r = client.post("/api/resources", json={"title": title, "description": f"{title} description", "link": link})
    assert r.status_code == 200
    payload = r.json()
    assert payload["success"] is True
    assert payload["message"] == "Data added successfully!"
    return payload["resource"]["id"]


def test_web_app_end_to_end_smoke(tmp_path: Path) -> None:
    client, fake = _client(tmp_path)

    r = client.post("/api/init")
    assert r.status_code == 200
    assert r.json()["ok"] is True

    video_id = _add(client, "Stored video", VIDEO_LINK)
    playlist_id = _add(client, "Stored playlist", PLAYLIST_LINK)
    broken_id = _add(client, "Intro", BROKEN_LINK)

    r = client.get("/api/resources")
    assert r.status_code == 200
    listing = r.json()
    assert listing["success"] is True
    assert [item["id"] for item in listing["resources"]] == [video_id, playlist_id, broken_id]

    r = client.get("/api/library")
    assert r.status_code == 200
    library = r.json()
    assert library["count"] == 3
    assert library["state"]["view_mode"] == "list"
    by_id = {item["id"]: item for item in library["resources"]}
    assert by_id[video_id]["display_title"] == "Never Gonna Give You Up"
    assert by_id[video_id]["published_at"] == "2009-10-25"
    assert by_id[video_id]["embed_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert by_id[playlist_id]["kind"] == "Playlist"
    assert by_id[playlist_id]["embed_url"] == "https://www.youtube.com/embed/videoseries?list=PL123"
    assert by_id[broken_id]["display_title"] == "Intro"
    assert by_id[broken_id]["metadata_ok"] is False
    assert by_id[broken_id]["thumbnail"] is None

    # cached until a refresh is requested
    calls_before = len(fake.calls)
    client.get("/api/library")
    assert len(fake.calls) == calls_before

    r = client.post("/api/library/select", json={"resource_id": playlist_id})
    assert r.status_code == 200
    selected = r.json()
    assert selected["changed"] is True
    assert selected["offer_external_viewing"] is True
    assert selected["selected"]["id"] == playlist_id

    r = client.post("/api/library/select", json={"resource_id": playlist_id})
    assert r.json()["changed"] is False

    r = client.post("/api/library/select", json={"resource_id": "missing"})
    assert r.status_code == 404

    r = client.post("/api/library/view", json={"mode": "table"})
    assert r.status_code == 200
    assert r.json()["selected"]["id"] == playlist_id

    r = client.post("/api/library/view", json={"mode": "list"})
    assert r.json()["selected"] is None

    r = client.post("/api/library/view", json={"mode": "grid"})
    assert r.status_code == 400

    r = client.post("/api/library/search", json={"query": "rick"})
    assert [item["id"] for item in r.json()["resources"]] == [video_id]

    r = client.post("/api/library/search", json={"query": ""})
    assert r.json()["count"] == 3

    r = client.post(f"/api/watched/{broken_id}/toggle")
    assert r.json()["watched"] is True

    r = client.post("/api/library/watched-only", json={"enabled": True})
    payload = r.json()
    assert [item["id"] for item in payload["resources"]] == [broken_id]
    assert payload["resources"][0]["watched"] is True

    r = client.get("/api/watched")
    assert r.json()["watched"] == [broken_id]

    r = client.post(f"/api/watched/{broken_id}/toggle")
    assert r.json()["watched"] is False


def test_create_with_missing_fields_reports_failure(tmp_path: Path) -> None:
    client, _fake = _client(tmp_path)

    r = client.post("/api/resources", json={"title": "", "description": "d", "link": VIDEO_LINK})

    assert r.status_code == 200
    assert r.json()["success"] is False
    assert r.json()["message"] == "Please fill in all fields before submitting."
    assert client.get("/api/resources").json()["count"] == 0


def test_new_resource_marks_library_stale(tmp_path: Path) -> None:
    client, _fake = _client(tmp_path)
    _add(client, "Stored video", VIDEO_LINK)
    assert client.get("/api/library").json()["count"] == 1

    _add(client, "Stored playlist", PLAYLIST_LINK)

    assert client.get("/api/library").json()["count"] == 2


def test_sidebar_width_preference(tmp_path: Path) -> None:
    client, _fake = _client(tmp_path)

    assert client.get("/api/preferences/sidebar-width").json()["width"] == 350

    r = client.post(
        "/api/preferences/sidebar-width",
        json={"width": 900, "viewport_width": 1200, "collapsed": False},
    )
    assert r.json()["width"] == 600
    assert client.get("/api/preferences/sidebar-width").json()["width"] == 600

    r = client.post("/api/preferences/sidebar-width", json={"width": 300, "viewport_width": 0})
    assert r.status_code == 400
