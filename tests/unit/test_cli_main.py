from pathlib import Path

import pytest

from resourcedir.cli.main import build_parser, main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch) -> None:
    monkeypatch.delenv("RESOURCEDIR_HOME", raising=False)


def _run(tmp_path: Path, *args: str) -> int:
    return main(["--project-root", str(tmp_path), *args])


def test_parser_accepts_resources_alias() -> None:
    args = build_parser().parse_args(["resources", "--view", "table", "--offline"])
    assert args.view == "table"
    assert args.offline is True


def test_commands_require_init(tmp_path: Path) -> None:
    assert _run(tmp_path, "list", "--offline") == 1
    assert not (tmp_path / ".resourcedir" / "resourcedir.db").exists()


def test_init_add_list_offline(tmp_path: Path, capsys) -> None:
    assert _run(tmp_path, "init") == 0
    assert (tmp_path / ".resourcedir" / "resourcedir.db").exists()

    assert _run(
        tmp_path,
        "add",
        "--title",
        "Lectures",
        "--description",
        "Course",
        "--link",
        "https://www.youtube.com/playlist?list=PL123",
    ) == 0
    assert "Data added successfully!" in capsys.readouterr().out

    assert _run(tmp_path, "list", "--offline") == 0
    out = capsys.readouterr().out
    assert "Lectures" in out
    assert "Playlist" in out


def test_add_with_blank_field_fails(tmp_path: Path, capsys) -> None:
    _run(tmp_path, "init")

    code = _run(tmp_path, "add", "--title", " ", "--description", "d", "--link", "https://youtu.be/abc12345678")

    assert code == 1
    assert "Please fill in all fields" in capsys.readouterr().out


def test_list_with_no_matches(tmp_path: Path, capsys) -> None:
    _run(tmp_path, "init")
    capsys.readouterr()

    assert _run(tmp_path, "list", "--offline", "--search", "nothing") == 0
    assert "No resources found" in capsys.readouterr().out


def test_watch_toggle_and_list(tmp_path: Path, capsys) -> None:
    _run(tmp_path, "init")

    assert _run(tmp_path, "watch", "toggle", "r1") == 0
    assert "Watched" in capsys.readouterr().out

    assert _run(tmp_path, "watch", "list") == 0
    assert "r1" in capsys.readouterr().out

    assert _run(tmp_path, "watch", "toggle", "r1") == 0
    assert "Unwatched" in capsys.readouterr().out


def test_show_unknown_resource_fails(tmp_path: Path) -> None:
    _run(tmp_path, "init")
    assert _run(tmp_path, "show", "missing", "--offline") == 1


def test_layout_sidebar_roundtrip(tmp_path: Path, capsys) -> None:
    _run(tmp_path, "init")
    capsys.readouterr()

    assert _run(tmp_path, "layout", "set-sidebar", "--width", "100", "--viewport", "1000") == 0
    assert "200px" in capsys.readouterr().out

    assert _run(tmp_path, "layout", "sidebar") == 0
    assert "200px" in capsys.readouterr().out
