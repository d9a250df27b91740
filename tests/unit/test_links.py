import pytest

from resourcedir.core.links import classify, extract_collection_id, extract_item_id
from resourcedir.domain.models.resource import EnrichedResource


def test_playlist_link_is_collection() -> None:
    result = classify("https://www.youtube.com/playlist?list=PL123")
    assert result.is_collection is True
    assert result.collection_id == "PL123"


def test_watch_link_with_list_param_is_collection_and_keeps_item_id() -> None:
    result = classify("https://www.youtube.com/watch?v=dQw4w9WgXcQ&list=PLabc&index=2")
    assert result.is_collection is True
    assert result.collection_id == "PLabc"
    assert result.item_id == "dQw4w9WgXcQ"


def test_short_link_is_single_item() -> None:
    result = classify("https://youtu.be/abc12345678")
    assert result.is_collection is False
    assert result.collection_id is None
    assert result.item_id == "abc12345678"


def test_empty_list_param_is_not_collection() -> None:
    result = classify("https://www.youtube.com/watch?v=dQw4w9WgXcQ&list=")
    assert result.is_collection is False
    assert result.collection_id is None


@pytest.mark.parametrize(
    "link",
    [
        "",
        "   ",
        "not a url at all",
        "http://[::1",
        "https://example.com/?list",
        None,
        42,
    ],
)
def test_malformed_links_never_raise(link) -> None:
    result = classify(link)
    assert result.is_collection is False
    assert result.collection_id is None


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ?start=4", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/shorts/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/v/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=short", None),
        ("https://vimeo.com/123456", None),
    ],
)
def test_extract_item_id(link: str, expected: str | None) -> None:
    assert extract_item_id(link) == expected


def test_collection_id_comes_from_query_not_fragment() -> None:
    assert extract_collection_id("https://example.com/watch#list=PLfrag") is None
    assert extract_collection_id("youtube.com/playlist?list=PLnoscheme") == "PLnoscheme"


def test_encoded_collection_id_is_reencoded_in_embed_url() -> None:
    link = "https://www.youtube.com/playlist?list=PL%26x+y"
    classification = classify(link)
    resource = EnrichedResource(
        id="r1",
        title="t",
        description="d",
        link=link,
        created_at="2024-01-01T00:00:00+00:00",
        is_collection=classification.is_collection,
        display_title="t",
        collection_id=classification.collection_id,
    )

    assert classification.collection_id == "PL&x y"
    assert resource.embed_url == "https://www.youtube.com/embed/videoseries?list=PL%26x%20y"
