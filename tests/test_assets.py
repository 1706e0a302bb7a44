import os

import pytest

from movie_catalog.ingestion import FetchError, StoredAsset, derive_filename, fetch_thumbnail
from conftest import ASSET_BASE_URL, FakeClient


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://img.example.com/posters/alpha.jpg", "alpha.jpg"),
        ("https://img.example.com/p/beta.png?w=300#top", "beta.png"),
        ("https://img.example.com/p/the%20movie.webp", "the_movie.webp"),
    ],
)
def test_derive_filename(url, expected):
    assert derive_filename(url) == expected


def test_derive_filename_without_segment():
    with pytest.raises(FetchError):
        derive_filename("https://img.example.com/")


def test_derive_filename_malformed_url():
    with pytest.raises(FetchError) as exc_info:
        derive_filename("http://[bad/x.jpg")
    assert exc_info.value.url == "http://[bad/x.jpg"


def test_thumbnail_written_before_url_returned(storage):
    url = "https://img.example.com/posters/alpha.jpg"
    client = FakeClient(images={url: b"\x89PNG fake image bytes"})

    asset = fetch_thumbnail(client, storage, url, ASSET_BASE_URL)

    assert asset == StoredAsset("alpha.jpg", f"{ASSET_BASE_URL}/alpha.jpg")
    with open(storage.path_for("alpha.jpg"), "rb") as f:
        assert f.read() == b"\x89PNG fake image bytes"
    assert os.listdir(storage.base_dir) == ["alpha.jpg"]


def test_absent_thumbnail_writes_nothing(storage):
    client = FakeClient()

    assert fetch_thumbnail(client, storage, None, ASSET_BASE_URL) is None
    assert client.streamed == []
    assert not os.path.exists(storage.base_dir)


def test_failed_download_leaves_no_file(storage):
    url = "https://img.example.com/posters/missing.jpg"

    with pytest.raises(FetchError):
        fetch_thumbnail(FakeClient(), storage, url, ASSET_BASE_URL)

    assert not storage.file_exists("missing.jpg")
    assert os.listdir(storage.base_dir) == []


def test_same_name_gets_numbered_suffix(storage):
    first = "https://img.example.com/a/poster.jpg"
    second = "https://img.example.com/b/poster.jpg"
    client = FakeClient(images={first: b"first", second: b"second"})

    assert fetch_thumbnail(client, storage, first, ASSET_BASE_URL).filename == "poster.jpg"
    asset = fetch_thumbnail(client, storage, second, ASSET_BASE_URL)

    assert asset == StoredAsset("poster-1.jpg", f"{ASSET_BASE_URL}/poster-1.jpg")
    with open(storage.path_for("poster.jpg"), "rb") as f:
        assert f.read() == b"first"
    with open(storage.path_for("poster-1.jpg"), "rb") as f:
        assert f.read() == b"second"


def test_failed_download_keeps_existing_file_of_same_name(storage):
    url = "https://img.example.com/b/poster.jpg"
    with storage.open_write("poster.jpg") as sink:
        sink.write(b"committed")

    with pytest.raises(FetchError):
        fetch_thumbnail(FakeClient(), storage, url, ASSET_BASE_URL)

    with open(storage.path_for("poster.jpg"), "rb") as f:
        assert f.read() == b"committed"


def test_public_url_base_trailing_slash(storage):
    url = "https://img.example.com/a.jpg"
    client = FakeClient(images={url: b"data"})
    asset = fetch_thumbnail(client, storage, url, "https://cdn/images/")
    assert asset.url == "https://cdn/images/a.jpg"
