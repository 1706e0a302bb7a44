import os
import tempfile
from typing import Optional

import pytest

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="movie_catalog_logs_"))

from movie_catalog.config import IngestionConfig
from movie_catalog.db import create_db_engine, create_session_factory, init_database
from movie_catalog.ingestion import FetchError
from movie_catalog.pipeline import IngestionContext
from movie_catalog.storage import LocalStorage


FEED_URL = "https://movies.example.com/feed/"
ASSET_BASE_URL = "https://cdn.example.com/images"


def make_feed(items) -> bytes:
    """items: iterable of (title, link) pairs."""
    entries = "".join(
        f"<item><title>{title}</title><link>{link}</link></item>" for title, link in items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Movies</title>'
        f"{entries}</channel></rss>"
    ).encode("utf-8")


def make_detail_page(
    title: str = "Alpha",
    genres=("Action", "Drama"),
    year: Optional[str] = "2021",
    rating: Optional[str] = "7.4",
    thumbnail: Optional[str] = "https://img.example.com/posters/alpha.jpg",
    duration: Optional[str] = "1h 52min",
    synopsis: Optional[str] = "A movie about the first letter.",
) -> bytes:
    parts = [
        "<html><head>",
        f'<meta property="og:image" content="{thumbnail}"/>' if thumbnail else "",
        "</head><body>",
        '<div class="player"><iframe src="https://player.example.com/e/1"></iframe></div>',
        f'<div class="movie-info"><h1>{title}</h1>',
        "<ul class=\"genres\">" + "".join(f"<li>{g}</li>" for g in genres) + "</ul>",
        f'<span class="duration">{duration}</span>' if duration else "",
        f'<span class="year">{year}</span>' if year else "",
        f'<a class="imdb-rating" href="#">{rating}</a>' if rating else "",
        "</div>",
        '<div class="trailer"><iframe src="https://www.youtube.com/embed/xyz"></iframe></div>',
        f'<div class="synopsis"><p>{synopsis}</p></div>' if synopsis else "",
        "</body></html>",
    ]
    return "".join(parts).encode("utf-8")


class FakeClient:
    """Stands in for RemoteSourceClient; values may be bytes or an exception."""

    def __init__(self, feed=b"", pages=None, images=None):
        self.feed = feed
        self.pages = pages or {}
        self.images = images or {}
        self.fetched_pages = []
        self.streamed = []
        self.closed = False

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def resolve_url(self, url: str) -> str:
        return url

    def fetch_feed(self) -> bytes:
        return self._answer(self.feed)

    def fetch_page(self, url: str) -> bytes:
        self.fetched_pages.append(url)
        if url not in self.pages:
            raise FetchError(url, "404 Client Error: Not Found")
        return self._answer(self.pages[url])

    def stream(self, url: str):
        self.streamed.append(url)
        if url not in self.images:
            raise FetchError(url, "404 Client Error: Not Found")
        data = self._answer(self.images[url])
        for i in range(0, len(data), 4):
            yield data[i : i + 4]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    assert init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "assets"))


@pytest.fixture
def make_context(tmp_path, engine, session_factory, storage):
    def factory(client) -> IngestionContext:
        config = IngestionConfig(
            feed_url=FEED_URL,
            database_url=f"sqlite:///{tmp_path / 'catalog.db'}",
            asset_dir=storage.base_dir,
            asset_base_url=ASSET_BASE_URL,
        )
        return IngestionContext(
            config=config,
            engine=engine,
            session_factory=session_factory,
            client=client,
            storage=storage,
        )

    return factory
