"""
Ingestion package for the movie catalog.

Each module is one step of an ingestion cycle:

1. client.py: feed, detail page and thumbnail downloads (browser headers, timeout)
2. feed.py: RSS payload -> candidate entries
3. dedup.py: drops candidates already in the catalog
4. scraper.py: detail page -> ScrapedItem
5. genres.py: genre labels -> genre ids, creating unseen genres
6. assets.py: thumbnail download into asset storage
7. writer.py: movie + genre associations in one transaction

The cycle itself and the scheduler live in movie_catalog.pipeline.
"""

from .assets import StoredAsset, derive_filename, fetch_thumbnail
from .client import RemoteSourceClient
from .dedup import filter_new_candidates
from .errors import (
    IngestionError,
    FetchError,
    ParseError,
    CoercionError,
    PersistenceError,
    PartialCommitError,
)
from .feed import parse_feed
from .genres import GenreResolver, load_known_genres
from .items import CandidateEntry, ScrapedItem
from .scraper import fetch_detail, scrape_detail
from .writer import parse_rating, parse_release_year, write_movie

__all__ = [
    "RemoteSourceClient",
    "parse_feed",
    "filter_new_candidates",
    "fetch_detail",
    "scrape_detail",
    "GenreResolver",
    "load_known_genres",
    "derive_filename",
    "fetch_thumbnail",
    "StoredAsset",
    "write_movie",
    "parse_rating",
    "parse_release_year",
    "CandidateEntry",
    "ScrapedItem",
    "IngestionError",
    "FetchError",
    "ParseError",
    "CoercionError",
    "PersistenceError",
    "PartialCommitError",
]
