"""
Catalog writer.

Persists one scraped item and its genre associations in a single
transaction. Numeric fields are converted first so that an item with an
unusable year or rating never reaches the database.
"""

import logging
import re
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from movie_catalog.db import Movie, MovieGenre
from movie_catalog.logger import log_function
from .errors import CoercionError, PartialCommitError, PersistenceError
from .items import ScrapedItem


logger = logging.getLogger("ingestion")

YEAR_PATTERN = re.compile(r"\b(\d{4})\b")
RATING_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")


def parse_release_year(text: Optional[str]) -> int:
    """Return the first four-digit group in text, e.g. "(2019)" -> 2019."""
    match = YEAR_PATTERN.search(text or "")
    if not match:
        raise CoercionError("release_year", text)
    return int(match.group(1))


def parse_rating(text: Optional[str]) -> float:
    """Return the first decimal number in text, e.g. "IMDb 7,4" -> 7.4."""
    match = RATING_PATTERN.search(text or "")
    if not match:
        raise CoercionError("rating_imdb", text)
    return float(match.group(0).replace(",", "."))


@log_function(logger_name="ingestion", log_execution_time=True)
def write_movie(
    session_factory: sessionmaker,
    title: str,
    item: ScrapedItem,
    genre_ids: list[int],
    photo_src: Optional[str],
) -> int:
    """
    Create one Movie row and its MovieGenre rows.

    Args:
        session_factory: Catalog session factory
        title: De-duplication title from the feed, stored as Movie.title
        item: Scraped detail fields
        genre_ids: Resolved genre ids, without duplicates
        photo_src: Public thumbnail URL, None when the item has no thumbnail

    Returns:
        The new movie id

    Raises:
        CoercionError: release year or rating is absent or not numeric
        PersistenceError: the movie row could not be inserted
        PartialCommitError: the associations failed after the movie insert
    """
    release_year = parse_release_year(item.release_year)
    rating = parse_rating(item.rating_label)

    session = session_factory()
    try:
        movie = Movie(
            title=title,
            description=item.synopsis,
            duration=item.duration,
            release_year=release_year,
            rating_imdb=rating,
            video_src=item.primary_media_url,
            trailer_src=item.trailer_url,
            photo_src=photo_src,
        )
        try:
            session.add(movie)
            session.flush()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Could not insert movie '{title}': {e}") from e

        movie_id = movie.id
        try:
            session.add_all(
                MovieGenre(movie_id=movie_id, genre_id=genre_id)
                for genre_id in genre_ids
            )
            session.commit()
        except SQLAlchemyError as e:
            rolled_back = True
            try:
                session.rollback()
            except SQLAlchemyError:
                rolled_back = False
            raise PartialCommitError(title, e, rolled_back) from e

        logger.info(
            f"Added movie ID {movie_id}: {title} ({len(genre_ids)} genres)"
        )
        return movie_id
    finally:
        session.close()
