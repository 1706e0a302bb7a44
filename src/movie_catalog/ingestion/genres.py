"""
Genre label resolution.

Maps scraped genre labels to genre ids. The known genres are loaded once per
cycle; labels seen for the first time create a Genre row, which is committed
right away and registered so later items of the same cycle reuse it.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from movie_catalog.db import Genre, find_all_genres, get_db_session
from .errors import PersistenceError


logger = logging.getLogger("ingestion")


def load_known_genres(session: Session) -> dict[str, int]:
    """Return the name -> id map of every genre in the catalog."""
    return {genre.name: genre.id for genre in find_all_genres(session)}


class GenreResolver:
    """
    Resolves labels to ids for the duration of one ingestion cycle.

    Not thread-safe: one cycle owns one resolver.
    """

    def __init__(self, session_factory: sessionmaker, known: dict[str, int]):
        self.session_factory = session_factory
        self.known = dict(known)
        self.created: list[str] = []

    def resolve(self, labels: list[str]) -> list[int]:
        """
        Resolve labels to genre ids.

        Args:
            labels: Genre labels in page order, possibly repeated

        Returns:
            Genre ids in first-occurrence order, without duplicates

        Raises:
            PersistenceError: If a new genre cannot be created
        """
        genre_ids = []
        for label in labels:
            label = label.strip()
            if not label:
                continue
            genre_id = self.known.get(label)
            if genre_id is None:
                genre_id = self._create(label)
                self.known[label] = genre_id
            if genre_id not in genre_ids:
                genre_ids.append(genre_id)
        return genre_ids

    def _create(self, name: str) -> int:
        try:
            with get_db_session(self.session_factory) as session:
                genre = Genre(name=name)
                session.add(genre)
                try:
                    session.commit()
                except IntegrityError:
                    # Created by another writer since the cycle loaded its genres
                    session.rollback()
                    genre = session.query(Genre).filter(Genre.name == name).one()
                    logger.info(f"Genre '{name}' already existed (id={genre.id})")
                    return genre.id
                logger.info(f"Created genre '{name}' (id={genre.id})")
                self.created.append(name)
                return genre.id
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not create genre '{name}': {e}") from e
