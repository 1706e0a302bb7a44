"""
Database package for the movie catalog.

Structure:
- models.py: SQLAlchemy ORM models (Movie, Genre, MovieGenre, TimestampMixin)
- database.py: Engine and session factory creation, session context manager
  and the catalog queries used by the ingestion pipeline

Database Patterns:
- Session-per-operation with get_db_session(session_factory)
- The engine and session factory are owned by the ingestion context, never
  created at import time
"""

from .models import Base, Genre, Movie, MovieGenre, TimestampMixin
from .database import (
    validate_database_url,
    create_db_engine,
    create_session_factory,
    get_db_session,
    init_database,
    check_database_connection,
    find_movie_by_title,
    find_all_genres,
    count_movies,
    count_movies_by_genre,
    get_catalog_stats,
)

__all__ = [
    # Models
    "Base",
    "Genre",
    "Movie",
    "MovieGenre",
    "TimestampMixin",
    # Engine and sessions
    "validate_database_url",
    "create_db_engine",
    "create_session_factory",
    "get_db_session",
    "init_database",
    "check_database_connection",
    # Catalog queries
    "find_movie_by_title",
    "find_all_genres",
    "count_movies",
    "count_movies_by_genre",
    "get_catalog_stats",
]
