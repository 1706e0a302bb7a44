"""
SQLite database engine, session management and catalog queries.

This module provides SQLite-specific database connectivity with:
- Session-per-operation pattern through get_db_session()
- NullPool connection pooling to avoid SQLite locking issues
- SQLite optimization settings (WAL mode, foreign keys, timeouts)
- The read operations the ingestion pipeline consumes (find by title,
  all genres, counts)

No engine is created at import time: the ingestion context owns the engine
and session factory for the lifetime of the process.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional
from urllib.parse import urlparse

from sqlalchemy import create_engine, event, func, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError, OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from movie_catalog.logger import log_function
from .models import Base, Genre, Movie, MovieGenre


db_logger = logging.getLogger("database")

IN_MEMORY_PATHS = ("", ":memory:")


def validate_database_url(url: Optional[str]) -> tuple[bool, str]:
    """Validate the database URL format and path."""
    if not url:
        return False, "DATABASE_URL is not set"
    try:
        parsed = urlparse(url)
        if parsed.scheme != "sqlite":
            return False, f"Only SQLite databases are supported, got: {parsed.scheme}"

        # sqlite:///relative.db -> "/relative.db", sqlite:////abs.db -> "//abs.db"
        db_path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
        if db_path in IN_MEMORY_PATHS:
            return True, ":memory:"

        parent_dir = Path(db_path).parent
        if not parent_dir.exists():
            return False, f"Database directory does not exist: {parent_dir}"

        return True, db_path

    except ValueError as e:
        return False, f"Invalid database URL format: {e}"


def optimize_sqlite_connection(dbapi_connection, connection_record):
    """Apply SQLite-specific optimizations when connection is created."""
    cursor = dbapi_connection.cursor()

    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA temp_store=MEMORY")

    cursor.close()


def create_db_engine(database_url: str, create_dirs: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the catalog.

    Args:
        database_url: SQLite URL (sqlite:///path/to/catalog.db or sqlite://)
        create_dirs: Create the database's parent directory if missing

    Raises:
        ValueError: If the URL is not a usable SQLite URL
    """
    if create_dirs:
        parsed = urlparse(database_url)
        db_path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
        if db_path not in IN_MEMORY_PATHS:
            os.makedirs(Path(db_path).parent, exist_ok=True)

    is_valid, db_info = validate_database_url(database_url)
    if not is_valid:
        db_logger.error(f"Database configuration error: {db_info}")
        raise ValueError(f"Database configuration error: {db_info}")

    if db_info == ":memory:":
        # A single shared connection, otherwise every session sees an empty database
        engine = create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            database_url,
            poolclass=NullPool,
            echo=False,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        event.listen(engine, "connect", optimize_sqlite_connection)

    db_logger.info(f"Database engine created: {db_info}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to the catalog engine."""
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


@contextmanager
def get_db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database sessions (session-per-operation pattern).

    Rolls back on any error and always closes the session. Committing is the
    caller's job.

    Usage:
        with get_db_session(context.session_factory) as session:
            session.add(Genre(name="Drama"))
            session.commit()
    """
    session = session_factory()
    try:
        db_logger.debug("Database session created")
        yield session

    except OperationalError as e:
        db_logger.error(f"Database operational error: {e}")
        session.rollback()

        error_msg = str(e.orig) if hasattr(e, "orig") else str(e)
        if "database is locked" in error_msg.lower():
            raise OperationalError(
                "Database is locked. This may be due to another process accessing the database.",
                None,
                e.orig,
            ) from e
        elif "no such table" in error_msg.lower():
            raise OperationalError(
                "Database table does not exist. Please run database migrations first.",
                None,
                e.orig,
            ) from e
        else:
            raise

    except SQLAlchemyError as e:
        db_logger.error(f"Database error: {e}")
        session.rollback()
        raise

    except Exception:
        session.rollback()
        raise

    finally:
        session.close()
        db_logger.debug("Database session closed")


@log_function(logger_name="database", log_execution_time=True)
def init_database(engine: Engine) -> bool:
    """
    Create all tables defined in the models.

    Note: This does not run Alembic migrations. Use alembic commands for migrations.

    Returns:
        bool: True if initialization successful, False otherwise
    """
    try:
        Base.metadata.create_all(bind=engine)
        db_logger.info("Database tables created successfully")
        return True
    except SQLAlchemyError as e:
        db_logger.error(f"Failed to initialize database: {e}")
        return False


def check_database_connection(session_factory: sessionmaker) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        with get_db_session(session_factory) as session:
            session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        db_logger.error(f"Database connection test failed: {e}")
        return False


def find_movie_by_title(session: Session, title: str) -> Optional[Movie]:
    """Return the movie with exactly this title (case-sensitive), if any."""
    return session.query(Movie).filter(Movie.title == title).first()


def find_all_genres(session: Session) -> list[Genre]:
    return session.query(Genre).order_by(Genre.id).all()


def count_movies(session: Session) -> int:
    return session.query(func.count(Movie.id)).scalar() or 0


def count_movies_by_genre(session: Session, genre_id: int) -> int:
    """Number of movies associated with the given genre."""
    return (
        session.query(func.count(MovieGenre.movie_id))
        .filter(MovieGenre.genre_id == genre_id)
        .scalar()
        or 0
    )


@log_function(logger_name="database", log_execution_time=False)
def get_catalog_stats(session_factory: sessionmaker) -> dict:
    """
    Summarize the catalog contents.

    Returns:
        dict with keys:
        - movies (int): number of movies
        - genres (dict[str, int]): genre name -> number of movies, by genre id
    """
    with get_db_session(session_factory) as session:
        return {
            "movies": count_movies(session),
            "genres": {
                genre.name: count_movies_by_genre(session, genre.id)
                for genre in find_all_genres(session)
            },
        }
