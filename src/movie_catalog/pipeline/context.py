"""
Ingestion context: the long-lived handles every cycle works with.

Created once at process start and closed at stop. Components receive the
context (or the handle they need from it) as an argument instead of reaching
for module-level state.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from movie_catalog.config import IngestionConfig
from movie_catalog.db import create_db_engine, create_session_factory, init_database
from movie_catalog.ingestion.client import RemoteSourceClient
from movie_catalog.storage import BaseStorage, LocalStorage


logger = logging.getLogger("pipeline")


@dataclass
class IngestionContext:
    config: IngestionConfig
    engine: Engine
    session_factory: sessionmaker
    client: RemoteSourceClient
    storage: BaseStorage

    def close(self) -> None:
        self.client.close()
        self.engine.dispose()
        logger.info("Ingestion context closed")

    def __enter__(self) -> "IngestionContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_context(config: IngestionConfig, init_db: bool = False) -> IngestionContext:
    """
    Build the ingestion context from configuration.

    Args:
        config: Pipeline configuration
        init_db: Create missing catalog tables (use Alembic for real deployments)

    Raises:
        ValueError: If the database URL is invalid
        RuntimeError: If init_db is set and table creation fails
    """
    engine = create_db_engine(config.database_url, create_dirs=True)
    if init_db and not init_database(engine):
        engine.dispose()
        raise RuntimeError("Could not create catalog tables")

    client = RemoteSourceClient(
        feed_url=config.feed_url,
        detail_base_url=config.detail_base_url,
        headers=config.headers,
        timeout=config.request_timeout,
    )
    logger.info(f"Ingestion context ready (feed: {config.feed_url})")
    return IngestionContext(
        config=config,
        engine=engine,
        session_factory=create_session_factory(engine),
        client=client,
        storage=LocalStorage(config.asset_dir),
    )
