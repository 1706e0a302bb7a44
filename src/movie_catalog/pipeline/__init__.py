"""
Movie ingestion pipeline.

This module orchestrates the ingestion workflow:
    1. Feed fetch and parse (movie_catalog.ingestion.feed)
    2. De-duplication against the catalog (movie_catalog.ingestion.dedup)
    3. Detail scraping (movie_catalog.ingestion.scraper)
    4. Genre resolution and thumbnail download
    5. Catalog write (movie_catalog.ingestion.writer)

Usage:
    # CLI interface
    python -m movie_catalog.pipeline
    python -m movie_catalog.pipeline --once

    # Programmatic interface
    from movie_catalog.config import IngestionConfig
    from movie_catalog.pipeline import create_context, run_ingestion_cycle

    with create_context(IngestionConfig.from_env()) as context:
        stats = run_ingestion_cycle(context)
"""

from .context import IngestionContext, create_context
from .orchestrator import run_ingestion_cycle, process_candidate
from .scheduler import IngestionScheduler

__all__ = [
    "IngestionContext",
    "create_context",
    "run_ingestion_cycle",
    "process_candidate",
    "IngestionScheduler",
]
