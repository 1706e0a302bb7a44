#!/usr/bin/env python3
"""
Main entry point for the ingestion pipeline.

Runs one ingestion cycle at start and then one per interval (default: one
hour) until interrupted:
    python -m movie_catalog.pipeline

Or a single cycle:
    python -m movie_catalog.pipeline --once
"""

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from movie_catalog.config import IngestionConfig
from movie_catalog.db import get_catalog_stats
from movie_catalog.logger import setup_logging
from .context import create_context
from .orchestrator import run_ingestion_cycle
from .scheduler import IngestionScheduler


def print_catalog_stats(stats: dict) -> None:
    print(f"\nCatalog: {stats['movies']} movies")
    for name, count in stats["genres"].items():
        print(f"  {name}: {count}")


def main():
    """
    Entry point for the ingestion CLI.

    Exits the process with code 0 on success, 1 on error, or 130 when
    interrupted by the user.
    """
    parser = argparse.ArgumentParser(
        description="Ingest new movies from the RSS feed into the catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m movie_catalog.pipeline                    # Run now, then every hour
  python -m movie_catalog.pipeline --once             # Single cycle
  python -m movie_catalog.pipeline --once --dry-run   # Show new feed entries only
  python -m movie_catalog.pipeline --once --init-db --stats
        """,
    )
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List new feed entries without scraping or saving (implies --once)",
    )
    parser.add_argument(
        "--feed-url", type=str, default=None, help="RSS feed URL (overrides FEED_URL)"
    )
    parser.add_argument(
        "--interval", type=int, default=None, help="Seconds between cycles (default: 3600)"
    )
    parser.add_argument(
        "--init-db", action="store_true", help="Create missing catalog tables first"
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print catalog counts after the cycle"
    )
    parser.add_argument("--verbose", action="store_true", help="Detailed console output")

    args = parser.parse_args()

    try:
        config = IngestionConfig.from_env(feed_url=args.feed_url)
    except (EnvironmentError, ValueError) as e:
        print(f"✗ Configuration error: {e}")
        sys.exit(1)
    if args.interval is not None:
        config.interval_seconds = args.interval

    log_file = f"{config.log_dir}/ingestion.log"
    logger = setup_logging("pipeline", log_file=log_file, verbose=args.verbose)
    setup_logging("ingestion", log_file=log_file, verbose=args.verbose)
    setup_logging("database", log_file=log_file, verbose=args.verbose)
    logger.info("Starting movie ingestion")

    try:
        with create_context(config, init_db=args.init_db) as context:
            if args.once or args.dry_run:
                stats = run_ingestion_cycle(context, dry_run=args.dry_run)
                print(
                    f"\nCompleted: {stats['feed_items']} in feed, {stats['new']} new, "
                    f"{stats['added']} added, {stats['errors']} errors, "
                    f"{stats['partial']} partial"
                )
                if args.stats:
                    print_catalog_stats(get_catalog_stats(context.session_factory))
                logger.info(f"Operation completed: {stats}")
                failed = stats["errors"] + stats["partial"]
                sys.exit(0 if failed == 0 else 1)

            scheduler = IngestionScheduler(
                lambda: run_ingestion_cycle(context), config.interval_seconds
            )
            scheduler.run_forever()
    except KeyboardInterrupt:
        print("\nIngestion interrupted by user")
        logger.info("Ingestion interrupted by user")
        sys.exit(130)
    except (RuntimeError, ValueError, SQLAlchemyError) as e:
        print(f"✗ Ingestion failed: {e}")
        logger.error(f"Ingestion failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
