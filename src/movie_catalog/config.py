"""
Configuration settings for the movie catalog ingestion pipeline.

Values come from the environment (optionally through a .env file). The
ingestion interval, feed location and asset locations are fixed for the
lifetime of the process.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


DEFAULT_INTERVAL_SECONDS = 60 * 60

# The upstream source blocks clients that do not look like a browser
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass
class IngestionConfig:
    """Configuration for the ingestion pipeline"""

    feed_url: str
    detail_base_url: Optional[str] = None

    # Catalog store
    database_url: str = "sqlite:///data/catalog.db"

    # Local asset storage and the public URL it is served under
    asset_dir: str = "data/assets"
    asset_base_url: str = "http://localhost:4000/images"

    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    request_timeout: float = 30.0
    headers: dict[str, str] = field(default_factory=lambda: dict(BROWSER_HEADERS))

    log_dir: str = "logs"

    @classmethod
    def from_env(cls, feed_url: Optional[str] = None) -> "IngestionConfig":
        """
        Build the configuration from environment variables.

        Args:
            feed_url: Overrides FEED_URL when given.

        Raises:
            EnvironmentError: If no feed URL is available.
            ValueError: If a numeric variable cannot be parsed.
        """
        load_dotenv()
        feed_url = feed_url or os.getenv("FEED_URL")
        if not feed_url:
            raise EnvironmentError("FEED_URL not found in environment or .env file")

        return cls(
            feed_url=feed_url,
            detail_base_url=os.getenv("DETAIL_BASE_URL") or None,
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            asset_dir=os.getenv("ASSET_DIR", cls.asset_dir),
            asset_base_url=os.getenv("ASSET_BASE_URL", cls.asset_base_url),
            interval_seconds=int(
                os.getenv("INGEST_INTERVAL_SECONDS", DEFAULT_INTERVAL_SECONDS)
            ),
            request_timeout=float(os.getenv("HTTP_TIMEOUT", cls.request_timeout)),
            log_dir=os.getenv("LOG_DIR", cls.log_dir),
        )
