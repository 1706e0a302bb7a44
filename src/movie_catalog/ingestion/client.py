"""
HTTP client for the remote movie source.

Every request carries browser headers (the source rejects bot-looking
clients) and a bounded timeout. There is no retry: a failed request raises
FetchError and the caller decides what to abort.
"""

import logging
from typing import Iterator, Optional
from urllib.parse import urljoin

import requests

from movie_catalog.config import BROWSER_HEADERS
from .errors import FetchError


logger = logging.getLogger("ingestion")

CHUNK_SIZE = 8192


class RemoteSourceClient:
    """Fetches the feed, detail pages and thumbnails from the source site."""

    def __init__(
        self,
        feed_url: str,
        detail_base_url: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.feed_url = feed_url
        self.detail_base_url = detail_base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(headers or BROWSER_HEADERS)

    def resolve_url(self, url: str) -> str:
        """
        Resolve a possibly relative URL against the detail base URL.

        Raises:
            FetchError: If the URL cannot be parsed
        """
        if not self.detail_base_url:
            return url
        try:
            return urljoin(self.detail_base_url, url)
        except ValueError as e:
            raise FetchError(url, f"invalid URL: {e}") from e

    def _get(self, url: str, stream: bool = False) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout, stream=stream)
            response.raise_for_status()
        except requests.Timeout as e:
            raise FetchError(url, f"timed out after {self.timeout}s") from e
        except (requests.RequestException, ValueError) as e:
            raise FetchError(url, str(e)) from e
        return response

    def fetch_feed(self) -> bytes:
        """Fetch the raw syndication feed."""
        logger.info(f"Fetching feed from {self.feed_url}...")
        return self._get(self.feed_url).content

    def fetch_page(self, url: str) -> bytes:
        """Fetch the raw HTML of one detail page."""
        url = self.resolve_url(url)
        logger.debug(f"Fetching detail page {url}")
        return self._get(url).content

    def stream(self, url: str) -> Iterator[bytes]:
        """Yield the body of url in chunks; FetchError on any transport failure."""
        url = self.resolve_url(url)
        response = self._get(url, stream=True)
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    yield chunk
        except requests.RequestException as e:
            raise FetchError(url, f"download interrupted: {e}") from e
        finally:
            response.close()

    def close(self) -> None:
        self.session.close()
