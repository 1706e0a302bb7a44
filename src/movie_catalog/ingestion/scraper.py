"""
Detail page scraper.

Each ScrapedItem field comes from one fixed CSS selector on the source's
detail page layout. A selector that matches nothing leaves the field empty;
only an unusable document is an error.
"""

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from movie_catalog.logger import log_function
from .client import RemoteSourceClient
from .errors import ParseError
from .items import CandidateEntry, ScrapedItem


logger = logging.getLogger("ingestion")

# field -> (selector, attribute); attribute None means the element's text
DETAIL_SELECTORS = {
    "primary_media_url": ("div.player iframe", "src"),
    "title": ("div.movie-info h1", None),
    "trailer_url": ("div.trailer iframe", "src"),
    "duration": ("span.duration", None),
    "release_year": ("span.year", None),
    "rating_label": ("a.imdb-rating", None),
    "synopsis": ("div.synopsis p", None),
    "thumbnail_url": ('meta[property="og:image"]', "content"),
}
GENRE_SELECTOR = "ul.genres li"
URL_FIELDS = ("primary_media_url", "trailer_url", "thumbnail_url")


def _extract(soup: BeautifulSoup, selector: str, attribute: Optional[str]) -> Optional[str]:
    element = soup.select_one(selector)
    if element is None:
        return None
    if attribute is None:
        value = element.get_text(" ", strip=True)
    else:
        value = element.get(attribute)
        value = value.strip() if isinstance(value, str) else None
    return value or None


def _absolute(page_url: str, url: Optional[str]) -> Optional[str]:
    if url is None:
        return None
    try:
        return urljoin(page_url, url)
    except ValueError:
        # Left as scraped; the download step rejects it for this candidate only
        return url


def scrape_detail(
    content: bytes,
    fallback_title: Optional[str] = None,
    page_url: Optional[str] = None,
) -> ScrapedItem:
    """
    Extract a ScrapedItem from detail page HTML.

    Args:
        content: Raw HTML bytes
        fallback_title: Used when the page has no title heading
        page_url: URL the page was fetched from; relative media URLs are
                  resolved against it

    Raises:
        ParseError: If the document is empty or contains no elements
    """
    if not content or not content.strip():
        raise ParseError("Detail page is empty")

    soup = BeautifulSoup(content, "html.parser")
    if soup.find() is None:
        raise ParseError("Detail page contains no HTML elements")

    fields = {
        name: _extract(soup, selector, attribute)
        for name, (selector, attribute) in DETAIL_SELECTORS.items()
    }
    fields["genre_labels"] = [
        label
        for label in (li.get_text(" ", strip=True) for li in soup.select(GENRE_SELECTOR))
        if label
    ]
    if fields["title"] is None:
        fields["title"] = fallback_title
    if page_url:
        for name in URL_FIELDS:
            fields[name] = _absolute(page_url, fields[name])

    missing = [name for name, value in fields.items() if not value]
    if missing:
        logger.debug(f"Detail page for '{fields['title']}' is missing: {', '.join(missing)}")

    return ScrapedItem(**fields)


@log_function(logger_name="ingestion", log_execution_time=True)
def fetch_detail(client: RemoteSourceClient, candidate: CandidateEntry) -> ScrapedItem:
    """Fetch and scrape the detail page of one candidate."""
    page_url = client.resolve_url(candidate.permalink)
    content = client.fetch_page(page_url)
    return scrape_detail(content, fallback_title=candidate.title, page_url=page_url)
