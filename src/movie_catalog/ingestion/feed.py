"""
RSS feed parsing.

Turns the raw feed payload into candidate entries, in feed order. No
filtering happens here beyond dropping items that lack a title or a link.
"""

import logging

from bs4 import BeautifulSoup

from .errors import ParseError
from .items import CandidateEntry


logger = logging.getLogger("ingestion")


def parse_feed(content: bytes) -> list[CandidateEntry]:
    """
    Parse an RSS payload into candidate entries.

    Args:
        content: Raw feed bytes (channel containing item elements with
                 title and link children)

    Returns:
        List of CandidateEntry in the order the feed lists them

    Raises:
        ParseError: If the payload is empty or has no channel element
    """
    if not content or not content.strip():
        raise ParseError("Feed payload is empty")

    soup = BeautifulSoup(content, "xml")
    channel = soup.find("channel")
    if channel is None:
        raise ParseError("Feed has no <channel> element")

    candidates = []
    for position, item in enumerate(channel.find_all("item"), 1):
        title_tag = item.find("title")
        link_tag = item.find("link")
        title = title_tag.get_text(strip=True) if title_tag else ""
        link = link_tag.get_text(strip=True) if link_tag else ""

        if not title or not link:
            logger.warning(f"Skipping feed item #{position}: missing title or link")
            continue

        candidates.append(CandidateEntry(title=title, permalink=link))

    logger.info(f"Found {len(candidates)} items in feed")
    return candidates
