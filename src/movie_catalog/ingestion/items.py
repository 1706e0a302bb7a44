"""Ephemeral records passed between ingestion steps. Never persisted."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CandidateEntry:
    """A feed item not yet confirmed as new."""

    title: str
    permalink: str


@dataclass
class ScrapedItem:
    """
    Fields extracted from one detail page.

    Every field is optional: a page element that is missing leaves the field
    as None (or an empty genre list).
    """

    title: Optional[str] = None
    primary_media_url: Optional[str] = None
    trailer_url: Optional[str] = None
    genre_labels: list[str] = field(default_factory=list)
    duration: Optional[str] = None
    release_year: Optional[str] = None
    rating_label: Optional[str] = None
    synopsis: Optional[str] = None
    thumbnail_url: Optional[str] = None
