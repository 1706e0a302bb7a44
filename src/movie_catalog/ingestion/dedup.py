import logging

from sqlalchemy.orm import Session

from movie_catalog.db import find_movie_by_title
from .items import CandidateEntry


logger = logging.getLogger("ingestion")


def filter_new_candidates(
    session: Session, candidates: list[CandidateEntry]
) -> list[CandidateEntry]:
    """
    Drop candidates whose title is already in the catalog.

    Title match is exact and case-sensitive. A title repeated within the same
    feed is only forwarded once. Feed order is preserved.
    """
    new_candidates = []
    seen_titles = set()
    for candidate in candidates:
        if candidate.title in seen_titles:
            logger.debug(f"Skipped duplicate feed entry: '{candidate.title}'")
            continue
        seen_titles.add(candidate.title)

        if find_movie_by_title(session, candidate.title) is not None:
            logger.debug(f"Skipped '{candidate.title}' (already in catalog)")
            continue
        new_candidates.append(candidate)

    logger.info(
        f"{len(new_candidates)} new of {len(candidates)} feed entries "
        f"({len(candidates) - len(new_candidates)} skipped)"
    )
    return new_candidates
