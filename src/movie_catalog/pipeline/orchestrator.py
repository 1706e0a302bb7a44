import logging

from movie_catalog.db import get_db_session
from movie_catalog.ingestion import (
    CandidateEntry,
    FetchError,
    GenreResolver,
    IngestionError,
    ParseError,
    PartialCommitError,
    fetch_detail,
    fetch_thumbnail,
    filter_new_candidates,
    load_known_genres,
    parse_feed,
    parse_rating,
    parse_release_year,
    write_movie,
)
from movie_catalog.logger import log_function
from .context import IngestionContext


def empty_stats() -> dict[str, int]:
    return {"feed_items": 0, "new": 0, "added": 0, "errors": 0, "partial": 0}


def process_candidate(
    context: IngestionContext, resolver: GenreResolver, candidate: CandidateEntry
) -> int:
    """
    Run detail fetch -> scrape -> genres + thumbnail -> write for one candidate.

    The thumbnail download finishes before the movie row is written. If the
    write fails and the movie row is gone, the stored thumbnail is removed.

    Returns:
        The new movie id

    Raises:
        IngestionError: Any failure of this candidate
    """
    item = fetch_detail(context.client, candidate)
    # Reject unusable numbers before creating genres or writing files
    parse_release_year(item.release_year)
    parse_rating(item.rating_label)

    genre_ids = resolver.resolve(item.genre_labels)
    asset = fetch_thumbnail(
        context.client,
        context.storage,
        item.thumbnail_url,
        context.config.asset_base_url,
    )
    try:
        return write_movie(
            context.session_factory,
            title=candidate.title,
            item=item,
            genre_ids=genre_ids,
            photo_src=asset.url if asset else None,
        )
    except IngestionError as e:
        # A movie row that survived a failed rollback still points at the file
        row_may_exist = isinstance(e, PartialCommitError) and not e.rolled_back
        if asset and not row_may_exist:
            context.storage.delete(asset.filename)
        raise


@log_function(logger_name="pipeline", log_execution_time=True)
def run_ingestion_cycle(context: IngestionContext, dry_run: bool = False) -> dict[str, int]:
    """
    Run one full ingestion cycle over the current feed snapshot.

    Candidates are processed one at a time in feed order. A failing candidate
    is logged and counted, and the cycle moves on to the next one.

    Args:
        context: Ingestion context owned by the process
        dry_run: Only report which candidates are new, without scraping or writing

    Returns:
        Dictionary with statistics:
        - feed_items: Entries found in the feed
        - new: Entries not yet in the catalog
        - added: Movies created
        - errors: Candidates (or the feed itself) that failed
        - partial: Candidates whose genre associations failed after the movie insert
    """
    logger = logging.getLogger("pipeline")
    stats = empty_stats()

    logger.info("=== INGESTION CYCLE STARTED ===")
    try:
        candidates = parse_feed(context.client.fetch_feed())
    except (FetchError, ParseError) as e:
        logger.error(f"Feed unavailable, cycle aborted: {e}")
        stats["errors"] += 1
        return stats
    stats["feed_items"] = len(candidates)

    with get_db_session(context.session_factory) as session:
        new_candidates = filter_new_candidates(session, candidates)
        known_genres = load_known_genres(session)
    stats["new"] = len(new_candidates)

    if dry_run:
        for candidate in new_candidates:
            print(f'  ✓ Would add: "{candidate.title[:60]}" ({candidate.permalink})')
        return stats

    resolver = GenreResolver(context.session_factory, known_genres)
    for i, candidate in enumerate(new_candidates, 1):
        logger.info(f"[{i}/{len(new_candidates)}] {candidate.title}")
        try:
            process_candidate(context, resolver, candidate)
            stats["added"] += 1
        except PartialCommitError as e:
            logger.critical(f"Catalog inconsistency for '{e.title}': {e}")
            stats["partial"] += 1
        except IngestionError as e:
            logger.warning(f"Skipped '{candidate.title}': {type(e).__name__}: {e}")
            stats["errors"] += 1

    if resolver.created:
        logger.info(f"New genres this cycle: {', '.join(resolver.created)}")
    logger.info(
        f"=== INGESTION CYCLE COMPLETED === {stats['added']} added, "
        f"{stats['feed_items'] - stats['new']} skipped, {stats['errors']} errors, "
        f"{stats['partial']} partial"
    )
    return stats
