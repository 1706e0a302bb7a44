from movie_catalog.db import Movie, get_db_session
from movie_catalog.ingestion import CandidateEntry, filter_new_candidates


def add_movie(session_factory, title):
    with get_db_session(session_factory) as session:
        session.add(Movie(title=title, release_year=2020, rating_imdb=6.0))
        session.commit()


def test_existing_titles_are_dropped(session_factory):
    add_movie(session_factory, "Alpha")
    candidates = [CandidateEntry("Alpha", "https://m/a"), CandidateEntry("Beta", "https://m/b")]

    with get_db_session(session_factory) as session:
        result = filter_new_candidates(session, candidates)

    assert result == [CandidateEntry("Beta", "https://m/b")]


def test_title_match_is_case_sensitive_and_exact(session_factory):
    add_movie(session_factory, "Alpha")
    candidates = [
        CandidateEntry("alpha", "https://m/1"),
        CandidateEntry("Alpha!", "https://m/2"),
        CandidateEntry("Alpha", "https://m/3"),
    ]

    with get_db_session(session_factory) as session:
        result = filter_new_candidates(session, candidates)

    assert [c.title for c in result] == ["alpha", "Alpha!"]


def test_repeated_feed_title_forwarded_once(session_factory):
    candidates = [
        CandidateEntry("Beta", "https://m/b1"),
        CandidateEntry("Gamma", "https://m/g"),
        CandidateEntry("Beta", "https://m/b2"),
    ]

    with get_db_session(session_factory) as session:
        result = filter_new_candidates(session, candidates)

    assert result == candidates[:2]
