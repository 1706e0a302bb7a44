from movie_catalog.db import Genre, get_db_session
from movie_catalog.ingestion import GenreResolver, load_known_genres


def genre_rows(session_factory):
    with get_db_session(session_factory) as session:
        return {g.name: g.id for g in session.query(Genre).all()}


def test_duplicate_new_label_creates_one_genre(session_factory):
    resolver = GenreResolver(session_factory, {})

    ids = resolver.resolve(["A", "B", "A"])

    rows = genre_rows(session_factory)
    assert sorted(rows) == ["A", "B"]
    assert ids == [rows["A"], rows["B"]]
    assert resolver.created == ["A", "B"]


def test_known_genres_are_reused(session_factory):
    with get_db_session(session_factory) as session:
        session.add(Genre(name="Drama"))
        session.commit()
        known = load_known_genres(session)

    resolver = GenreResolver(session_factory, known)
    ids = resolver.resolve(["Drama"])

    assert ids == [known["Drama"]]
    assert resolver.created == []
    assert len(genre_rows(session_factory)) == 1


def test_new_genre_reused_by_later_items_in_cycle(session_factory):
    resolver = GenreResolver(session_factory, {})

    first = resolver.resolve(["Horror"])
    second = resolver.resolve(["Comedy", "Horror"])

    assert second[1] == first[0]
    assert len(genre_rows(session_factory)) == 2


def test_label_identity_is_exact(session_factory):
    resolver = GenreResolver(session_factory, {})
    ids = resolver.resolve(["Sci-Fi", "sci-fi"])
    assert len(set(ids)) == 2


def test_genre_created_elsewhere_is_picked_up(session_factory):
    # The cycle's snapshot predates the row
    resolver = GenreResolver(session_factory, {})
    with get_db_session(session_factory) as session:
        session.add(Genre(name="War"))
        session.commit()

    ids = resolver.resolve(["War"])

    assert ids == [genre_rows(session_factory)["War"]]
    assert resolver.created == []


def test_blank_labels_ignored(session_factory):
    resolver = GenreResolver(session_factory, {})
    assert resolver.resolve(["", "  "]) == []
    assert genre_rows(session_factory) == {}
