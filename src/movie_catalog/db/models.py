"""
SQLAlchemy ORM models for the movie catalog.

This module defines the database schema using SQLAlchemy's declarative base.
All models inherit from Base and use consistent naming conventions.

Models:
    Movie: A catalog item ingested from the feed
    Genre: A genre label, created the first time it is seen
    MovieGenre: Association between a movie and one of its genres
    TimestampMixin: Provides automatic created_at/updated_at timestamps
"""

from sqlalchemy import (
    Column,
    Integer,
    Float,
    String,
    Text,
    DateTime,
    ForeignKey,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    """
    Mixin to add automatic timestamp tracking to models.

    Provides:
        created_at: Timestamp when record was created (set automatically)
        updated_at: Timestamp when record was last modified (updated automatically)
    """

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class Genre(Base):
    """
    A genre label. The name is the identity used by the ingestion pipeline.

    Rows are created lazily by the genre resolver and never updated or deleted.
    """

    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)

    movies = relationship("MovieGenre", back_populates="genre")

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"


class Movie(Base, TimestampMixin):
    """
    A catalog item created once per distinct feed title.

    Attributes:
        id: Primary key assigned by the store
        title: Feed title, used as the de-duplication key (not unique at table level)
        description: Synopsis scraped from the detail page
        duration: Duration text as displayed on the detail page (e.g. "1h 52min")
        release_year: Year of release
        rating_imdb: IMDb rating
        video_src: Player iframe source
        trailer_src: Trailer iframe source
        photo_src: Public URL of the locally stored thumbnail
    """

    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    duration = Column(String, nullable=True)
    release_year = Column(Integer, nullable=False)
    rating_imdb = Column(Float, nullable=False)
    video_src = Column(String, nullable=True)
    trailer_src = Column(String, nullable=True)
    photo_src = Column(String, nullable=True)

    genres = relationship(
        "MovieGenre", back_populates="movie", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return (
            f"<Movie(id={self.id}, title='{self.title}', "
            f"release_year={self.release_year}, rating_imdb={self.rating_imdb})>"
        )


class MovieGenre(Base):
    """Association row linking one movie to one genre."""

    __tablename__ = "movie_genres"

    movie_id = Column(Integer, ForeignKey("movies.id"), primary_key=True)
    genre_id = Column(Integer, ForeignKey("genres.id"), primary_key=True)

    movie = relationship("Movie", back_populates="genres")
    genre = relationship("Genre", back_populates="movies")

    def __repr__(self):
        return f"<MovieGenre(movie_id={self.movie_id}, genre_id={self.genre_id})>"
