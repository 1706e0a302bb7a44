"""create movie catalog tables

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-12 09:41:17.228301

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create genres, movies and the movie_genres association table."""
    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "movies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration", sa.String(), nullable=True),
        sa.Column("release_year", sa.Integer(), nullable=False),
        sa.Column("rating_imdb", sa.Float(), nullable=False),
        sa.Column("video_src", sa.String(), nullable=True),
        sa.Column("trailer_src", sa.String(), nullable=True),
        sa.Column("photo_src", sa.String(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Non-unique: titles are de-duplicated by the ingestion pipeline
    op.create_index("ix_movies_title", "movies", ["title"], unique=False)
    op.create_table(
        "movie_genres",
        sa.Column("movie_id", sa.Integer(), nullable=False),
        sa.Column("genre_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["genre_id"], ["genres.id"]),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"]),
        sa.PrimaryKeyConstraint("movie_id", "genre_id"),
    )


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_table("movie_genres")
    op.drop_index("ix_movies_title", table_name="movies")
    op.drop_table("movies")
    op.drop_table("genres")
