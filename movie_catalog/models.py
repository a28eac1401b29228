"""
Catalog models.

This module defines SQLAlchemy models for:
- Movies
- Actors
- Ratings
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from movie_catalog.database import Base

# Association table for many-to-many relationship between movies and actors
movie_actors = Table(
    "movie_actors",
    Base.metadata,
    Column("movie_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("actor_id", Integer, ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True),
)


class Movie(Base):
    """A catalog entry. Titles are unique."""
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    actors = relationship(
        "Actor", secondary=movie_actors, back_populates="movies", order_by="Actor.id"
    )
    ratings = relationship(
        "Rating", back_populates="movie", cascade="all, delete-orphan", order_by="Rating.id"
    )


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    movies = relationship(
        "Movie", secondary=movie_actors, back_populates="actors", order_by="Movie.id"
    )


class Rating(Base):
    """A 1-10 score with an optional review, attached to one movie."""
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    score = Column(Integer, nullable=False)
    review = Column(String, nullable=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False)

    movie = relationship("Movie", back_populates="ratings")
