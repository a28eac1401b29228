"""
Movie management service.

This module provides functionality for:
- Creating, updating and deleting movies
- Paginated listing and title search
- Linking movies to actors
"""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_catalog.errors import ConflictError, NotFoundError
from movie_catalog.models import Actor, Movie
from movie_catalog.pagination import Page, PageParams, build_page, fit_to_total
from movie_catalog.schemas import MovieOut


# Pydantic models for request validation
class MovieFields(BaseModel):
    description: Optional[str] = None
    actor_ids: Optional[List[int]] = Field(
        default=None, validation_alias=AliasChoices("actor_ids", "actorIds")
    )

    @field_validator("actor_ids")
    @classmethod
    def actor_ids_must_be_unique(cls, v):
        if v is not None and len(set(v)) != len(v):
            raise ValueError("actor ids must be unique")
        return v


class MovieCreate(MovieFields):
    """Model for creating a movie. Accepts ``actorIds`` as well as ``actor_ids``."""
    title: str = Field(..., min_length=1)


class MovieUpdate(MovieFields):
    """Model for partial movie updates."""
    title: Optional[str] = Field(default=None, min_length=1)


def _movie_query():
    return select(Movie).options(selectinload(Movie.actors), selectinload(Movie.ratings))


async def load_actors(db: AsyncSession, actor_ids: List[int]) -> List[Actor]:
    """Fetch the actors with the given ids; unknown ids are skipped."""
    if not actor_ids:
        return []
    result = await db.execute(select(Actor).where(Actor.id.in_(actor_ids)).order_by(Actor.id))
    return list(result.scalars().all())


class MovieService:
    """
    Service for movie operations.
    """
    @staticmethod
    async def get_movie(db: AsyncSession, movie_id: int) -> Movie:
        """
        Load a movie with its actors and ratings.

        Raises:
            NotFoundError: If the movie does not exist
        """
        result = await db.execute(
            _movie_query()
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        movie = result.scalar_one_or_none()
        if movie is None:
            raise NotFoundError("Movie not found")
        return movie

    @staticmethod
    async def _ensure_title_free(db: AsyncSession, title: str, movie_id: Optional[int] = None):
        query = select(Movie.id).where(Movie.title == title)
        if movie_id is not None:
            query = query.where(Movie.id != movie_id)
        if (await db.execute(query)).first() is not None:
            raise ConflictError("Movie title already exists")

    @staticmethod
    async def create_movie(db: AsyncSession, data: MovieCreate) -> MovieOut:
        """
        Create a movie, linking any existing actors by id.

        Raises:
            ConflictError: If the title is taken
        """
        await MovieService._ensure_title_free(db, data.title)
        movie = Movie(title=data.title, description=data.description)
        movie.actors = await load_actors(db, data.actor_ids or [])
        db.add(movie)
        await db.commit()
        return MovieOut.model_validate(await MovieService.get_movie(db, movie.id))

    @staticmethod
    async def list_movies(db: AsyncSession, params: PageParams) -> Page:
        total = await db.scalar(select(func.count()).select_from(Movie))
        total = total or 0
        params = fit_to_total(params, total)
        result = await db.execute(
            _movie_query().order_by(Movie.id).offset(params.offset).limit(params.limit)
        )
        items = [MovieOut.model_validate(m) for m in result.scalars().all()]
        return build_page(items, total, params)

    @staticmethod
    async def search_movies(db: AsyncSession, q: str, params: PageParams) -> Page:
        """Case-insensitive substring search on the title."""
        condition = func.lower(Movie.title).contains(q.lower(), autoescape=True)
        total = await db.scalar(select(func.count()).select_from(Movie).where(condition))
        total = total or 0
        params = fit_to_total(params, total)
        result = await db.execute(
            _movie_query()
            .where(condition)
            .order_by(Movie.id)
            .offset(params.offset)
            .limit(params.limit)
        )
        items = [MovieOut.model_validate(m) for m in result.scalars().all()]
        return build_page(items, total, params)

    @staticmethod
    async def update_movie(db: AsyncSession, movie_id: int, data: MovieUpdate) -> MovieOut:
        """
        Partially update a movie. A provided actor list replaces the current one.

        Raises:
            NotFoundError: If the movie does not exist
            ConflictError: If the new title belongs to another movie
        """
        movie = await MovieService.get_movie(db, movie_id)
        if data.title:
            await MovieService._ensure_title_free(db, data.title, movie_id)
            movie.title = data.title
        if "description" in data.model_fields_set:
            movie.description = data.description
        if data.actor_ids is not None:
            movie.actors = await load_actors(db, data.actor_ids)
        await db.commit()
        return MovieOut.model_validate(await MovieService.get_movie(db, movie_id))

    @staticmethod
    async def delete_movie(db: AsyncSession, movie_id: int) -> None:
        """Delete a movie and its ratings."""
        movie = await MovieService.get_movie(db, movie_id)
        await db.delete(movie)
        await db.commit()
