"""
Rating management service.

Ratings are simple 1-10 scores attached to an existing movie.
"""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_catalog.errors import NotFoundError
from movie_catalog.models import Movie, Rating
from movie_catalog.schemas import RatingOut

MIN_SCORE = 1
MAX_SCORE = 10


class RatingCreate(BaseModel):
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    review: Optional[str] = None
    movie_id: int = Field(..., validation_alias=AliasChoices("movie_id", "movieId"))


class RatingUpdate(BaseModel):
    score: Optional[int] = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    review: Optional[str] = None
    movie_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("movie_id", "movieId")
    )


def _rating_query():
    return select(Rating).options(selectinload(Rating.movie))


async def _require_movie(db: AsyncSession, movie_id: int) -> Movie:
    movie = await db.get(Movie, movie_id)
    if movie is None:
        raise NotFoundError("Movie not found")
    return movie


class RatingService:
    """
    Service for rating operations.
    """
    @staticmethod
    async def get_rating(db: AsyncSession, rating_id: int) -> Rating:
        """
        Load a rating with its movie.

        Raises:
            NotFoundError: If the rating does not exist
        """
        result = await db.execute(
            _rating_query()
            .where(Rating.id == rating_id)
            .execution_options(populate_existing=True)
        )
        rating = result.scalar_one_or_none()
        if rating is None:
            raise NotFoundError("Rating not found")
        return rating

    @staticmethod
    async def create_rating(db: AsyncSession, data: RatingCreate) -> RatingOut:
        """
        Rate an existing movie.

        Raises:
            NotFoundError: If the movie does not exist
        """
        movie = await _require_movie(db, data.movie_id)
        rating = Rating(score=data.score, review=data.review, movie_id=movie.id)
        db.add(rating)
        await db.commit()
        return RatingOut.model_validate(await RatingService.get_rating(db, rating.id))

    @staticmethod
    async def list_ratings(db: AsyncSession) -> List[RatingOut]:
        result = await db.execute(_rating_query().order_by(Rating.id))
        return [RatingOut.model_validate(r) for r in result.scalars().all()]

    @staticmethod
    async def update_rating(db: AsyncSession, rating_id: int, data: RatingUpdate) -> RatingOut:
        """
        Partially update a rating; a new movie id must refer to an existing movie.
        """
        rating = await RatingService.get_rating(db, rating_id)
        if data.score is not None:
            rating.score = data.score
        if "review" in data.model_fields_set:
            rating.review = data.review
        if data.movie_id is not None:
            movie = await _require_movie(db, data.movie_id)
            rating.movie_id = movie.id
        await db.commit()
        return RatingOut.model_validate(await RatingService.get_rating(db, rating_id))

    @staticmethod
    async def delete_rating(db: AsyncSession, rating_id: int) -> None:
        rating = await RatingService.get_rating(db, rating_id)
        await db.delete(rating)
        await db.commit()
