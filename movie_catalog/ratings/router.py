from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.base_service import BaseService
from movie_catalog.database import get_db_session
from movie_catalog.errors import CatalogError
from movie_catalog.ratings.service import RatingCreate, RatingService, RatingUpdate
from movie_catalog.schemas import RatingOut

router = APIRouter(prefix="/ratings", tags=["ratings"])

ratings_service = BaseService("movie_catalog.ratings")


@router.get("", name="ratings.list", response_model=List[RatingOut])
async def list_ratings(db: AsyncSession = Depends(get_db_session)):
    """List all ratings with their movie."""
    return await RatingService.list_ratings(db)


@router.get("/{rating_id}", name="ratings.get", response_model=RatingOut)
async def get_rating(rating_id: int, db: AsyncSession = Depends(get_db_session)):
    return RatingOut.model_validate(await RatingService.get_rating(db, rating_id))


@router.post(
    "",
    name="ratings.create",
    response_model=RatingOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_rating(data: RatingCreate, db: AsyncSession = Depends(get_db_session)):
    try:
        rating = await RatingService.create_rating(db, data)
        ratings_service.log_event("rating.created", {"id": rating.id, "movie_id": rating.movie_id})
        return rating
    except CatalogError:
        raise
    except Exception as e:
        ratings_service.log_error(e, context="Create rating")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create rating",
        )


@router.put("/{rating_id}", name="ratings.update", response_model=RatingOut)
async def update_rating(
    rating_id: int,
    data: RatingUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        rating = await RatingService.update_rating(db, rating_id, data)
        ratings_service.log_event("rating.updated", {"id": rating_id})
        return rating
    except CatalogError:
        raise
    except Exception as e:
        ratings_service.log_error(e, context="Update rating")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update rating",
        )


@router.delete(
    "/{rating_id}",
    name="ratings.delete",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_rating(rating_id: int, db: AsyncSession = Depends(get_db_session)):
    try:
        await RatingService.delete_rating(db, rating_id)
        ratings_service.log_event("rating.deleted", {"id": rating_id})
    except CatalogError:
        raise
    except Exception as e:
        ratings_service.log_error(e, context="Delete rating")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete rating",
        )
