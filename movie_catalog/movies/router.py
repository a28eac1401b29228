"""
Movies router.

Reads require a user token; create/update/delete require the API token
(see ``movie_catalog.auth.guards.ROUTE_POLICIES``).
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.base_service import BaseService
from movie_catalog.database import get_db_session
from movie_catalog.errors import CatalogError
from movie_catalog.movies.service import MovieCreate, MovieService, MovieUpdate
from movie_catalog.pagination import Page, normalize
from movie_catalog.schemas import MovieOut

router = APIRouter(prefix="/movies", tags=["movies"])

movies_service = BaseService("movie_catalog.movies")


@router.get("", name="movies.list", response_model=Page[MovieOut])
async def list_movies(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    """List movies with their actors and ratings, one page at a time."""
    return await MovieService.list_movies(db, normalize(page, limit))


@router.get("/search", name="movies.search", response_model=Page[MovieOut])
async def search_movies(
    q: str = Query(""),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    """Search movies by title (case-insensitive substring)."""
    return await MovieService.search_movies(db, q, normalize(page, limit))


@router.get("/{movie_id}", name="movies.get", response_model=MovieOut)
async def get_movie(movie_id: int, db: AsyncSession = Depends(get_db_session)):
    return MovieOut.model_validate(await MovieService.get_movie(db, movie_id))


@router.post(
    "",
    name="movies.create",
    response_model=MovieOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_movie(data: MovieCreate, db: AsyncSession = Depends(get_db_session)):
    try:
        movie = await MovieService.create_movie(db, data)
        movies_service.log_event("movie.created", {"id": movie.id, "title": movie.title})
        return movie
    except CatalogError:
        raise
    except Exception as e:
        movies_service.log_error(e, context="Create movie")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create movie",
        )


@router.put("/{movie_id}", name="movies.update", response_model=MovieOut)
async def update_movie(
    movie_id: int,
    data: MovieUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        movie = await MovieService.update_movie(db, movie_id, data)
        movies_service.log_event("movie.updated", {
            "id": movie_id,
            "fields_updated": sorted(data.model_fields_set),
        })
        return movie
    except CatalogError:
        raise
    except Exception as e:
        movies_service.log_error(e, context="Update movie")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update movie",
        )


@router.delete(
    "/{movie_id}",
    name="movies.delete",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_movie(movie_id: int, db: AsyncSession = Depends(get_db_session)):
    try:
        await MovieService.delete_movie(db, movie_id)
        movies_service.log_event("movie.deleted", {"id": movie_id})
    except CatalogError:
        raise
    except Exception as e:
        movies_service.log_error(e, context="Delete movie")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete movie",
        )
