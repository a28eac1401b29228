from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.actors.service import ActorCreate, ActorService, ActorUpdate
from movie_catalog.base_service import BaseService
from movie_catalog.database import get_db_session
from movie_catalog.errors import CatalogError
from movie_catalog.pagination import Page, normalize
from movie_catalog.schemas import ActorOut, MovieSummary

router = APIRouter(prefix="/actors", tags=["actors"])

actors_service = BaseService("movie_catalog.actors")


@router.get("", name="actors.list", response_model=Page[ActorOut])
async def list_actors(
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    """Paged list of actors with the movies they appear in."""
    return await ActorService.list_actors(db, normalize(page, limit))


@router.get("/search", name="actors.search", response_model=Page[ActorOut])
async def search_actors(
    q: str = Query(""),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    return await ActorService.search_actors(db, q, normalize(page, limit))


@router.get("/{actor_id}", name="actors.get", response_model=ActorOut)
async def get_actor(actor_id: int, db: AsyncSession = Depends(get_db_session)):
    return ActorOut.model_validate(await ActorService.get_actor(db, actor_id))


@router.get("/{actor_id}/movies", name="actors.movies", response_model=List[MovieSummary])
async def actor_movies(actor_id: int, db: AsyncSession = Depends(get_db_session)):
    """List the movies an actor appears in."""
    return await ActorService.movies_for_actor(db, actor_id)


@router.post(
    "",
    name="actors.create",
    response_model=ActorOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_actor(data: ActorCreate, db: AsyncSession = Depends(get_db_session)):
    try:
        actor = await ActorService.create_actor(db, data)
        actors_service.log_event("actor.created", {"id": actor.id, "name": actor.name})
        return actor
    except CatalogError:
        raise
    except Exception as e:
        actors_service.log_error(e, context="Create actor")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create actor",
        )


@router.put("/{actor_id}", name="actors.update", response_model=ActorOut)
async def update_actor(
    actor_id: int,
    data: ActorUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    try:
        actor = await ActorService.update_actor(db, actor_id, data)
        actors_service.log_event("actor.updated", {"id": actor_id})
        return actor
    except CatalogError:
        raise
    except Exception as e:
        actors_service.log_error(e, context="Update actor")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update actor",
        )


@router.delete(
    "/{actor_id}",
    name="actors.delete",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_actor(actor_id: int, db: AsyncSession = Depends(get_db_session)):
    try:
        await ActorService.delete_actor(db, actor_id)
        actors_service.log_event("actor.deleted", {"id": actor_id})
    except CatalogError:
        raise
    except Exception as e:
        actors_service.log_error(e, context="Delete actor")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete actor",
        )
