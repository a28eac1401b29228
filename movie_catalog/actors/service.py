"""
Actor management service.
"""
from typing import List, Optional

from pydantic import BaseModel, Field
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_catalog.errors import ConflictError, NotFoundError
from movie_catalog.models import Actor
from movie_catalog.pagination import Page, PageParams, build_page, fit_to_total
from movie_catalog.schemas import ActorOut, MovieSummary


class ActorCreate(BaseModel):
    name: str = Field(..., min_length=1)


class ActorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)


def _actor_query():
    return select(Actor).options(selectinload(Actor.movies))


class ActorService:
    """
    Service for actor operations.
    """
    @staticmethod
    async def get_actor(db: AsyncSession, actor_id: int) -> Actor:
        """
        Load an actor with the movies they appear in.

        Raises:
            NotFoundError: If the actor does not exist
        """
        result = await db.execute(
            _actor_query()
            .where(Actor.id == actor_id)
            .execution_options(populate_existing=True)
        )
        actor = result.scalar_one_or_none()
        if actor is None:
            raise NotFoundError("Actor not found")
        return actor

    @staticmethod
    async def _ensure_name_free(db: AsyncSession, name: str, actor_id: Optional[int] = None):
        query = select(Actor.id).where(Actor.name == name)
        if actor_id is not None:
            query = query.where(Actor.id != actor_id)
        if (await db.execute(query)).first() is not None:
            raise ConflictError("Actor name already exists")

    @staticmethod
    async def create_actor(db: AsyncSession, data: ActorCreate) -> ActorOut:
        await ActorService._ensure_name_free(db, data.name)
        actor = Actor(name=data.name)
        db.add(actor)
        await db.commit()
        return ActorOut.model_validate(await ActorService.get_actor(db, actor.id))

    @staticmethod
    async def list_actors(db: AsyncSession, params: PageParams) -> Page:
        total = await db.scalar(select(func.count()).select_from(Actor))
        total = total or 0
        params = fit_to_total(params, total)
        result = await db.execute(
            _actor_query().order_by(Actor.id).offset(params.offset).limit(params.limit)
        )
        items = [ActorOut.model_validate(a) for a in result.scalars().all()]
        return build_page(items, total, params)

    @staticmethod
    async def search_actors(db: AsyncSession, q: str, params: PageParams) -> Page:
        """Case-insensitive substring search on the name."""
        condition = func.lower(Actor.name).contains(q.lower(), autoescape=True)
        total = await db.scalar(select(func.count()).select_from(Actor).where(condition))
        total = total or 0
        params = fit_to_total(params, total)
        result = await db.execute(
            _actor_query()
            .where(condition)
            .order_by(Actor.id)
            .offset(params.offset)
            .limit(params.limit)
        )
        items = [ActorOut.model_validate(a) for a in result.scalars().all()]
        return build_page(items, total, params)

    @staticmethod
    async def update_actor(db: AsyncSession, actor_id: int, data: ActorUpdate) -> ActorOut:
        actor = await ActorService.get_actor(db, actor_id)
        if data.name:
            await ActorService._ensure_name_free(db, data.name, actor_id)
            actor.name = data.name
        await db.commit()
        return ActorOut.model_validate(await ActorService.get_actor(db, actor_id))

    @staticmethod
    async def delete_actor(db: AsyncSession, actor_id: int) -> None:
        actor = await ActorService.get_actor(db, actor_id)
        await db.delete(actor)
        await db.commit()

    @staticmethod
    async def movies_for_actor(db: AsyncSession, actor_id: int) -> List[MovieSummary]:
        actor = await ActorService.get_actor(db, actor_id)
        return [MovieSummary.model_validate(m) for m in actor.movies]
