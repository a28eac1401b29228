#!/usr/bin/env python3
"""
Populate the catalog database with demo data.

Safe to run repeatedly: movies, actors and ratings are looked up before
being created.

    python -m movie_catalog.seed
"""
import asyncio
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_catalog.base_service import BaseService
from movie_catalog.config import Settings
from movie_catalog.database import create_engine, create_session_factory, init_models
from movie_catalog.models import Actor, Movie, Rating

seed_service = BaseService("movie_catalog.seed")

SEED_MOVIES: List[Dict] = [
    {
        "title": "The Matrix",
        "description": "A computer hacker learns about the true nature of reality.",
        "actors": ["Keanu Reeves", "Laurence Fishburne"],
        "ratings": [
            (9, "Great sci-fi"), (10, "Mind-blowing"), (8, "Classic action"),
            (9, "Excellent pacing"), (9, "Rewatchable"),
        ],
    },
    {
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology.",
        "actors": ["Leonardo DiCaprio", "Joseph Gordon-Levitt"],
        "ratings": [
            (9, "Complex and thrilling"), (8, "Great visuals"), (9, "Thought-provoking"),
            (8, "Amazing soundtrack"), (9, "Nolan at his best"),
        ],
    },
    {
        "title": "The Dark Knight",
        "description": "Batman faces the Joker in Gotham City.",
        "actors": ["Christian Bale", "Heath Ledger"],
        "ratings": [
            (10, "Masterpiece"), (9, "Heath Ledger is superb"), (9, "Dark and gripping"),
            (8, "Strong performances"), (9, "Unforgettable"),
        ],
    },
    {
        "title": "Pulp Fiction",
        "description": "The lives of two mob hitmen, a boxer and others intertwine.",
        "actors": ["John Travolta", "Samuel L. Jackson"],
        "ratings": [
            (9, "Quentin Tarantino classic"), (8, "Witty dialogue"), (8, "Nonlinear brilliance"),
            (9, "Iconic scenes"), (8, "Great soundtrack"),
        ],
    },
    {
        "title": "Fight Club",
        "description": "An insomniac office worker and a soapmaker form an underground fight club.",
        "actors": ["Brad Pitt", "Edward Norton"],
        "ratings": [
            (9, "Cult classic"), (8, "Dark and provocative"), (9, "Twist ending"),
            (8, "Strong performances"), (7, "Polarizing but good"),
        ],
    },
    {
        "title": "Forrest Gump",
        "description": "The presidencies and events of the 20th century as seen through the eyes of Forrest Gump.",
        "actors": ["Tom Hanks", "Robin Wright"],
        "ratings": [
            (9, "Heartwarming"), (8, "Tom Hanks shines"), (9, "Emotional"),
            (8, "Timeless"), (9, "Great storytelling"),
        ],
    },
    {
        "title": "The Shawshank Redemption",
        "description": "Two imprisoned men bond over a number of years.",
        "actors": ["Tim Robbins", "Morgan Freeman"],
        "ratings": [
            (10, "Best movie ever"), (10, "Inspiring"), (9, "Beautiful story"),
            (9, "Powerful performances"), (10, "A must watch"),
        ],
    },
    {
        "title": "The Godfather",
        "description": "The aging patriarch of an organized crime dynasty transfers control to his son.",
        "actors": ["Marlon Brando", "Al Pacino"],
        "ratings": [
            (10, "Cinematic masterpiece"), (9, "Epic storytelling"), (9, "Stellar performances"),
            (10, "Timeless"), (9, "Brilliant"),
        ],
    },
    {
        "title": "The Lord of the Rings: The Fellowship of the Ring",
        "description": "A meek Hobbit and eight companions set out on a journey to destroy the One Ring.",
        "actors": ["Elijah Wood", "Ian McKellen"],
        "ratings": [
            (9, "Epic fantasy"), (9, "Stunning visuals"), (8, "Great adaptation"),
            (9, "Powerful world-building"), (9, "Amazing score"),
        ],
    },
    {
        "title": "Interstellar",
        "description": "A team of explorers travel through a wormhole in space in an attempt to ensure humanity's survival.",
        "actors": ["Matthew McConaughey", "Anne Hathaway"],
        "ratings": [
            (9, "Visually stunning"), (8, "Emotional and grand"), (9, "Ambitious"),
            (8, "Great score"), (9, "Thought-provoking"),
        ],
    },
]


async def find_or_create_actor(db: AsyncSession, name: str) -> Actor:
    actor = (await db.execute(select(Actor).where(Actor.name == name))).scalar_one_or_none()
    if actor is None:
        actor = Actor(name=name)
        db.add(actor)
        await db.flush()
    return actor


async def find_or_create_movie(
    db: AsyncSession,
    title: str,
    description: Optional[str],
    actors: List[Actor],
) -> Movie:
    """Find a movie by title or create it; the actor links are always reset to ``actors``."""
    result = await db.execute(
        select(Movie).where(Movie.title == title).options(selectinload(Movie.actors))
    )
    movie = result.scalar_one_or_none()
    if movie is None:
        movie = Movie(title=title, description=description)
        db.add(movie)
    movie.actors = actors
    await db.flush()
    return movie


async def seed_catalog(session_factory) -> Dict[str, int]:
    """
    Insert the demo movies, actors and ratings that are not already present.

    Returns:
        Count of ratings created by this run, keyed ``ratings_created``
    """
    created = 0
    async with session_factory() as db:
        for data in SEED_MOVIES:
            actors = [await find_or_create_actor(db, name) for name in data["actors"]]
            movie = await find_or_create_movie(db, data["title"], data["description"], actors)
            for score, review in data["ratings"]:
                exists = (await db.execute(
                    select(Rating.id).where(
                        Rating.movie_id == movie.id,
                        Rating.score == score,
                        Rating.review == review,
                    )
                )).first()
                if exists is None:
                    db.add(Rating(score=score, review=review, movie_id=movie.id))
                    created += 1
        await db.commit()
    seed_service.log_event("catalog.seeded", {"movies": len(SEED_MOVIES), "ratings_created": created})
    return {"ratings_created": created}


async def main(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    engine = create_engine(settings.database_url)
    try:
        await init_models(engine)
        await seed_catalog(create_session_factory(engine))
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
    print("Seed complete")
