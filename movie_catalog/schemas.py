"""
Response models for catalog entities.

Summaries are used for nested relations so that a movie lists its actors
without each actor listing its movies again.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ActorSummary(OrmModel):
    id: int
    name: str


class MovieSummary(OrmModel):
    id: int
    title: str
    description: Optional[str] = None


class RatingSummary(OrmModel):
    id: int
    score: int
    review: Optional[str] = None


class MovieOut(MovieSummary):
    actors: List[ActorSummary] = []
    ratings: List[RatingSummary] = []


class ActorOut(ActorSummary):
    movies: List[MovieSummary] = []


class RatingOut(RatingSummary):
    movie_id: int
    movie: Optional[MovieSummary] = None
