"""
Pydantic models for movies and their directors.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class MovieName(CamelModel):
    """Only the title, as returned by the movie list endpoints."""

    movie_name: str


class MovieBase(CamelModel):
    director_id: int = Field(..., examples=[6])
    movie_name: str = Field(..., examples=["Jurassic Park"])
    lead_actor: Optional[str] = Field(None, examples=["Jeff Goldblum"])


class MovieCreate(MovieBase):
    pass


class MovieRead(MovieBase):
    movie_id: int


class MovieUpdate(CamelModel):
    """All fields are optional; only provided fields will be updated."""

    director_id: Optional[int] = None
    movie_name: Optional[str] = None
    lead_actor: Optional[str] = None


class DirectorRead(CamelModel):
    director_id: int
    director_name: str
