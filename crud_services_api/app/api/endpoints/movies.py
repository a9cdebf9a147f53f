"""
Movie and director endpoints (``movies`` service).

Each handler reports a database failure as HTTP 500 with a message
naming the operation that failed (``Error adding movie``, ...).
"""

import logging
import sqlite3
from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.schemas.movie import DirectorRead, MovieCreate, MovieName, MovieRead, MovieUpdate
from crud_services_api.app.services.movie_service import MovieService

logger = logging.getLogger(__name__)

router = APIRouter()


def _database_error(message: str, exc: sqlite3.Error) -> HTTPException:
    logger.error("%s: %s", message, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("/movies/", response_model=List[MovieName])
async def list_movies() -> List[MovieName]:
    """Names of all movies."""
    try:
        return await MovieService.list_movie_names()
    except sqlite3.Error as e:
        raise _database_error("Error retrieving movies", e) from e


@router.post("/movies/", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(movie: MovieCreate) -> str:
    try:
        await MovieService.create_movie(movie)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except sqlite3.Error as e:
        raise _database_error("Error adding movie", e) from e
    return "Movie Successfully Added"


@router.get("/movies/{movie_id}/", response_model=MovieRead)
async def get_movie(movie_id: int) -> MovieRead:
    try:
        movie = await MovieService.get_movie(movie_id)
    except sqlite3.Error as e:
        raise _database_error("Error retrieving movie", e) from e
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie


@router.put("/movies/{movie_id}/", response_class=PlainTextResponse)
async def update_movie(movie_id: int, updates: MovieUpdate) -> str:
    """Update a movie; fields left out of the body keep their value."""
    try:
        updated = await MovieService.update_movie(movie_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except sqlite3.Error as e:
        raise _database_error("Error updating movie", e) from e
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return "Movie Details Updated"


@router.delete("/movies/{movie_id}/", response_class=PlainTextResponse)
async def delete_movie(movie_id: int) -> str:
    try:
        deleted = await MovieService.delete_movie(movie_id)
    except sqlite3.Error as e:
        raise _database_error("Error removing movie", e) from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return "Movie Removed"


@router.get("/directors/", response_model=List[DirectorRead])
async def list_directors() -> List[DirectorRead]:
    try:
        return await MovieService.list_directors()
    except sqlite3.Error as e:
        raise _database_error("Error retrieving directors", e) from e


@router.get("/directors/{director_id}/movies/", response_model=List[MovieName])
async def list_director_movies(director_id: int) -> List[MovieName]:
    """Names of the movies a director made."""
    try:
        movies = await MovieService.list_movies_by_director(director_id)
    except sqlite3.Error as e:
        raise _database_error("Error retrieving movies by director", e) from e
    if movies is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Director not found")
    return movies
