"""
Business logic for movies and directors.

Database errors are not handled here; the movie endpoints turn any
``sqlite3.Error`` into an HTTP 500 naming the failed operation.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_connection
from ..schemas.movie import DirectorRead, MovieCreate, MovieName, MovieRead, MovieUpdate

logger = logging.getLogger(__name__)

INVALID_DIRECTOR = "Invalid director id"


class MovieService:
    """Service for the movie catalogue of the ``movies`` database."""

    database: str = "movies"

    @staticmethod
    def _director_exists(cursor: sqlite3.Cursor, director_id: int) -> bool:
        return cursor.execute(
            "SELECT 1 FROM director WHERE director_id = ?", (director_id,)
        ).fetchone() is not None

    @classmethod
    async def list_movie_names(cls) -> List[MovieName]:
        conn = get_connection(cls.database)
        try:
            rows = conn.execute("SELECT movie_name FROM movie ORDER BY movie_id").fetchall()
            return [MovieName(movie_name=row["movie_name"]) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_movie(cls, data: MovieCreate) -> int:
        """Insert a movie and return its id.

        Raises ``ValueError`` if the director does not exist.
        """
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cls._director_exists(cursor, data.director_id):
                raise ValueError(INVALID_DIRECTOR)
            cursor.execute(
                "INSERT INTO movie (director_id, movie_name, lead_actor) VALUES (?, ?, ?)",
                (data.director_id, data.movie_name, data.lead_actor),
            )
            movie_id = cursor.lastrowid
            conn.commit()
            logger.info("Added movie %s (%s)", movie_id, data.movie_name)
            return movie_id
        finally:
            conn.close()

    @classmethod
    async def get_movie(cls, movie_id: int) -> Optional[MovieRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                "SELECT movie_id, director_id, movie_name, lead_actor FROM movie WHERE movie_id = ?",
                (movie_id,),
            ).fetchone()
            return MovieRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def update_movie(cls, movie_id: int, data: MovieUpdate) -> bool:
        """Update the provided fields of a movie.

        Returns ``False`` if the movie does not exist; raises
        ``ValueError`` for an unknown director.
        """
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT 1 FROM movie WHERE movie_id = ?", (movie_id,)).fetchone():
                return False
            if "director_id" in updates and not cls._director_exists(cursor, updates["director_id"]):
                raise ValueError(INVALID_DIRECTOR)
            if updates:
                assignments = ", ".join(f"{column} = ?" for column in updates)
                cursor.execute(
                    f"UPDATE movie SET {assignments} WHERE movie_id = ?",
                    (*updates.values(), movie_id),
                )
                conn.commit()
                logger.info("Updated movie %s: %s", movie_id, sorted(updates))
            return True
        finally:
            conn.close()

    @classmethod
    async def delete_movie(cls, movie_id: int) -> bool:
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM movie WHERE movie_id = ?", (movie_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Removed movie %s", movie_id)
            return affected > 0
        finally:
            conn.close()

    @classmethod
    async def list_directors(cls) -> List[DirectorRead]:
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                "SELECT director_id, director_name FROM director ORDER BY director_id"
            ).fetchall()
            return [DirectorRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_movies_by_director(cls, director_id: int) -> Optional[List[MovieName]]:
        """Return the titles directed by ``director_id``.

        Returns ``None`` if the director does not exist, an empty list
        if they directed nothing.
        """
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cls._director_exists(cursor, director_id):
                return None
            rows = cursor.execute(
                "SELECT movie_name FROM movie WHERE director_id = ? ORDER BY movie_id",
                (director_id,),
            ).fetchall()
            return [MovieName(movie_name=row["movie_name"]) for row in rows]
        finally:
            conn.close()
