"""
Business logic for the cricket team roster.
"""

import logging
from typing import List, Optional

from ..core.db import get_connection
from ..schemas.cricket import TeamPlayerCreate, TeamPlayerRead, TeamPlayerUpdate

logger = logging.getLogger(__name__)

_COLUMNS = "player_id, player_name, jersey_number, role"


class TeamService:
    """Service for the players of the ``cricket_team`` table."""

    database: str = "cricket_team"

    @classmethod
    async def list_players(cls) -> List[TeamPlayerRead]:
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM cricket_team ORDER BY player_id").fetchall()
            return [TeamPlayerRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def add_player(cls, data: TeamPlayerCreate) -> int:
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO cricket_team (player_name, jersey_number, role) VALUES (?, ?, ?)",
                (data.player_name, data.jersey_number, data.role),
            )
            player_id = cursor.lastrowid
            conn.commit()
            logger.info("Added player %s (%s) to the team", player_id, data.player_name)
            return player_id
        finally:
            conn.close()

    @classmethod
    async def get_player(cls, player_id: int) -> Optional[TeamPlayerRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM cricket_team WHERE player_id = ?", (player_id,)
            ).fetchone()
            return TeamPlayerRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def update_player(cls, player_id: int, data: TeamPlayerUpdate) -> bool:
        """Update the provided fields of a player.

        Returns ``False`` if the player does not exist.
        """
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cursor.execute(
                "SELECT 1 FROM cricket_team WHERE player_id = ?", (player_id,)
            ).fetchone():
                return False
            if updates:
                assignments = ", ".join(f"{column} = ?" for column in updates)
                cursor.execute(
                    f"UPDATE cricket_team SET {assignments} WHERE player_id = ?",
                    (*updates.values(), player_id),
                )
                conn.commit()
                logger.info("Updated player %s: %s", player_id, sorted(updates))
            return True
        finally:
            conn.close()

    @classmethod
    async def remove_player(cls, player_id: int) -> bool:
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM cricket_team WHERE player_id = ?", (player_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Removed player %s from the team", player_id)
            return affected > 0
        finally:
            conn.close()
