"""
Business logic for the cricket match details database.

Players and matches are linked through ``player_match_score``, which
also holds the runs, fours and sixes a player made in a match.
"""

import logging
from typing import List, Optional

from ..core.db import get_connection
from ..schemas.cricket import MatchRead, PlayerRead, PlayerScores


class MatchService:
    """Service for players, matches and score aggregates."""

    database: str = "player_stats"

    @classmethod
    async def list_players(cls) -> List[PlayerRead]:
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                "SELECT player_id, player_name FROM player_details ORDER BY player_id"
            ).fetchall()
            return [PlayerRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_player(cls, player_id: int) -> Optional[PlayerRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                "SELECT player_id, player_name FROM player_details WHERE player_id = ?",
                (player_id,),
            ).fetchone()
            return PlayerRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def rename_player(cls, player_id: int, player_name: str) -> bool:
        """Change a player's name.  Returns ``False`` if the player is unknown."""
        logger = logging.getLogger(__name__)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE player_details SET player_name = ? WHERE player_id = ?",
                (player_name, player_id),
            )
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Renamed player %s to %s", player_id, player_name)
            return affected > 0
        finally:
            conn.close()

    @classmethod
    async def get_match(cls, match_id: int) -> Optional[MatchRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                "SELECT match_id, match, year FROM match_details WHERE match_id = ?",
                (match_id,),
            ).fetchone()
            return MatchRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def list_player_matches(cls, player_id: int) -> List[MatchRead]:
        """Return every match the player has a score in."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT md.match_id, md.match, md.year
                FROM player_match_score pms
                JOIN match_details md ON pms.match_id = md.match_id
                WHERE pms.player_id = ?
                ORDER BY md.match_id
                """,
                (player_id,),
            ).fetchall()
            return [MatchRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_match_players(cls, match_id: int) -> List[PlayerRead]:
        """Return every player with a score in the match."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT pd.player_id, pd.player_name
                FROM player_match_score pms
                JOIN player_details pd ON pms.player_id = pd.player_id
                WHERE pms.match_id = ?
                ORDER BY pd.player_id
                """,
                (match_id,),
            ).fetchall()
            return [PlayerRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_player_scores(cls, player_id: int) -> Optional[PlayerScores]:
        """Total the score, fours and sixes of a player over all matches.

        Returns ``None`` for an unknown player and zero totals for a
        player without any recorded score.
        """
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                """
                SELECT pd.player_id, pd.player_name,
                       COALESCE(SUM(pms.score), 0) AS total_score,
                       COALESCE(SUM(pms.fours), 0) AS total_fours,
                       COALESCE(SUM(pms.sixes), 0) AS total_sixes
                FROM player_details pd
                LEFT JOIN player_match_score pms ON pms.player_id = pd.player_id
                WHERE pd.player_id = ?
                GROUP BY pd.player_id, pd.player_name
                """,
                (player_id,),
            ).fetchone()
            return PlayerScores.model_validate(dict(row)) if row else None
        finally:
            conn.close()
