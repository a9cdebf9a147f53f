"""
Business logic for COVID-19 state and district statistics.

The open ``covid`` service and the token protected ``covid_portal``
service expose the same queries against two different databases.
``PortalCovidService`` only switches the database.

Lookups return ``None`` (or ``False`` for mutations) when the row
does not exist; a district referring to an unknown state raises
``ValueError``.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_connection
from ..schemas.covid import (
    DistrictCreate,
    DistrictRead,
    DistrictUpdate,
    StateRead,
    StateStats,
)

INVALID_STATE = "Invalid state id"


class CovidService:
    """Service for states, districts and per-state totals."""

    database: str = "covid"

    @staticmethod
    def _state_exists(cursor: sqlite3.Cursor, state_id: int) -> bool:
        return cursor.execute("SELECT 1 FROM state WHERE state_id = ?", (state_id,)).fetchone() is not None

    @classmethod
    async def list_states(cls) -> List[StateRead]:
        """Return every state ordered by id."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                "SELECT state_id, state_name, population FROM state ORDER BY state_id"
            ).fetchall()
            return [StateRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_state(cls, state_id: int) -> Optional[StateRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                "SELECT state_id, state_name, population FROM state WHERE state_id = ?",
                (state_id,),
            ).fetchone()
            return StateRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def create_district(cls, data: DistrictCreate) -> int:
        """Insert a district and return its id.

        Raises ``ValueError`` if ``data.state_id`` names no state.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cls._state_exists(cursor, data.state_id):
                raise ValueError(INVALID_STATE)
            cursor.execute(
                """
                INSERT INTO district (district_name, state_id, cases, cured, active, deaths)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    data.district_name,
                    data.state_id,
                    data.cases,
                    data.cured,
                    data.active,
                    data.deaths,
                ),
            )
            district_id = cursor.lastrowid
            conn.commit()
            logger.info("Added district %s (%s) to %s", district_id, data.district_name, cls.database)
            return district_id
        finally:
            conn.close()

    @classmethod
    async def get_district(cls, district_id: int) -> Optional[DistrictRead]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                """
                SELECT district_id, district_name, state_id, cases, cured, active, deaths
                FROM district WHERE district_id = ?
                """,
                (district_id,),
            ).fetchone()
            return DistrictRead.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def update_district(cls, district_id: int, data: DistrictUpdate) -> bool:
        """Update the provided fields of a district.

        Returns ``False`` if the district does not exist.  Raises
        ``ValueError`` when moving the district to an unknown state.
        """
        logger = logging.getLogger(__name__)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cursor.execute(
                "SELECT 1 FROM district WHERE district_id = ?", (district_id,)
            ).fetchone():
                return False
            if "state_id" in updates and not cls._state_exists(cursor, updates["state_id"]):
                raise ValueError(INVALID_STATE)
            if updates:
                # Keys come from DistrictUpdate's fields, never from the client
                assignments = ", ".join(f"{column} = ?" for column in updates)
                cursor.execute(
                    f"UPDATE district SET {assignments} WHERE district_id = ?",
                    (*updates.values(), district_id),
                )
                conn.commit()
                logger.info("Updated district %s in %s: %s", district_id, cls.database, sorted(updates))
            return True
        finally:
            conn.close()

    @classmethod
    async def delete_district(cls, district_id: int) -> bool:
        """Delete a district.  Returns ``True`` if a row was removed."""
        logger = logging.getLogger(__name__)
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM district WHERE district_id = ?", (district_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Removed district %s from %s", district_id, cls.database)
            return affected > 0
        finally:
            conn.close()

    @classmethod
    async def get_state_stats(cls, state_id: int) -> Optional[StateStats]:
        """Sum cases, cured, active and deaths over a state's districts.

        A state without districts reports zero for every total.
        Returns ``None`` for an unknown state.
        """
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if not cls._state_exists(cursor, state_id):
                return None
            row = cursor.execute(
                """
                SELECT COALESCE(SUM(cases), 0) AS total_cases,
                       COALESCE(SUM(cured), 0) AS total_cured,
                       COALESCE(SUM(active), 0) AS total_active,
                       COALESCE(SUM(deaths), 0) AS total_deaths
                FROM district WHERE state_id = ?
                """,
                (state_id,),
            ).fetchone()
            return StateStats.model_validate(dict(row))
        finally:
            conn.close()

    @classmethod
    async def get_district_state_name(cls, district_id: int) -> Optional[str]:
        """Return the name of the state a district belongs to."""
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                """
                SELECT s.state_name
                FROM district d JOIN state s ON d.state_id = s.state_id
                WHERE d.district_id = ?
                """,
                (district_id,),
            ).fetchone()
            return row["state_name"] if row else None
        finally:
            conn.close()


class PortalCovidService(CovidService):
    """Same queries against the authenticated portal's database."""

    database = "covid_portal"
