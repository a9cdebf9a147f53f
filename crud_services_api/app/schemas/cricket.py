"""
Pydantic models for the two cricket services.

``player_stats`` exposes players, matches and aggregated scores from
the match details database.  ``cricket_team`` manages a single team
roster where each player carries a jersey number and a role.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class PlayerRead(CamelModel):
    player_id: int
    player_name: str


class PlayerNameUpdate(CamelModel):
    player_name: str = Field(..., min_length=1, examples=["Raju"])


class MatchRead(CamelModel):
    match_id: int
    match: str
    year: Optional[int] = None


class PlayerScores(CamelModel):
    player_id: int
    player_name: str
    total_score: int
    total_fours: int
    total_sixes: int


class TeamPlayerBase(CamelModel):
    player_name: str = Field(..., examples=["Vishal"])
    jersey_number: Optional[int] = Field(None, ge=0, examples=[17])
    role: Optional[str] = Field(None, examples=["Bowler"])


class TeamPlayerCreate(TeamPlayerBase):
    pass


class TeamPlayerRead(TeamPlayerBase):
    player_id: int


class TeamPlayerUpdate(CamelModel):
    """All fields are optional; only provided fields will be updated."""

    player_name: Optional[str] = None
    jersey_number: Optional[int] = Field(None, ge=0)
    role: Optional[str] = None
