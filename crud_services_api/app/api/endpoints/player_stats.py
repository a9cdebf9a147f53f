"""
Cricket match details endpoints (``player_stats`` service).

Players and matches are read-only except for renaming a player.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.schemas.cricket import MatchRead, PlayerNameUpdate, PlayerRead, PlayerScores
from crud_services_api.app.services.match_service import MatchService

PLAYER_NOT_FOUND = "Player not found"

router = APIRouter()


@router.get("/players/", response_model=List[PlayerRead])
async def list_players() -> List[PlayerRead]:
    return await MatchService.list_players()


@router.get("/players/{player_id}/", response_model=PlayerRead)
async def get_player(player_id: int) -> PlayerRead:
    player = await MatchService.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return player


@router.put("/players/{player_id}/", response_class=PlainTextResponse)
async def update_player(player_id: int, body: PlayerNameUpdate) -> str:
    if not await MatchService.rename_player(player_id, body.player_name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return "Player Details Updated"


@router.get("/matches/{match_id}/", response_model=MatchRead)
async def get_match(match_id: int) -> MatchRead:
    match = await MatchService.get_match(match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return match


@router.get("/players/{player_id}/matches", response_model=List[MatchRead])
async def list_player_matches(player_id: int) -> List[MatchRead]:
    """Matches the player has played."""
    return await MatchService.list_player_matches(player_id)


@router.get("/matches/{match_id}/players", response_model=List[PlayerRead])
async def list_match_players(match_id: int) -> List[PlayerRead]:
    """Players who played in the match."""
    return await MatchService.list_match_players(match_id)


@router.get("/players/{player_id}/playerScores", response_model=PlayerScores)
async def get_player_scores(player_id: int) -> PlayerScores:
    """Total score, fours and sixes of a player over all matches."""
    scores = await MatchService.get_player_scores(player_id)
    if scores is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return scores
