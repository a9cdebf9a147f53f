"""
Cricket team roster endpoints (``cricket_team`` service).
"""

from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.schemas.cricket import TeamPlayerCreate, TeamPlayerRead, TeamPlayerUpdate
from crud_services_api.app.services.team_service import TeamService

PLAYER_NOT_FOUND = "Player Not Found"

router = APIRouter()


@router.get("/players/", response_model=List[TeamPlayerRead])
async def list_players() -> List[TeamPlayerRead]:
    return await TeamService.list_players()


@router.post("/players/", response_class=PlainTextResponse)
async def add_player(player: TeamPlayerCreate) -> str:
    await TeamService.add_player(player)
    return "Player Added to Team"


@router.get("/players/{player_id}/", response_model=TeamPlayerRead)
async def get_player(player_id: int) -> TeamPlayerRead:
    player = await TeamService.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return player


@router.put("/players/{player_id}/", response_class=PlainTextResponse)
async def update_player(player_id: int, updates: TeamPlayerUpdate) -> str:
    """Update a player; fields left out of the body keep their value."""
    if not await TeamService.update_player(player_id, updates):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return "Player Details Updated"


@router.delete("/players/{player_id}/", response_class=PlainTextResponse)
async def remove_player(player_id: int) -> str:
    if not await TeamService.remove_player(player_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PLAYER_NOT_FOUND)
    return "Player Removed"
