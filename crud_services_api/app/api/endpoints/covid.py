"""
COVID-19 state and district endpoints (``covid`` service).

``build_router`` assembles the state/district routes for a given
service class so the token protected ``covid_portal`` service can
expose the same routes against its own database.
"""

from typing import List, Type

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.schemas.covid import (
    DistrictCreate,
    DistrictRead,
    DistrictStateName,
    DistrictUpdate,
    StateRead,
    StateStats,
)
from crud_services_api.app.services.covid_service import CovidService

STATE_NOT_FOUND = "State not found"
DISTRICT_NOT_FOUND = "District not found"


def build_router(service: Type[CovidService], include_details: bool = True) -> APIRouter:
    """Return a router exposing ``service``'s queries.

    ``include_details`` adds ``GET /districts/{districtId}/details/``,
    which only the open service offers.
    """
    router = APIRouter()

    @router.get("/states/", response_model=List[StateRead])
    async def list_states() -> List[StateRead]:
        return await service.list_states()

    @router.get("/states/{state_id}/", response_model=StateRead)
    async def get_state(state_id: int) -> StateRead:
        state = await service.get_state(state_id)
        if state is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=STATE_NOT_FOUND)
        return state

    @router.get("/states/{state_id}/stats/", response_model=StateStats)
    async def get_state_stats(state_id: int) -> StateStats:
        """Totals of cases, cured, active and deaths across the state's districts."""
        stats = await service.get_state_stats(state_id)
        if stats is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=STATE_NOT_FOUND)
        return stats

    @router.post("/districts/", response_class=PlainTextResponse)
    async def create_district(district: DistrictCreate) -> str:
        try:
            await service.create_district(district)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        return "District Successfully Added"

    @router.get("/districts/{district_id}/", response_model=DistrictRead)
    async def get_district(district_id: int) -> DistrictRead:
        district = await service.get_district(district_id)
        if district is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DISTRICT_NOT_FOUND)
        return district

    @router.put("/districts/{district_id}/", response_class=PlainTextResponse)
    async def update_district(district_id: int, updates: DistrictUpdate) -> str:
        """Update a district.

        Partial updates are supported; any unspecified fields remain
        unchanged.
        """
        try:
            updated = await service.update_district(district_id, updates)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DISTRICT_NOT_FOUND)
        return "District Details Updated"

    @router.delete("/districts/{district_id}/", response_class=PlainTextResponse)
    async def delete_district(district_id: int) -> str:
        if not await service.delete_district(district_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DISTRICT_NOT_FOUND)
        return "District Removed"

    if include_details:

        @router.get("/districts/{district_id}/details/", response_model=DistrictStateName)
        async def get_district_state(district_id: int) -> DistrictStateName:
            """Name of the state the district belongs to."""
            state_name = await service.get_district_state_name(district_id)
            if state_name is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DISTRICT_NOT_FOUND)
            return DistrictStateName(state_name=state_name)

    return router


router = build_router(CovidService)
