"""
Authenticated COVID-19 portal endpoints (``covid_portal`` service).

``POST /login/`` exchanges a username and password for a token.
Every state and district route requires that token in the
``Authorization: Bearer <token>`` header.  Portal users are
provisioned with ``manage_users.py``; there is no registration route.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from crud_services_api.app.api.endpoints.covid import build_router
from crud_services_api.app.core.security import issue_token, require_token
from crud_services_api.app.schemas.user import TokenResponse, UserLogin
from crud_services_api.app.services.covid_service import PortalCovidService
from crud_services_api.app.services.user_service import PortalUserService

SERVICE = "covid_portal"

router = APIRouter()


@router.post("/login/", response_model=TokenResponse)
async def login(credentials: UserLogin) -> TokenResponse:
    """Authenticate a portal user and return a token."""
    try:
        await PortalUserService.authenticate(credentials.username, credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return TokenResponse(jwt_token=issue_token(credentials.username, SERVICE))


router.include_router(
    build_router(PortalCovidService, include_details=False),
    dependencies=[Depends(require_token(SERVICE))],
)
