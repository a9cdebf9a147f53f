"""
User authentication endpoints (``auth`` service).

Provide registration, a credential check and password changes.
Passwords are stored hashed; the login endpoint only confirms the
credentials and does not issue a token.
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.schemas.user import PasswordChange, UserCreate, UserLogin
from crud_services_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_class=PlainTextResponse)
async def register_user(user: UserCreate) -> str:
    """Register a new user.

    Rejects an already taken username and passwords shorter than five
    characters with HTTP 400.
    """
    try:
        await UserService.create_user(user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return "User created successfully"


@router.post("/login", response_class=PlainTextResponse)
async def login_user(credentials: UserLogin) -> str:
    """Check a username and password."""
    try:
        await UserService.authenticate(credentials.username, credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return "Login success!"


@router.put("/change-password", response_class=PlainTextResponse)
async def change_password(body: PasswordChange) -> str:
    """Replace a user's password after verifying the current one."""
    try:
        await UserService.change_password(body.username, body.old_password, body.new_password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return "Password updated"
