"""
Pydantic models for user accounts.

The ``auth`` and ``covid_portal`` services keep a ``location`` for
each user; the ``twitter`` service does not.  Passwords are only ever
accepted, never returned.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserCreate(CamelModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=1, examples=["adam_richard"])
    name: Optional[str] = Field(None, examples=["Adam Richard"])
    password: str = Field(..., examples=["richard_567"])
    gender: Optional[str] = Field(None, examples=["male"])
    location: Optional[str] = Field(None, examples=["Detroit"])


class TwitterUserCreate(CamelModel):
    """Schema for registering a Twitter clone user."""

    username: str = Field(..., min_length=1, examples=["adam_richard"])
    password: str = Field(..., examples=["richard_567"])
    name: Optional[str] = Field(None, examples=["Adam Richard"])
    gender: Optional[str] = Field(None, examples=["male"])


class UserLogin(CamelModel):
    username: str
    password: str


class PasswordChange(CamelModel):
    """Schema for ``PUT /change-password``.

    Sent as ``{"username", "oldPassword", "newPassword"}``.
    """

    username: str
    old_password: str
    new_password: str


class TokenResponse(CamelModel):
    """Body returned by token issuing login endpoints."""

    jwt_token: str
