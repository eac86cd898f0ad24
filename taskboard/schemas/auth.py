"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from taskboard.schemas.common import CamelModel


class CredentialsRequest(BaseModel):
    """Email, password and role for registration and login; checked by the auth service."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password (8-128 chars)")
    role: str | None = Field(default=None, description="ADMIN or USER")


class UserDto(CamelModel):
    """Public-safe projection of a user; also the claims embedded in tokens."""

    id: int
    email: str
    role: str


class AuthResponse(CamelModel):
    """Tokens and user returned after registration, login and refresh."""

    user: UserDto
    access_token: str = Field(..., description="JWT access token (Authorization: Bearer)")
    refresh_token: str = Field(..., description="JWT refresh token (also set as cookie)")


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) decoded from the access token."""

    id: int
    email: str
    role: str
