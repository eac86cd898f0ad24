"""Request/response schemas for user management endpoints."""

from datetime import datetime

from pydantic import Field

from taskboard.schemas.common import CamelModel


class UserRead(CamelModel):
    """User as returned by the API (no password hash)."""

    id: int
    email: str
    role: str
    avatar: str | None = None
    created_at: datetime
    updated_at: datetime


class UserUpdateRequest(CamelModel):
    """Partial user update; empty or missing fields are left unchanged."""

    email: str | None = None
    password: str | None = None
    role: str | None = None


class UsersPage(CamelModel):
    """One page of users with pagination metadata."""

    users: list[UserRead] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    current_page: int
