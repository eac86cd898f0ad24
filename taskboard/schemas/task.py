"""Request/response schemas for task endpoints."""

from datetime import datetime

from pydantic import Field

from taskboard.schemas.common import CamelModel

TITLE_MAX_LENGTH = 255


class TaskCreateRequest(CamelModel):
    """New task for an existing user."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    user_id: int


class TaskUpdateRequest(CamelModel):
    """Partial task update; empty or missing fields are left unchanged."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: str | None = None


class TaskRead(CamelModel):
    id: int
    title: str
    description: str | None = None
    user_id: int
    created_at: datetime
    updated_at: datetime


class TasksPage(CamelModel):
    """One page of a user's tasks with pagination metadata."""

    tasks: list[TaskRead] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    current_page: int
