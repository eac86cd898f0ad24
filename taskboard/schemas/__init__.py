"""Pydantic request/response schemas."""

from taskboard.schemas.auth import AuthResponse, CredentialsRequest, CurrentUser, UserDto
from taskboard.schemas.common import ErrorResponse, MessageResponse
from taskboard.schemas.health import HealthResponse
from taskboard.schemas.task import TaskCreateRequest, TaskRead, TasksPage, TaskUpdateRequest
from taskboard.schemas.user import UserRead, UsersPage, UserUpdateRequest

__all__ = [
    "AuthResponse",
    "CredentialsRequest",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "TaskCreateRequest",
    "TaskRead",
    "TaskUpdateRequest",
    "TasksPage",
    "UserDto",
    "UserRead",
    "UserUpdateRequest",
    "UsersPage",
]
