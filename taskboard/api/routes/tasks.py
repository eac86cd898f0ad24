"""Task routes; every route requires a valid access token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskboard.api.routes.auth import get_current_user
from taskboard.core.database import get_db
from taskboard.schemas.auth import CurrentUser
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.task import TaskCreateRequest, TaskRead, TasksPage, TaskUpdateRequest
from taskboard.services import tasks as task_service

router = APIRouter(prefix="/tasks")


@router.post("", response_model=TaskRead)
def create_task(
    body: TaskCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskRead:
    """Create a task for an existing user (404 if the user does not exist)."""
    task = task_service.create_task(db, body.title, body.description, body.user_id)
    return TaskRead.model_validate(task)


@router.get("/user/{user_id}", response_model=TasksPage)
def list_user_tasks(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    sort: str = "createdAt",
    title_filter: Annotated[str | None, Query(alias="titleFilter")] = None,
) -> TasksPage:
    """
    List a user's tasks with filtering, sorting and pagination.

    - **sort**: one of title, description, createdAt, updatedAt (ascending)
    - **titleFilter**: case-insensitive substring of the title
    """
    return task_service.get_tasks_by_user(
        db,
        user_id,
        page=page,
        limit=limit,
        sort=sort,
        title_filter=title_filter,
    )


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TaskRead:
    task = task_service.update_task(
        db, task_id, title=body.title, description=body.description
    )
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    task_service.delete_task(db, task_id)
    return MessageResponse(message="Task was successfully deleted")
