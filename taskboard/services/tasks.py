"""Task CRUD scoped to owning users."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.errors import NotFoundError
from taskboard.models import Task, User
from taskboard.schemas.task import TaskRead, TasksPage
from taskboard.services.pagination import page_count, paginate, resolve_sort_column

logger = logging.getLogger(__name__)

TASK_SORT_COLUMNS = {
    "title": Task.title,
    "description": Task.description,
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
}


def _require_user(db: Session, user_id: int) -> None:
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found", error_code="USER_NOT_FOUND")


def _get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task not found", error_code="TASK_NOT_FOUND")
    return task


def create_task(
    db: Session, title: str, description: str | None, user_id: int
) -> Task:
    _require_user(db, user_id)
    task = Task(title=title, description=description, user_id=user_id)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task created: id=%s user_id=%s", task.id, user_id)
    return task


def get_tasks_by_user(
    db: Session,
    user_id: int,
    page: int = 1,
    limit: int = 10,
    sort: str = "createdAt",
    title_filter: str | None = None,
) -> TasksPage:
    """Page through one user's tasks; title_filter is a case-insensitive substring match."""
    sort_column = resolve_sort_column(sort, TASK_SORT_COLUMNS)
    _require_user(db, user_id)

    query = db.query(Task).filter(Task.user_id == user_id)
    if title_filter:
        query = query.filter(Task.title.ilike(f"%{title_filter}%"))
    query = query.order_by(sort_column.asc(), Task.id.asc())

    rows, total = paginate(query, page, limit)
    return TasksPage(
        tasks=[TaskRead.model_validate(t) for t in rows],
        total=total,
        total_pages=page_count(total, limit),
        current_page=page,
    )


def update_task(
    db: Session,
    task_id: int,
    title: str | None = None,
    description: str | None = None,
) -> Task:
    """Apply the non-empty fields only."""
    task = _get_task(db, task_id)
    if title:
        task.title = title
    if description:
        task.description = description
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> Task:
    task = _get_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("Task deleted: id=%s", task_id)
    return task
