"""SQLAlchemy ORM models."""

from taskboard.models.base import Base
from taskboard.models.task import Task
from taskboard.models.token import Token
from taskboard.models.user import User

__all__ = ["Base", "Task", "Token", "User"]
