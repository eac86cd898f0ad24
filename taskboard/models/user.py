"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'ADMIN' or 'USER'. avatar holds the relative path of the uploaded image.
    Deleting a user removes its refresh token row and its tasks.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="USER", index=True)
    avatar = Column(String(1024), nullable=True)

    token = relationship(
        "Token",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    tasks = relationship(
        "Task",
        back_populates="user",
        cascade="all, delete-orphan",
    )
