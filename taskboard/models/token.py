"""ORM model for persisted refresh tokens (one row per user)."""

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, TimestampMixin


class Token(TimestampMixin, Base):
    """Current refresh token of a user; rotation overwrites refresh_token in place."""

    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    refresh_token = Column(Text, nullable=False, unique=True)

    user = relationship("User", back_populates="token")
