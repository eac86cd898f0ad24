"""User management: delete, update, avatar and filtered listing."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.errors import BadRequestError, NotFoundError
from taskboard.core.security import (
    VALID_ROLES,
    hash_password,
    is_valid_email,
    is_valid_password,
    is_valid_role,
)
from taskboard.models import User
from taskboard.schemas.user import UserRead, UsersPage
from taskboard.services.pagination import page_count, paginate, resolve_sort_column

logger = logging.getLogger(__name__)

USER_SORT_COLUMNS = {
    "email": User.email,
    "role": User.role,
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
}


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
    return user


def delete_user(db: Session, user_id: int) -> User:
    """Delete a user together with its refresh token and tasks."""
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User deleted: id=%s", user_id)
    return user


def update_user(
    db: Session,
    user_id: int,
    email: str | None = None,
    password: str | None = None,
    role: str | None = None,
) -> User:
    """Apply the non-empty fields after validating each; the email must stay unique."""
    user = get_user(db, user_id)

    if email:
        if not is_valid_email(email):
            raise BadRequestError("Invalid email format.", error_code="INVALID_EMAIL")
        taken = db.query(User).filter(User.email == email, User.id != user_id).first()
        if taken is not None:
            raise BadRequestError(
                f"User with email {email} already exists",
                error_code="USER_ALREADY_EXISTS",
            )
        user.email = email

    if password:
        if not is_valid_password(password):
            raise BadRequestError(
                "Password must be between 8 and 128 characters.",
                error_code="INVALID_PASSWORD",
            )
        user.password_hash = hash_password(password)

    if role:
        if not is_valid_role(role):
            raise BadRequestError(
                f"Role must be one of: {', '.join(VALID_ROLES)}.",
                error_code="INVALID_ROLE",
            )
        user.role = role

    db.commit()
    db.refresh(user)
    return user


def update_user_image(db: Session, user_id: int, avatar: str) -> User:
    user = get_user(db, user_id)
    if avatar:
        user.avatar = avatar
    db.commit()
    db.refresh(user)
    return user


def get_all_users(
    db: Session,
    page: int = 1,
    limit: int = 10,
    sort: str = "createdAt",
    role_filter: str | None = None,
    email_filter: str | None = None,
) -> UsersPage:
    """
    List users with optional role / email filters, ascending sort and paging.

    A role filter that matches no stored role yields an empty page rather
    than an error. The email filter is a case-insensitive substring match.
    """
    sort_column = resolve_sort_column(sort, USER_SORT_COLUMNS)

    if role_filter:
        known_roles = {role for (role,) in db.query(User.role).distinct().all()}
        if role_filter not in known_roles:
            return UsersPage(users=[], total=0, total_pages=0, current_page=page)

    query = db.query(User)
    if role_filter:
        query = query.filter(User.role == role_filter)
    if email_filter:
        query = query.filter(User.email.ilike(f"%{email_filter}%"))
    query = query.order_by(sort_column.asc(), User.id.asc())

    rows, total = paginate(query, page, limit)
    return UsersPage(
        users=[UserRead.model_validate(u) for u in rows],
        total=total,
        total_pages=page_count(total, limit),
        current_page=page,
    )
