"""Registration, login and token refresh (session lifecycle)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from taskboard.core.security import (
    VALID_ROLES,
    hash_password,
    is_valid_email,
    is_valid_password,
    is_valid_role,
    verify_password,
)
from taskboard.models import User
from taskboard.schemas.auth import AuthResponse, UserDto
from taskboard.services import tokens

logger = logging.getLogger(__name__)


def validate_credentials(email: str | None, password: str | None, role: str | None) -> None:
    """Reject missing fields, malformed email, bad password length or unknown role (400)."""
    if not email or not password or not role:
        raise BadRequestError(
            "Email, password and role must not be empty.", error_code="MISSING_FIELDS"
        )
    if not is_valid_email(email):
        raise BadRequestError("Invalid email format.", error_code="INVALID_EMAIL")
    if not is_valid_password(password):
        raise BadRequestError(
            "Password must be between 8 and 128 characters.",
            error_code="INVALID_PASSWORD",
        )
    if not is_valid_role(role):
        raise BadRequestError(
            f"Role must be one of: {', '.join(VALID_ROLES)}.",
            error_code="INVALID_ROLE",
        )


def _issue_session(db: Session, user: User) -> AuthResponse:
    """Issue a fresh token pair for user and persist its refresh token."""
    user_dto = UserDto(id=user.id, email=user.email, role=user.role)
    pair = tokens.generate_tokens(user_dto.model_dump())
    tokens.save_token(db, user_dto.id, pair.refresh_token)
    return AuthResponse(
        user=user_dto,
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


def registration(
    db: Session, email: str | None, password: str | None, role: str | None
) -> AuthResponse:
    """
    Create a user and open a session for it.

    An email that is already taken is a 400; the message tells apart a
    conflict with the same role from one with a different role.
    """
    validate_credentials(email, password, role)

    existing = db.query(User).filter(User.email == email).first()
    if existing is not None:
        if existing.role != role:
            raise BadRequestError(
                f"User with email {email} is already registered with a different role: {existing.role}",
                error_code="USER_ALREADY_EXISTS",
            )
        raise BadRequestError(
            f"User with email {email} already exists",
            error_code="USER_ALREADY_EXISTS",
        )

    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise BadRequestError(
            f"User with email {email} already exists",
            error_code="USER_ALREADY_EXISTS",
        ) from e
    db.refresh(user)
    logger.info("User registered: id=%s role=%s", user.id, user.role)
    return _issue_session(db, user)


def login(
    db: Session, email: str | None, password: str | None, role: str | None
) -> AuthResponse:
    """
    Authenticate by (email, role) and password.

    The lookup uses the exact (email, role) pair, so an existing email
    registered under another role is reported as not found (404).
    """
    validate_credentials(email, password, role)

    user = db.query(User).filter(User.email == email, User.role == role).first()
    if user is None:
        raise NotFoundError("User not found", error_code="USER_NOT_FOUND")
    if not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid password", error_code="INVALID_CREDENTIALS")

    logger.info("User logged in: id=%s", user.id)
    return _issue_session(db, user)


def refresh(db: Session, refresh_token: str | None) -> AuthResponse:
    """Rotate the session: the token must verify AND match the stored row."""
    if not refresh_token:
        raise UnauthorizedError("User is not authorized", error_code="UNAUTHORIZED")

    payload = tokens.validate_refresh_token(refresh_token)
    stored = tokens.find_token(db, refresh_token)
    if not payload or not stored or payload.get("id") is None:
        raise UnauthorizedError("User is not authorized", error_code="UNAUTHORIZED")

    user = db.get(User, payload.get("id"))
    if user is None:
        raise NotFoundError("User not found", error_code="USER_NOT_FOUND")

    logger.info("Session refreshed: user_id=%s", user.id)
    return _issue_session(db, user)
