"""Session tokens: JWT issuance/verification and the per-user refresh token store."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.config import settings as default_settings
from taskboard.core.errors import BadRequestError, InternalError
from taskboard.models import Token

if TYPE_CHECKING:
    from taskboard.core.config import Settings

logger = logging.getLogger(__name__)

# Claims every session token must carry.
PAYLOAD_CLAIMS = ("id", "email", "role")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _encode(payload: dict[str, Any], secret: str, expire_minutes: int, algorithm: str) -> str:
    now = datetime.now(UTC)
    claims = {
        **payload,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
        # Unique per token so a rotated pair never repeats the previous strings.
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def _decode(token: str, secret: str, algorithm: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError:
        return None


def generate_tokens(
    payload: dict[str, Any] | None,
    settings: "Settings | None" = None,
) -> TokenPair:
    """
    Issue an access/refresh pair carrying the same claims.

    The two tokens differ only by signing secret and expiry setting.
    Raises BadRequestError when payload is empty.
    """
    if not payload:
        raise BadRequestError(
            "Token payload is missing.", error_code="TOKEN_PAYLOAD_MISSING"
        )
    settings = settings or default_settings
    algorithm = settings.JWT_ALGORITHM
    access_token = _encode(
        payload,
        settings.JWT_ACCESS_SECRET.get_secret_value(),
        settings.JWT_ACCESS_EXPIRE_MINUTES,
        algorithm,
    )
    refresh_token = _encode(
        payload,
        settings.JWT_REFRESH_SECRET.get_secret_value(),
        settings.JWT_REFRESH_EXPIRE_MINUTES,
        algorithm,
    )
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


def validate_access_token(
    token: str, settings: "Settings | None" = None
) -> dict[str, Any] | None:
    """Return the decoded payload, or None if the token is malformed, expired or forged."""
    settings = settings or default_settings
    return _decode(
        token, settings.JWT_ACCESS_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )


def validate_refresh_token(
    token: str, settings: "Settings | None" = None
) -> dict[str, Any] | None:
    """Return the decoded payload, or None if the token is malformed, expired or forged."""
    settings = settings or default_settings
    return _decode(
        token, settings.JWT_REFRESH_SECRET.get_secret_value(), settings.JWT_ALGORITHM
    )


def save_token(db: Session, user_id: int, refresh_token: str) -> Token:
    """Store refresh_token as the user's only token, replacing any previous one."""
    if not refresh_token:
        raise BadRequestError(
            "Refresh token is missing.", error_code="TOKEN_MISSING"
        )
    row = db.query(Token).filter(Token.user_id == user_id).first()
    if row is not None:
        row.refresh_token = refresh_token
    else:
        row = Token(user_id=user_id, refresh_token=refresh_token)
        db.add(row)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted this user's row first; overwrite it.
        db.rollback()
        row = db.query(Token).filter(Token.user_id == user_id).first()
        if row is None:
            raise InternalError(
                "Failed to store the refresh token.", error_code="TOKEN_STORE_ERROR"
            )
        row.refresh_token = refresh_token
        db.commit()
    db.refresh(row)
    return row


def find_token(db: Session, refresh_token: str) -> list[Token]:
    """Return stored rows whose token equals refresh_token (at most one in practice)."""
    try:
        return db.query(Token).filter(Token.refresh_token == refresh_token).all()
    except SQLAlchemyError as e:
        logger.error("Token lookup failed: %s", e)
        raise InternalError(
            "Failed to look up the refresh token.", error_code="TOKEN_STORE_ERROR"
        ) from e
