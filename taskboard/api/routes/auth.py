"""Registration, login, refresh and the auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.errors import ForbiddenError, UnauthorizedError
from taskboard.core.security import ROLE_ADMIN
from taskboard.schemas.auth import AuthResponse, CredentialsRequest, CurrentUser
from taskboard.services import auth as auth_service
from taskboard.services.tokens import PAYLOAD_CLAIMS, validate_access_token

REFRESH_COOKIE_NAME = "refreshToken"

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.JWT_REFRESH_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.REFRESH_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/registration", response_model=AuthResponse)
def registration(
    body: CredentialsRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Register a user and open a session.

    Returns the user, an access token and a refresh token; the refresh token
    is also set as an httpOnly `refreshToken` cookie valid for 30 days.
    """
    result = auth_service.registration(db, body.email, body.password, body.role)
    _set_refresh_cookie(response, result.refresh_token)
    return result


@router.post("/login", response_model=AuthResponse)
def login(
    body: CredentialsRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email, password and role.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    result = auth_service.login(db, body.email, body.password, body.role)
    _set_refresh_cookie(response, result.refresh_token)
    return result


@router.get("/refresh", response_model=AuthResponse)
def refresh(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    refresh_token: Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)] = None,
) -> AuthResponse:
    """Rotate the token pair using the `refreshToken` cookie."""
    if not refresh_token:
        raise UnauthorizedError(
            "Refresh token cookie not found", error_code="UNAUTHORIZED"
        )
    result = auth_service.refresh(db, refresh_token)
    _set_refresh_cookie(response, result.refresh_token)
    return result


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer access token and return its claims.

    Only the signature and expiry are checked; the token store is not consulted.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("User is not authorized", error_code="UNAUTHORIZED")
    payload = validate_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid token", error_code="INVALID_TOKEN")
    if any(payload.get(claim) is None for claim in PAYLOAD_CLAIMS):
        raise UnauthorizedError("Invalid token", error_code="INVALID_TOKEN")
    try:
        return CurrentUser(
            id=payload["id"], email=payload["email"], role=payload["role"]
        )
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token", error_code="INVALID_TOKEN")


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user with role ADMIN. Raises 403 otherwise."""
    if current_user.role != ROLE_ADMIN:
        raise ForbiddenError(
            "Access denied: administrator role required", error_code="FORBIDDEN"
        )
    return current_user
