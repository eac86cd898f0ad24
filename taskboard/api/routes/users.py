"""User management routes: delete (admin), update, list and avatar upload."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from taskboard.api.routes.auth import get_current_user, require_admin
from taskboard.core.config import get_settings
from taskboard.core.database import get_db
from taskboard.core.errors import BadRequestError
from taskboard.schemas.auth import CurrentUser
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.user import UserRead, UsersPage, UserUpdateRequest
from taskboard.services import users as user_service
from taskboard.services.avatars import is_allowed_avatar, remove_avatar, store_avatar

router = APIRouter()


@router.delete("/user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    """Delete a user (admin only). The user's refresh token and tasks go with it."""
    user_service.delete_user(db, user_id)
    return MessageResponse(message="User was successfully deleted")


# Left unauthenticated to match the existing public contract of this route.
@router.put("/users/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Update email, password and/or role; empty fields are ignored."""
    user = user_service.update_user(
        db, user_id, email=body.email, password=body.password, role=body.role
    )
    return UserRead.model_validate(user)


@router.get("/users", response_model=UsersPage)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    sort: str = "createdAt",
    role_filter: Annotated[str | None, Query(alias="roleFilter")] = None,
    email_filter: Annotated[str | None, Query(alias="emailFilter")] = None,
) -> UsersPage:
    """
    List users with filtering, sorting and pagination.

    - **sort**: one of email, role, createdAt, updatedAt (ascending)
    - **roleFilter**: exact role; a role nobody has yields an empty page
    - **emailFilter**: case-insensitive substring of the email
    """
    return user_service.get_all_users(
        db,
        page=page,
        limit=limit,
        sort=sort,
        role_filter=role_filter,
        email_filter=email_filter,
    )


@router.post("/users/{user_id}/avatar", response_model=UserRead)
def upload_avatar(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    avatar: Annotated[UploadFile | None, File()] = None,
) -> UserRead:
    """
    Upload an avatar image (multipart field `avatar`; JPEG, PNG or GIF).

    Files of any other type are ignored, which results in a 400.
    """
    if avatar is None or not is_allowed_avatar(avatar.content_type):
        raise BadRequestError("No file uploaded", error_code="FILE_NOT_UPLOADED")
    user_service.get_user(db, user_id)
    settings = get_settings()
    path = store_avatar(avatar.file.read(), avatar.filename, settings)
    try:
        user = user_service.update_user_image(db, user_id, path)
    except Exception:
        remove_avatar(path, settings)
        raise
    return UserRead.model_validate(user)
