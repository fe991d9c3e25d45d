import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from mangaverse.api.deps import get_storage
from mangaverse.core.auth import get_current_admin_user, get_current_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import ContentNotFound, DuplicateUser, UserNotFound
from mangaverse.core.settings import settings
from mangaverse.crud.user import crud_user
from mangaverse.models.user import User
from mangaverse.schemas.chapter import UnlockedChapterIds
from mangaverse.schemas.response import (
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
    pagination_meta,
)
from mangaverse.schemas.user import UserResponse, UserUpdate
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/user", response_model=SuccessResponse[UserResponse])
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    """
    Get the signed-in user, including the coin balance.
    """
    return SuccessResponse(message=Messages.USER_RETRIEVED, data=current_user)


@router.get(
    "/user/unlocked-chapters/{content_id}",
    response_model=SuccessResponse[UnlockedChapterIds],
)
def read_unlocked_chapters(
    content_id: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Ids of the chapters of a content the user has unlocked.
    """
    if storage.get_content(content_id) is None:
        raise ContentNotFound(content_id)
    chapter_ids = sorted(storage.unlocked_chapter_ids(current_user.id, content_id))
    return SuccessResponse(
        message=Messages.UNLOCKED_CHAPTERS_RETRIEVED,
        data=UnlockedChapterIds(content_id=content_id, chapter_ids=chapter_ids),
    )


@router.get("/users", response_model=ListResponse[UserResponse])
def read_users(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = Query(default=settings.MAX_PAGE_SIZE, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Retrieve users (Admin only).
    """
    users = crud_user.get_multi(db, skip=skip, limit=limit)
    total = crud_user.count(db)
    return ListResponse(
        message=Messages.USERS_RETRIEVED,
        data=users,
        meta=pagination_meta(total, skip, limit),
    )


@router.get("/users/{user_id}", response_model=SuccessResponse[UserResponse])
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    user = crud_user.get(db, id=user_id)
    if not user:
        raise UserNotFound(user_id)
    return SuccessResponse(message=Messages.USER_RETRIEVED, data=user)


@router.patch("/users/{user_id}", response_model=UpdateResponse[UserResponse])
def update_user(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Update a user's role, balance, status or profile (Admin only).
    """
    user = crud_user.get(db, id=user_id)
    if not user:
        raise UserNotFound(user_id)

    if user_in.email and user_in.email != user.email:
        if crud_user.get_by_email(db, email=user_in.email):
            raise DuplicateUser("email")

    user = crud_user.update(db, db_obj=user, obj_in=user_in)
    logger.info(f"Admin {current_user.id} updated user {user_id}")
    return UpdateResponse(message=Messages.USER_UPDATED, data=user)


@router.delete("/users/{user_id}", response_model=DeleteResponse)
def delete_user(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a user (Admin only).
    """
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete themselves")
    user = crud_user.get(db, id=user_id)
    if not user:
        raise UserNotFound(user_id)
    crud_user.remove(db, id=user_id)
    logger.info(f"Admin {current_user.id} deleted user {user_id}")
    return DeleteResponse(message=Messages.USER_DELETED)
