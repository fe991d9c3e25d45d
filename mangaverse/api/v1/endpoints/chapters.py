import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mangaverse.api.deps import get_storage
from mangaverse.core.auth import get_current_admin_user, get_current_user_optional
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import ChapterNotFound
from mangaverse.crud.chapter import crud_chapter
from mangaverse.crud.comment import crud_comment
from mangaverse.models.user import User
from mangaverse.schemas.chapter import (
    ChapterContentReplace,
    ChapterLockUpdate,
    ChapterResponse,
    ChapterUpdate,
    ChapterView,
    UnlockResult,
)
from mangaverse.schemas.comment import CommentResponse
from mangaverse.schemas.response import (
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)
from mangaverse.services.access_gate import open_chapter
from mangaverse.services.chapter_admin import replace_chapter_content, update_chapter
from mangaverse.services.resolution import ById, resolve_chapter
from mangaverse.services.unlock import UnlockService
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{chapter_id}", response_model=SuccessResponse[ChapterView])
def read_chapter(
    chapter_id: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> Any:
    """
    Read a chapter. Locked chapters come back without content.
    """
    resolved = resolve_chapter(storage, ById(chapter_id))
    view = open_chapter(storage, resolved, current_user)
    message = Messages.CHAPTER_RETRIEVED if view.is_unlocked else Messages.CHAPTER_LOCKED
    return SuccessResponse(message=message, data=view)


@router.post("/{chapter_id}/unlock", response_model=SuccessResponse[UnlockResult])
def unlock_chapter(
    chapter_id: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> Any:
    """
    Spend coins to unlock a chapter.
    """
    result = UnlockService(storage).unlock(current_user, chapter_id)
    return SuccessResponse(message=Messages.CHAPTER_UNLOCKED, data=result)


@router.patch("/{chapter_id}/lock", response_model=UpdateResponse[ChapterResponse])
def update_chapter_lock(
    *,
    db: Session = Depends(get_db),
    chapter_id: int,
    lock_in: ChapterLockUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Lock or unlock a chapter (Admin only). Locking needs a positive price.
    """
    chapter = crud_chapter.get(db, id=chapter_id)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    chapter = update_chapter(db, chapter, lock_in.model_dump(exclude_unset=True))
    return UpdateResponse(message=Messages.CHAPTER_LOCK_UPDATED, data=chapter)


@router.put("/{chapter_id}", response_model=UpdateResponse[ChapterResponse])
@router.patch("/{chapter_id}", response_model=UpdateResponse[ChapterResponse])
def edit_chapter(
    *,
    db: Session = Depends(get_db),
    chapter_id: int,
    chapter_in: ChapterUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Update a chapter's number, title, release date or lock (Admin only).
    """
    chapter = crud_chapter.get(db, id=chapter_id)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    chapter = update_chapter(db, chapter, chapter_in.model_dump(exclude_unset=True))
    return UpdateResponse(message=Messages.CHAPTER_UPDATED, data=chapter)


@router.delete("/{chapter_id}", response_model=DeleteResponse)
def delete_chapter(
    *,
    db: Session = Depends(get_db),
    chapter_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a chapter and its content rows (Admin only).
    """
    chapter = crud_chapter.get(db, id=chapter_id)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    crud_chapter.remove(db, id=chapter_id)
    logger.info(f"Admin {current_user.id} deleted chapter {chapter_id}")
    return DeleteResponse(message=Messages.CHAPTER_DELETED)


@router.post("/{chapter_id}/content", response_model=UpdateResponse[ChapterResponse])
def replace_content(
    *,
    db: Session = Depends(get_db),
    chapter_id: int,
    body: ChapterContentReplace,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Replace a chapter's pages or text (Admin only).
    """
    chapter = crud_chapter.get(db, id=chapter_id)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    chapter = replace_chapter_content(
        db, chapter, chapter.parent.type, images=body.images, html=body.html
    )
    return UpdateResponse(message=Messages.CHAPTER_CONTENT_UPDATED, data=chapter)


@router.get("/{chapter_id}/comments", response_model=ListResponse[CommentResponse])
def read_chapter_comments(chapter_id: int, db: Session = Depends(get_db)) -> Any:
    if not crud_chapter.get(db, id=chapter_id):
        raise ChapterNotFound(chapter_id)
    comments = crud_comment.get_by_chapter(db, chapter_id=chapter_id)
    return ListResponse(message=Messages.COMMENTS_RETRIEVED, data=comments)
