from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import (
    ChapterContentMismatch,
    ChapterNotFound,
    ContentNotFound,
)
from mangaverse.core.settings import settings
from mangaverse.crud.chapter import crud_chapter
from mangaverse.crud.content import crud_content
from mangaverse.crud.reading_history import crud_reading_history
from mangaverse.models.user import User
from mangaverse.schemas.reading import ReadingHistoryCreate, ReadingHistoryResponse
from mangaverse.schemas.response import ListResponse, Messages, SuccessResponse

router = APIRouter()


@router.get("", response_model=ListResponse[ReadingHistoryResponse])
def read_reading_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    The latest chapter read per content, most recent first.
    """
    entries = crud_reading_history.get_by_user(
        db, user_id=current_user.id, limit=settings.READING_HISTORY_LIMIT
    )
    return ListResponse(message=Messages.READING_HISTORY_RETRIEVED, data=entries)


@router.post("", response_model=SuccessResponse[ReadingHistoryResponse])
def record_reading_history(
    *,
    db: Session = Depends(get_db),
    history_in: ReadingHistoryCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Record that the user read a chapter.
    """
    if not crud_content.get(db, id=history_in.content_id):
        raise ContentNotFound(history_in.content_id)
    chapter = crud_chapter.get(db, id=history_in.chapter_id)
    if not chapter:
        raise ChapterNotFound(history_in.chapter_id)
    if chapter.content_id != history_in.content_id:
        raise ChapterContentMismatch(chapter.id, history_in.content_id)

    entry = crud_reading_history.upsert(
        db,
        user_id=current_user.id,
        content_id=history_in.content_id,
        chapter_id=history_in.chapter_id,
    )
    db.commit()
    db.refresh(entry)
    return SuccessResponse(message=Messages.READING_HISTORY_RECORDED, data=entry)
