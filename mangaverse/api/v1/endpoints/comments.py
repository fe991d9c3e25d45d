import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import (
    ChapterContentMismatch,
    ChapterNotFound,
    CommentNotFound,
    ContentNotFound,
    InsufficientPermissions,
)
from mangaverse.crud.chapter import crud_chapter
from mangaverse.crud.comment import crud_comment
from mangaverse.crud.content import crud_content
from mangaverse.models.user import User
from mangaverse.schemas.comment import CommentCreate, CommentResponse
from mangaverse.schemas.response import CreateResponse, DeleteResponse, Messages

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "", response_model=CreateResponse[CommentResponse], status_code=status.HTTP_201_CREATED
)
def create_comment(
    *,
    db: Session = Depends(get_db),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Comment on a content, or on one of its chapters.
    """
    if not crud_content.get(db, id=comment_in.content_id):
        raise ContentNotFound(comment_in.content_id)
    if comment_in.chapter_id is not None:
        chapter = crud_chapter.get(db, id=comment_in.chapter_id)
        if not chapter:
            raise ChapterNotFound(comment_in.chapter_id)
        if chapter.content_id != comment_in.content_id:
            raise ChapterContentMismatch(chapter.id, comment_in.content_id)

    comment = crud_comment.create(
        db,
        user_id=current_user.id,
        content_id=comment_in.content_id,
        chapter_id=comment_in.chapter_id,
        text=comment_in.text,
    )
    return CreateResponse(message=Messages.COMMENT_CREATED, data=comment)


@router.delete("/{comment_id}", response_model=DeleteResponse)
def delete_comment(
    *,
    db: Session = Depends(get_db),
    comment_id: int,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Delete a comment. Only its author or an admin may do this.
    """
    comment = crud_comment.get(db, id=comment_id)
    if not comment:
        raise CommentNotFound(comment_id)
    if comment.user_id != current_user.id and not current_user.is_admin:
        raise InsufficientPermissions()
    crud_comment.remove(db, id=comment_id)
    logger.info(f"User {current_user.id} deleted comment {comment_id}")
    return DeleteResponse(message=Messages.COMMENT_DELETED)
