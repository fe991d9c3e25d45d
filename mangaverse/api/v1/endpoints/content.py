import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mangaverse.api.deps import get_storage
from mangaverse.core.auth import get_current_admin_user, get_current_user_optional
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import (
    AuthorNotFound,
    ContentNotFound,
    GenreNotFound,
    TranslationGroupNotFound,
)
from mangaverse.core.settings import settings
from mangaverse.crud.catalog import crud_author, crud_genre, crud_translation_group
from mangaverse.crud.comment import crud_comment
from mangaverse.crud.content import crud_content
from mangaverse.models.content import ContentStatus, ContentType
from mangaverse.models.user import User
from mangaverse.schemas.chapter import (
    ChapterCreate,
    ChapterListItem,
    ChapterResponse,
    ChapterView,
)
from mangaverse.schemas.comment import CommentResponse
from mangaverse.schemas.content import (
    ContentCreate,
    ContentDetail,
    ContentResponse,
    ContentTypeResponse,
    ContentUpdate,
)
from mangaverse.schemas.response import (
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
    pagination_meta,
)
from mangaverse.services.access_gate import open_chapter
from mangaverse.services.chapter_admin import create_chapter
from mangaverse.services.resolution import (
    ByContentNumber,
    ByTitleNumber,
    find_content_by_title,
    resolve_chapter,
)
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)

router = APIRouter()

SortBy = Query(
    "newest",
    pattern="^(newest|oldest|az|za|popularity)$",
    description="newest, oldest, az, za or popularity",
)


def _check_references(
    db: Session,
    *,
    author_id: Optional[int],
    translation_group_id: Optional[int],
    genre_ids: Optional[List[int]],
) -> None:
    if author_id is not None and not crud_author.get(db, id=author_id):
        raise AuthorNotFound(author_id)
    if translation_group_id is not None and not crud_translation_group.get(
        db, id=translation_group_id
    ):
        raise TranslationGroupNotFound(translation_group_id)
    if genre_ids:
        found = {genre.id for genre in crud_genre.get_many(db, ids=genre_ids)}
        missing = [genre_id for genre_id in genre_ids if genre_id not in found]
        if missing:
            raise GenreNotFound(missing[0])


def _chapter_message(view: ChapterView) -> str:
    return Messages.CHAPTER_RETRIEVED if view.is_unlocked else Messages.CHAPTER_LOCKED


def _detail(db: Session, storage: ReaderStorage, content_id: int) -> ContentDetail:
    # Every detail fetch counts as a view
    storage.increment_content_views(content_id)
    storage.commit()
    content = crud_content.get_with_details(db, id=content_id)
    return ContentDetail.model_validate(content)


@router.get("", response_model=ListResponse[ContentResponse])
def read_contents(
    db: Session = Depends(get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    content_type: Optional[ContentType] = Query(None, alias="type", description="manga or novel"),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
) -> Any:
    """
    Retrieve contents, newest first.
    """
    type_value = content_type.value if content_type else None
    status_value = content_status.value if content_status else None
    contents = crud_content.get_multi_with_filters(
        db, skip=skip, limit=limit, type=type_value, status=status_value
    )
    total = crud_content.count_with_filters(db, type=type_value, status=status_value)
    return ListResponse(
        message=Messages.CONTENTS_RETRIEVED,
        data=contents,
        meta=pagination_meta(total, skip, limit),
    )


@router.get("/search", response_model=ListResponse[ContentResponse])
def search_contents(
    db: Session = Depends(get_db),
    q: str = Query(..., min_length=1, description="Title or alternative title"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Any:
    """
    Search contents by title.
    """
    contents = crud_content.search(db, query=q, skip=skip, limit=limit)
    return ListResponse(message=Messages.CONTENTS_RETRIEVED, data=contents)


@router.get("/search/advanced", response_model=ListResponse[ContentResponse])
def advanced_search(
    db: Session = Depends(get_db),
    title: Optional[str] = Query(None),
    content_type: Optional[ContentType] = Query(None, alias="type"),
    content_status: Optional[ContentStatus] = Query(None, alias="status"),
    genre_ids: Optional[List[int]] = Query(
        None, description="Every listed genre must match"
    ),
    sort_by: str = SortBy,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Any:
    """
    Search contents by title, type, status and genres.
    """
    contents, total = crud_content.search_advanced(
        db,
        title=title,
        type=content_type.value if content_type else None,
        status=content_status.value if content_status else None,
        genre_ids=genre_ids,
        sort_by=sort_by,
        skip=skip,
        limit=limit,
    )
    return ListResponse(
        message=Messages.CONTENTS_RETRIEVED,
        data=contents,
        meta=pagination_meta(total, skip, limit),
    )


@router.get("/by-title/{title}", response_model=SuccessResponse[ContentDetail])
def read_content_by_title(
    title: str,
    db: Session = Depends(get_db),
    storage: ReaderStorage = Depends(get_storage),
) -> Any:
    """
    Get a content by exact title or by its slug.
    """
    content = find_content_by_title(storage, title)
    if content is None:
        raise ContentNotFound(title=title)
    return SuccessResponse(
        message=Messages.CONTENT_RETRIEVED, data=_detail(db, storage, content.id)
    )


@router.get(
    "/by-title/{title}/chapter/{number}", response_model=SuccessResponse[ChapterView]
)
def read_chapter_by_title(
    title: str,
    number: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> Any:
    """
    Read a chapter addressed by content title and chapter number.
    """
    resolved = resolve_chapter(storage, ByTitleNumber(title=title, number=number))
    view = open_chapter(storage, resolved, current_user)
    return SuccessResponse(message=_chapter_message(view), data=view)


@router.get("/{content_id}", response_model=SuccessResponse[ContentDetail])
def read_content(
    content_id: int,
    db: Session = Depends(get_db),
    storage: ReaderStorage = Depends(get_storage),
) -> Any:
    """
    Get content details with author, translation group, genres and chapters.
    """
    if storage.get_content(content_id) is None:
        raise ContentNotFound(content_id)
    return SuccessResponse(
        message=Messages.CONTENT_RETRIEVED, data=_detail(db, storage, content_id)
    )


@router.get("/{content_id}/type", response_model=SuccessResponse[ContentTypeResponse])
def read_content_type(content_id: int, db: Session = Depends(get_db)) -> Any:
    content = crud_content.get(db, id=content_id)
    if not content:
        raise ContentNotFound(content_id)
    return SuccessResponse(
        message=Messages.CONTENT_RETRIEVED,
        data=ContentTypeResponse(id=content.id, type=content.type),
    )


@router.post(
    "",
    response_model=CreateResponse[ContentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_content(
    *,
    db: Session = Depends(get_db),
    content_in: ContentCreate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Create new content (Admin only).
    """
    _check_references(
        db,
        author_id=content_in.author_id,
        translation_group_id=content_in.translation_group_id,
        genre_ids=content_in.genre_ids,
    )
    content = crud_content.create(db, obj_in=content_in)
    return CreateResponse(message=Messages.CONTENT_CREATED, data=content)


@router.put("/{content_id}", response_model=UpdateResponse[ContentResponse])
@router.patch("/{content_id}", response_model=UpdateResponse[ContentResponse])
def update_content(
    *,
    db: Session = Depends(get_db),
    content_id: int,
    content_in: ContentUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Update content, optionally replacing its genres (Admin only).
    """
    content = crud_content.get(db, id=content_id)
    if not content:
        raise ContentNotFound(content_id)

    _check_references(
        db,
        author_id=content_in.author_id,
        translation_group_id=content_in.translation_group_id,
        genre_ids=content_in.genre_ids,
    )
    content = crud_content.update(db, db_obj=content, obj_in=content_in)
    logger.info(f"Admin {current_user.id} updated content {content_id}")
    return UpdateResponse(message=Messages.CONTENT_UPDATED, data=content)


@router.delete("/{content_id}", response_model=DeleteResponse)
def delete_content(
    *,
    db: Session = Depends(get_db),
    content_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete content together with its chapters, genre links, favorites,
    comments and reading history (Admin only).
    """
    content = crud_content.get(db, id=content_id)
    if not content:
        raise ContentNotFound(content_id)
    crud_content.remove(db, id=content_id)
    logger.info(f"Admin {current_user.id} deleted content {content_id}")
    return DeleteResponse(message=Messages.CONTENT_DELETED)


@router.get("/{content_id}/chapters", response_model=ListResponse[ChapterListItem])
def read_content_chapters(
    content_id: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> Any:
    """
    List chapters by number, each flagged with whether the caller can read it.
    """
    if storage.get_content(content_id) is None:
        raise ContentNotFound(content_id)

    unlocked = (
        storage.unlocked_chapter_ids(current_user.id, content_id)
        if current_user
        else set()
    )
    items = [
        ChapterListItem(
            **ChapterResponse.model_validate(chapter).model_dump(),
            is_unlocked=not chapter.is_locked or chapter.id in unlocked,
        )
        for chapter in storage.list_chapters(content_id)
    ]
    return ListResponse(
        message=Messages.CHAPTERS_RETRIEVED, data=items, meta={"total": len(items)}
    )


@router.post(
    "/{content_id}/chapters",
    response_model=CreateResponse[ChapterResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_content_chapter(
    *,
    db: Session = Depends(get_db),
    content_id: int,
    chapter_in: ChapterCreate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Add a chapter to a content (Admin only).

    Without an explicit number the chapter gets the next number after the
    current highest.
    """
    content = crud_content.get(db, id=content_id)
    if not content:
        raise ContentNotFound(content_id)
    chapter = create_chapter(db, content, chapter_in)
    return CreateResponse(message=Messages.CHAPTER_CREATED, data=chapter)


@router.get(
    "/{content_id}/chapter-by-number/{number}",
    response_model=SuccessResponse[ChapterView],
)
def read_chapter_by_number(
    content_id: int,
    number: int,
    storage: ReaderStorage = Depends(get_storage),
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> Any:
    """
    Read a chapter addressed by content id and chapter number.
    """
    resolved = resolve_chapter(storage, ByContentNumber(content_id=content_id, number=number))
    view = open_chapter(storage, resolved, current_user)
    return SuccessResponse(message=_chapter_message(view), data=view)


@router.get("/{content_id}/comments", response_model=ListResponse[CommentResponse])
def read_content_comments(content_id: int, db: Session = Depends(get_db)) -> Any:
    """
    Comments on a content and its chapters, newest first.
    """
    if not crud_content.get(db, id=content_id):
        raise ContentNotFound(content_id)
    comments = crud_comment.get_by_content(db, content_id=content_id)
    return ListResponse(message=Messages.COMMENTS_RETRIEVED, data=comments)
