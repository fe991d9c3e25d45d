import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_admin_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import AuthorNotFound, ResourceInUse
from mangaverse.core.settings import settings
from mangaverse.crud.catalog import crud_author
from mangaverse.models.user import User
from mangaverse.schemas.catalog import AuthorCreate, AuthorResponse, AuthorUpdate
from mangaverse.schemas.response import (
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
    pagination_meta,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ListResponse[AuthorResponse])
def read_authors(
    db: Session = Depends(get_db),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.MAX_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Search by author name"),
) -> Any:
    """
    Retrieve authors.
    """
    if search:
        authors = crud_author.search_by_name(db, name=search, skip=skip, limit=limit)
        return ListResponse(message=Messages.AUTHORS_RETRIEVED, data=authors)

    authors = crud_author.get_multi(db, skip=skip, limit=limit)
    total = crud_author.count(db)
    return ListResponse(
        message=Messages.AUTHORS_RETRIEVED,
        data=authors,
        meta=pagination_meta(total, skip, limit),
    )


@router.get("/{author_id}", response_model=SuccessResponse[AuthorResponse])
def read_author(author_id: int, db: Session = Depends(get_db)) -> Any:
    author = crud_author.get(db, id=author_id)
    if not author:
        raise AuthorNotFound(author_id)
    return SuccessResponse(data=author)


@router.post(
    "", response_model=CreateResponse[AuthorResponse], status_code=status.HTTP_201_CREATED
)
def create_author(
    *,
    db: Session = Depends(get_db),
    author_in: AuthorCreate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Create new author (Admin only).
    """
    author = crud_author.create(db, obj_in=author_in)
    return CreateResponse(message=Messages.AUTHOR_CREATED, data=author)


@router.put("/{author_id}", response_model=UpdateResponse[AuthorResponse])
@router.patch("/{author_id}", response_model=UpdateResponse[AuthorResponse])
def update_author(
    *,
    db: Session = Depends(get_db),
    author_id: int,
    author_in: AuthorUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    author = crud_author.get(db, id=author_id)
    if not author:
        raise AuthorNotFound(author_id)
    author = crud_author.update(db, db_obj=author, obj_in=author_in)
    return UpdateResponse(message=Messages.AUTHOR_UPDATED, data=author)


@router.delete("/{author_id}", response_model=DeleteResponse)
def delete_author(
    *,
    db: Session = Depends(get_db),
    author_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete an author without contents (Admin only).
    """
    author = crud_author.get(db, id=author_id)
    if not author:
        raise AuthorNotFound(author_id)
    if author.contents:
        raise ResourceInUse(
            f"Author {author_id} still has {len(author.contents)} contents"
        )
    crud_author.remove(db, id=author_id)
    logger.info(f"Admin {current_user.id} deleted author {author_id}")
    return DeleteResponse(message=Messages.AUTHOR_DELETED)
