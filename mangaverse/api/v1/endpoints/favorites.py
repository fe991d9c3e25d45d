from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import ContentNotFound
from mangaverse.crud.content import crud_content
from mangaverse.crud.favorite import crud_favorite
from mangaverse.models.user import User
from mangaverse.schemas.reading import FavoriteResponse, FavoriteToggle
from mangaverse.schemas.response import ListResponse, Messages, SuccessResponse

router = APIRouter()


@router.get("", response_model=ListResponse[FavoriteResponse])
def read_favorites(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Get current user's favorite contents.
    """
    favorites = crud_favorite.get_by_user(db, user_id=current_user.id)
    return ListResponse(message=Messages.FAVORITES_RETRIEVED, data=favorites)


@router.post("/{content_id}", response_model=SuccessResponse[FavoriteToggle])
def toggle_favorite(
    *,
    db: Session = Depends(get_db),
    content_id: int,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Add a content to favorites, or remove it if it is already there.
    """
    if not crud_content.get(db, id=content_id):
        raise ContentNotFound(content_id)
    added = crud_favorite.toggle(db, user_id=current_user.id, content_id=content_id)
    return SuccessResponse(
        message=Messages.FAVORITE_ADDED if added else Messages.FAVORITE_REMOVED,
        data=FavoriteToggle(content_id=content_id, added=added),
    )
