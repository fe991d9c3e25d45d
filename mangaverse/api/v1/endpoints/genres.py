import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mangaverse.core.auth import get_current_admin_user
from mangaverse.core.database import get_db
from mangaverse.core.exceptions import DuplicateGenre, GenreNotFound
from mangaverse.crud.catalog import crud_genre
from mangaverse.models.user import User
from mangaverse.schemas.catalog import GenreCreate, GenreResponse, GenreUpdate
from mangaverse.schemas.response import (
    CreateResponse,
    DeleteResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ListResponse[GenreResponse])
def read_genres(db: Session = Depends(get_db)) -> Any:
    """
    Retrieve all genres, sorted by name.
    """
    genres = crud_genre.get_multi(db, limit=1000)
    return ListResponse(message=Messages.GENRES_RETRIEVED, data=genres)


@router.get("/{genre_id}", response_model=SuccessResponse[GenreResponse])
def read_genre(genre_id: int, db: Session = Depends(get_db)) -> Any:
    genre = crud_genre.get(db, id=genre_id)
    if not genre:
        raise GenreNotFound(genre_id)
    return SuccessResponse(data=genre)


@router.post(
    "", response_model=CreateResponse[GenreResponse], status_code=status.HTTP_201_CREATED
)
def create_genre(
    *,
    db: Session = Depends(get_db),
    genre_in: GenreCreate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Create new genre (Admin only).
    """
    if crud_genre.get_by_name(db, name=genre_in.name):
        raise DuplicateGenre(genre_in.name)
    genre = crud_genre.create(db, obj_in=genre_in)
    logger.info(f"Admin {current_user.id} created genre '{genre.name}'")
    return CreateResponse(message=Messages.GENRE_CREATED, data=genre)


@router.put("/{genre_id}", response_model=UpdateResponse[GenreResponse])
@router.patch("/{genre_id}", response_model=UpdateResponse[GenreResponse])
def update_genre(
    *,
    db: Session = Depends(get_db),
    genre_id: int,
    genre_in: GenreUpdate,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    genre = crud_genre.get(db, id=genre_id)
    if not genre:
        raise GenreNotFound(genre_id)
    if genre_in.name and genre_in.name != genre.name:
        if crud_genre.get_by_name(db, name=genre_in.name):
            raise DuplicateGenre(genre_in.name)
    genre = crud_genre.update(db, db_obj=genre, obj_in=genre_in)
    return UpdateResponse(message=Messages.GENRE_UPDATED, data=genre)


@router.delete("/{genre_id}", response_model=DeleteResponse)
def delete_genre(
    *,
    db: Session = Depends(get_db),
    genre_id: int,
    current_user: User = Depends(get_current_admin_user),
) -> Any:
    """
    Delete a genre and detach it from every content (Admin only).
    """
    genre = crud_genre.get(db, id=genre_id)
    if not genre:
        raise GenreNotFound(genre_id)
    crud_genre.remove(db, id=genre_id)
    logger.info(f"Admin {current_user.id} deleted genre {genre_id}")
    return DeleteResponse(message=Messages.GENRE_DELETED)
