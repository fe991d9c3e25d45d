from typing import List, Optional

from sqlalchemy.orm import Session

from mangaverse.crud.base import CRUDBase
from mangaverse.models.author import Author
from mangaverse.models.genre import Genre
from mangaverse.models.translation_group import TranslationGroup
from mangaverse.schemas.catalog import (
    AuthorCreate,
    AuthorUpdate,
    GenreCreate,
    GenreUpdate,
    TranslationGroupCreate,
    TranslationGroupUpdate,
)


class CRUDGenre(CRUDBase[Genre, GenreCreate, GenreUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[Genre]:
        return db.query(Genre).filter(Genre.name == name).first()

    def get_many(self, db: Session, *, ids: List[int]) -> List[Genre]:
        if not ids:
            return []
        return db.query(Genre).filter(Genre.id.in_(ids)).all()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Genre]:
        return db.query(Genre).order_by(Genre.name).offset(skip).limit(limit).all()


class CRUDAuthor(CRUDBase[Author, AuthorCreate, AuthorUpdate]):
    def search_by_name(
        self, db: Session, *, name: str, skip: int = 0, limit: int = 100
    ) -> List[Author]:
        return (
            db.query(Author)
            .filter(Author.name.ilike(f"%{name}%"))
            .order_by(Author.name)
            .offset(skip)
            .limit(limit)
            .all()
        )


class CRUDTranslationGroup(
    CRUDBase[TranslationGroup, TranslationGroupCreate, TranslationGroupUpdate]
):
    pass


crud_genre = CRUDGenre(Genre)
crud_author = CRUDAuthor(Author)
crud_translation_group = CRUDTranslationGroup(TranslationGroup)
