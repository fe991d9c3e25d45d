import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session, joinedload, selectinload

from mangaverse.crud.base import CRUDBase, column_values
from mangaverse.models.content import Content, ContentGenre
from mangaverse.models.genre import Genre
from mangaverse.schemas.content import ContentCreate, ContentUpdate

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "newest": (Content.created_at.desc(), Content.id.desc()),
    "oldest": (Content.created_at.asc(), Content.id.asc()),
    "az": (Content.title.asc(),),
    "za": (Content.title.desc(),),
    "popularity": (Content.views.desc(), Content.id.asc()),
}


class CRUDContent(CRUDBase[Content, ContentCreate, ContentUpdate]):
    def get_with_details(self, db: Session, *, id: int) -> Optional[Content]:
        """Get content with author, translation group, genres and chapters."""
        return (
            db.query(Content)
            .options(
                joinedload(Content.author),
                joinedload(Content.translation_group),
                selectinload(Content.genres),
                selectinload(Content.chapters),
            )
            .filter(Content.id == id)
            .first()
        )

    def get_by_title(self, db: Session, *, title: str) -> Optional[Content]:
        return (
            db.query(Content)
            .filter(Content.title == title)
            .order_by(Content.id)
            .first()
        )

    def list_titles(self, db: Session) -> List[Tuple[int, str]]:
        return [
            (row.id, row.title)
            for row in db.query(Content.id, Content.title).order_by(Content.id)
        ]

    def _filtered(self, db: Session, *, type: Optional[str], status: Optional[str]):
        query = db.query(Content)
        if type:
            query = query.filter(Content.type == type)
        if status:
            query = query.filter(Content.status == status)
        return query

    def get_multi_with_filters(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Content]:
        return (
            self._filtered(db, type=type, status=status)
            .order_by(Content.created_at.desc(), Content.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_with_filters(
        self, db: Session, *, type: Optional[str] = None, status: Optional[str] = None
    ) -> int:
        return self._filtered(db, type=type, status=status).count()

    def search(
        self, db: Session, *, query: str, skip: int = 0, limit: int = 100
    ) -> List[Content]:
        """Search contents by title or alternative title."""
        pattern = f"%{query}%"
        return (
            db.query(Content)
            .filter(
                or_(
                    Content.title.ilike(pattern),
                    Content.alternative_title.ilike(pattern),
                )
            )
            .order_by(Content.title)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def search_advanced(
        self,
        db: Session,
        *,
        title: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
        genre_ids: Optional[List[int]] = None,
        sort_by: str = "newest",
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Content], int]:
        """
        Filter contents by title, type, status and genres.

        Every requested genre must be attached to a content for it to match.
        Returns the requested page and the total match count.
        """
        query = self._filtered(db, type=type, status=status)
        if title:
            pattern = f"%{title}%"
            query = query.filter(
                or_(
                    Content.title.ilike(pattern),
                    Content.alternative_title.ilike(pattern),
                )
            )
        if genre_ids:
            wanted = set(genre_ids)
            matching = (
                db.query(ContentGenre.content_id)
                .filter(ContentGenre.genre_id.in_(wanted))
                .group_by(ContentGenre.content_id)
                .having(func.count(func.distinct(ContentGenre.genre_id)) == len(wanted))
            )
            query = query.filter(Content.id.in_(matching))

        total = query.count()
        order = SORT_ORDERS.get(sort_by, SORT_ORDERS["newest"])
        items = query.order_by(*order).offset(skip).limit(limit).all()
        return items, total

    def create(self, db: Session, *, obj_in: ContentCreate) -> Content:
        data = column_values(obj_in.model_dump(exclude={"genre_ids"}))
        db_obj = Content(**data)
        db_obj.genres = self._load_genres(db, obj_in.genre_ids)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"Created content '{db_obj.title}' (id={db_obj.id})")
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: Content,
        obj_in: Union[ContentUpdate, Dict[str, Any]],
    ) -> Content:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        genre_ids = update_data.pop("genre_ids", None)
        if genre_ids is not None:
            db_obj.genres = self._load_genres(db, genre_ids)
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def increment_views(self, db: Session, *, content_id: int) -> None:
        """Bump the view counter. Does not commit."""
        db.execute(
            update(Content)
            .where(Content.id == content_id)
            .values(views=Content.views + 1)
            .execution_options(synchronize_session="fetch")
        )

    def _load_genres(self, db: Session, genre_ids: List[int]) -> List[Genre]:
        if not genre_ids:
            return []
        return db.query(Genre).filter(Genre.id.in_(set(genre_ids))).all()


crud_content = CRUDContent(Content)
