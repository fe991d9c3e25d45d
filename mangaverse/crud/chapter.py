import logging
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from mangaverse.crud.base import CRUDBase
from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.schemas.chapter import ChapterCreate, ChapterUpdate

logger = logging.getLogger(__name__)


class CRUDChapter(CRUDBase[Chapter, ChapterCreate, ChapterUpdate]):
    def get_by_content(self, db: Session, *, content_id: int) -> List[Chapter]:
        """Get chapters of a content ordered by chapter number."""
        return (
            db.query(Chapter)
            .filter(Chapter.content_id == content_id)
            .order_by(Chapter.number, Chapter.id)
            .all()
        )

    def max_number(self, db: Session, *, content_id: int) -> Optional[int]:
        return (
            db.query(func.max(Chapter.number))
            .filter(Chapter.content_id == content_id)
            .scalar()
        )

    def get_contents(self, db: Session, *, chapter_id: int) -> List[ChapterContent]:
        """Content rows of a chapter, in page order."""
        return (
            db.query(ChapterContent)
            .filter(ChapterContent.chapter_id == chapter_id)
            .order_by(ChapterContent.page_order, ChapterContent.id)
            .all()
        )

    def add(self, db: Session, *, chapter: Chapter, bodies: List[ChapterContent]) -> Chapter:
        """Persist a new chapter together with its content rows."""
        chapter.contents = bodies
        db.add(chapter)
        db.commit()
        db.refresh(chapter)
        logger.info(
            f"Created chapter {chapter.number} (id={chapter.id}) for content {chapter.content_id}"
        )
        return chapter

    def replace_contents(
        self, db: Session, *, chapter: Chapter, bodies: List[ChapterContent]
    ) -> Chapter:
        db.query(ChapterContent).filter(
            ChapterContent.chapter_id == chapter.id
        ).delete(synchronize_session=False)
        db.expire(chapter, ["contents"])
        for body in bodies:
            body.chapter_id = chapter.id
            db.add(body)
        db.commit()
        db.refresh(chapter)
        return chapter

    def increment_views(self, db: Session, *, chapter_id: int) -> None:
        """Bump the view counter. Does not commit."""
        db.execute(
            update(Chapter)
            .where(Chapter.id == chapter_id)
            .values(views=Chapter.views + 1)
            .execution_options(synchronize_session="fetch")
        )


crud_chapter = CRUDChapter(Chapter)
