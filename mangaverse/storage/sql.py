import logging
from datetime import datetime
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from mangaverse.crud.chapter import crud_chapter
from mangaverse.crud.comment import crud_comment
from mangaverse.crud.content import crud_content
from mangaverse.crud.reading_history import crud_reading_history
from mangaverse.crud.unlocked_chapter import crud_unlocked_chapter
from mangaverse.crud.user import crud_user
from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.models.comment import Comment
from mangaverse.models.content import Content
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)


class SQLStorage(ReaderStorage):
    """ReaderStorage over a SQLAlchemy session; one instance per request."""

    def __init__(self, db: Session):
        self.db = db

    def get_content(self, content_id: int) -> Optional[Content]:
        return crud_content.get(self.db, content_id)

    def get_content_by_title(self, title: str) -> Optional[Content]:
        return crud_content.get_by_title(self.db, title=title)

    def list_content_titles(self) -> Iterable[Tuple[int, str]]:
        return crud_content.list_titles(self.db)

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        return crud_chapter.get(self.db, chapter_id)

    def list_chapters(self, content_id: int) -> List[Chapter]:
        return crud_chapter.get_by_content(self.db, content_id=content_id)

    def get_chapter_contents(self, chapter_id: int) -> List[ChapterContent]:
        return crud_chapter.get_contents(self.db, chapter_id=chapter_id)

    def list_chapter_comments(self, chapter_id: int) -> List[Comment]:
        return crud_comment.get_by_chapter(self.db, chapter_id=chapter_id)

    def has_unlocked(self, user_id: int, chapter_id: int) -> bool:
        return crud_unlocked_chapter.exists(
            self.db, user_id=user_id, chapter_id=chapter_id
        )

    def unlocked_chapter_ids(self, user_id: int, content_id: int) -> Set[int]:
        return set(
            crud_unlocked_chapter.chapter_ids_for_content(
                self.db, user_id=user_id, content_id=content_id
            )
        )

    def add_unlock(self, user_id: int, chapter_id: int) -> datetime:
        # A failed insert rolls back to the savepoint only, so the debit can
        # still be refunded on the same transaction
        with self.db.begin_nested():
            return crud_unlocked_chapter.insert(
                self.db, user_id=user_id, chapter_id=chapter_id
            )

    def get_balance(self, user_id: int) -> Optional[int]:
        return crud_user.get_balance(self.db, user_id=user_id)

    def debit_balance(self, user_id: int, amount: int) -> Optional[int]:
        return crud_user.debit_balance(self.db, user_id=user_id, amount=amount)

    def credit_balance(self, user_id: int, amount: int) -> int:
        return crud_user.credit_balance(self.db, user_id=user_id, amount=amount)

    def increment_content_views(self, content_id: int) -> None:
        crud_content.increment_views(self.db, content_id=content_id)

    def increment_chapter_views(self, chapter_id: int) -> None:
        crud_chapter.increment_views(self.db, chapter_id=chapter_id)

    def record_reading(self, user_id: int, content_id: int, chapter_id: int) -> None:
        crud_reading_history.upsert(
            self.db, user_id=user_id, content_id=content_id, chapter_id=chapter_id
        )

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
