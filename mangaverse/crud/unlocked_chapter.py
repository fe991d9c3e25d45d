import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from mangaverse.core.exceptions import DuplicateUnlock
from mangaverse.models.chapter import Chapter
from mangaverse.models.unlocked_chapter import UnlockedChapter

logger = logging.getLogger(__name__)


class CRUDUnlockedChapter:
    """Access to the unlock ledger."""

    def exists(self, db: Session, *, user_id: int, chapter_id: int) -> bool:
        return (
            db.query(UnlockedChapter.chapter_id)
            .filter(
                UnlockedChapter.user_id == user_id,
                UnlockedChapter.chapter_id == chapter_id,
            )
            .first()
            is not None
        )

    def chapter_ids_for_content(
        self, db: Session, *, user_id: int, content_id: int
    ) -> List[int]:
        rows = (
            db.query(UnlockedChapter.chapter_id)
            .join(Chapter, Chapter.id == UnlockedChapter.chapter_id)
            .filter(
                UnlockedChapter.user_id == user_id, Chapter.content_id == content_id
            )
            .order_by(Chapter.number)
            .all()
        )
        return [row.chapter_id for row in rows]

    def insert(self, db: Session, *, user_id: int, chapter_id: int) -> datetime:
        """
        Insert a ledger row without committing.

        Raises DuplicateUnlock when (user, chapter) is already present. On
        PostgreSQL and SQLite the conflict is absorbed by the database so the
        surrounding transaction stays usable.
        """
        unlocked_at = datetime.now(timezone.utc)
        values = {
            "user_id": user_id,
            "chapter_id": chapter_id,
            "unlocked_at": unlocked_at,
        }
        table = UnlockedChapter.__table__
        dialect = db.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(table).values(**values).on_conflict_do_nothing()
        elif dialect == "sqlite":
            stmt = sqlite.insert(table).values(**values).on_conflict_do_nothing()
        else:
            if self.exists(db, user_id=user_id, chapter_id=chapter_id):
                raise DuplicateUnlock(user_id, chapter_id)
            stmt = insert(table).values(**values)

        result = db.execute(stmt)
        if result.rowcount == 0:
            raise DuplicateUnlock(user_id, chapter_id)
        return unlocked_at


crud_unlocked_chapter = CRUDUnlockedChapter()
