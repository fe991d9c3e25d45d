from datetime import datetime, timezone
from typing import List

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from mangaverse.models.reading_history import ReadingHistory


class CRUDReadingHistory:
    def upsert(
        self, db: Session, *, user_id: int, content_id: int, chapter_id: int
    ) -> ReadingHistory:
        """
        Point the user's history for a content at ``chapter_id``.

        Keeps one row per (user, content). On PostgreSQL and SQLite a
        concurrent first read resolves through ON CONFLICT instead of failing
        the unique constraint. Does not commit.
        """
        now = datetime.now(timezone.utc)
        dialect = db.get_bind().dialect.name
        if dialect in ("postgresql", "sqlite"):
            dialect_insert = (
                postgresql.insert if dialect == "postgresql" else sqlite.insert
            )
            stmt = dialect_insert(ReadingHistory.__table__).values(
                user_id=user_id,
                content_id=content_id,
                chapter_id=chapter_id,
                last_read_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "content_id"],
                set_={"chapter_id": chapter_id, "last_read_at": now},
            )
            db.execute(stmt)
            return (
                db.query(ReadingHistory)
                .populate_existing()
                .filter(
                    ReadingHistory.user_id == user_id,
                    ReadingHistory.content_id == content_id,
                )
                .one()
            )

        entry = (
            db.query(ReadingHistory)
            .filter(
                ReadingHistory.user_id == user_id,
                ReadingHistory.content_id == content_id,
            )
            .first()
        )
        if entry:
            entry.chapter_id = chapter_id
            entry.last_read_at = now
        else:
            entry = ReadingHistory(
                user_id=user_id,
                content_id=content_id,
                chapter_id=chapter_id,
                last_read_at=now,
            )
            db.add(entry)
        db.flush()
        return entry

    def get_by_user(
        self, db: Session, *, user_id: int, limit: int = 20
    ) -> List[ReadingHistory]:
        """Latest reads first."""
        return (
            db.query(ReadingHistory)
            .options(joinedload(ReadingHistory.content))
            .filter(ReadingHistory.user_id == user_id)
            .order_by(ReadingHistory.last_read_at.desc(), ReadingHistory.id.desc())
            .limit(limit)
            .all()
        )


crud_reading_history = CRUDReadingHistory()
