import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set, Tuple

from mangaverse.core.exceptions import DuplicateUnlock
from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.models.comment import Comment
from mangaverse.models.content import Content
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)


class StorageFailure(RuntimeError):
    """Injected failure raised by MemoryStorage."""


class MemoryStorage(ReaderStorage):
    """
    Dict-backed ReaderStorage.

    Holds transient model instances. Used for service tests and to inject
    failures into the unlock path via ``fail_unlock_insert`` and
    ``fail_credit``.
    """

    def __init__(self):
        self.contents: Dict[int, Content] = {}
        self.chapters: Dict[int, Chapter] = {}
        self.chapter_contents: Dict[int, List[ChapterContent]] = {}
        self.comments: Dict[int, List[Comment]] = {}
        self.balances: Dict[int, int] = {}
        self.unlocks: Dict[Tuple[int, int], datetime] = {}
        # (user_id, content_id) -> chapter_id
        self.history: Dict[Tuple[int, int], int] = {}
        self.commits = 0
        self.rollbacks = 0
        self.fail_unlock_insert = False
        self.fail_credit = False

    # Seeding helpers

    def add_content(self, content: Content) -> Content:
        if content.views is None:
            content.views = 0
        self.contents[content.id] = content
        return content

    def add_chapter(self, chapter: Chapter, bodies: Iterable[ChapterContent] = ()) -> Chapter:
        if chapter.views is None:
            chapter.views = 0
        if chapter.is_locked is None:
            chapter.is_locked = False
        self.chapters[chapter.id] = chapter
        self.chapter_contents[chapter.id] = list(bodies)
        return chapter

    def add_comment(self, comment: Comment) -> Comment:
        self.comments.setdefault(comment.chapter_id, []).append(comment)
        return comment

    def set_balance(self, user_id: int, balance: int) -> None:
        self.balances[user_id] = balance

    # ReaderStorage

    def get_content(self, content_id: int) -> Optional[Content]:
        return self.contents.get(content_id)

    def get_content_by_title(self, title: str) -> Optional[Content]:
        for content in sorted(self.contents.values(), key=lambda c: c.id):
            if content.title == title:
                return content
        return None

    def list_content_titles(self) -> Iterable[Tuple[int, str]]:
        return [(c.id, c.title) for c in sorted(self.contents.values(), key=lambda c: c.id)]

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        return self.chapters.get(chapter_id)

    def list_chapters(self, content_id: int) -> List[Chapter]:
        chapters = [c for c in self.chapters.values() if c.content_id == content_id]
        return sorted(chapters, key=lambda c: (c.number, c.id))

    def get_chapter_contents(self, chapter_id: int) -> List[ChapterContent]:
        rows = self.chapter_contents.get(chapter_id, [])
        # NULL page_order sorts first, as on SQLite
        return sorted(
            rows,
            key=lambda r: (r.page_order is not None, r.page_order or 0, r.id or 0),
        )

    def list_chapter_comments(self, chapter_id: int) -> List[Comment]:
        return list(self.comments.get(chapter_id, []))

    def has_unlocked(self, user_id: int, chapter_id: int) -> bool:
        return (user_id, chapter_id) in self.unlocks

    def unlocked_chapter_ids(self, user_id: int, content_id: int) -> Set[int]:
        return {
            chapter_id
            for (uid, chapter_id) in self.unlocks
            if uid == user_id
            and chapter_id in self.chapters
            and self.chapters[chapter_id].content_id == content_id
        }

    def add_unlock(self, user_id: int, chapter_id: int) -> datetime:
        if self.fail_unlock_insert:
            raise StorageFailure("ledger insert failed")
        key = (user_id, chapter_id)
        if key in self.unlocks:
            raise DuplicateUnlock(user_id, chapter_id)
        unlocked_at = datetime.now(timezone.utc)
        self.unlocks[key] = unlocked_at
        return unlocked_at

    def get_balance(self, user_id: int) -> Optional[int]:
        return self.balances.get(user_id)

    def debit_balance(self, user_id: int, amount: int) -> Optional[int]:
        balance = self.balances.get(user_id)
        if balance is None or balance < amount:
            return None
        self.balances[user_id] = balance - amount
        return self.balances[user_id]

    def credit_balance(self, user_id: int, amount: int) -> int:
        if self.fail_credit:
            raise StorageFailure("balance credit failed")
        self.balances[user_id] = self.balances.get(user_id, 0) + amount
        return self.balances[user_id]

    def increment_content_views(self, content_id: int) -> None:
        content = self.contents.get(content_id)
        if content is not None:
            content.views += 1

    def increment_chapter_views(self, chapter_id: int) -> None:
        chapter = self.chapters.get(chapter_id)
        if chapter is not None:
            chapter.views += 1

    def record_reading(self, user_id: int, content_id: int, chapter_id: int) -> None:
        self.history[(user_id, content_id)] = chapter_id

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1
