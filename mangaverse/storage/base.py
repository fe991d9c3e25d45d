from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, Set, Tuple

from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.models.comment import Comment
from mangaverse.models.content import Content


class ReaderStorage(ABC):
    """
    Data access needed by chapter resolution, the access gate and unlocks.

    Mutating methods never commit on their own; callers finish a unit of
    work with ``commit`` or discard it with ``rollback``.
    """

    # Catalog lookups

    @abstractmethod
    def get_content(self, content_id: int) -> Optional[Content]:
        ...

    @abstractmethod
    def get_content_by_title(self, title: str) -> Optional[Content]:
        """Exact title match."""

    @abstractmethod
    def list_content_titles(self) -> Iterable[Tuple[int, str]]:
        ...

    @abstractmethod
    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        ...

    @abstractmethod
    def list_chapters(self, content_id: int) -> List[Chapter]:
        """Chapters of a content, ascending by number."""

    @abstractmethod
    def get_chapter_contents(self, chapter_id: int) -> List[ChapterContent]:
        """Content rows of a chapter ordered by page_order, then id."""

    @abstractmethod
    def list_chapter_comments(self, chapter_id: int) -> List[Comment]:
        ...

    # Unlock ledger

    @abstractmethod
    def has_unlocked(self, user_id: int, chapter_id: int) -> bool:
        ...

    @abstractmethod
    def unlocked_chapter_ids(self, user_id: int, content_id: int) -> Set[int]:
        ...

    @abstractmethod
    def add_unlock(self, user_id: int, chapter_id: int) -> datetime:
        """
        Record an unlock and return its timestamp.

        Raises DuplicateUnlock if the pair already exists.
        """

    # Balances

    @abstractmethod
    def get_balance(self, user_id: int) -> Optional[int]:
        ...

    @abstractmethod
    def debit_balance(self, user_id: int, amount: int) -> Optional[int]:
        """Atomically subtract ``amount`` if covered; None when it is not."""

    @abstractmethod
    def credit_balance(self, user_id: int, amount: int) -> int:
        ...

    # Reader side effects

    @abstractmethod
    def increment_content_views(self, content_id: int) -> None:
        ...

    @abstractmethod
    def increment_chapter_views(self, chapter_id: int) -> None:
        ...

    @abstractmethod
    def record_reading(self, user_id: int, content_id: int, chapter_id: int) -> None:
        ...

    # Unit of work

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...
