"""
Chapter resolution.

A chapter can be addressed by its id, by a content id plus chapter number,
or by a content title plus chapter number. Each address form is a resolver
with the same ``resolve(storage)`` capability. Resolution is read-only.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mangaverse.core.exceptions import ChapterNotFound, ContentNotFound
from mangaverse.models.chapter import Chapter
from mangaverse.models.content import Content
from mangaverse.storage.base import ReaderStorage
from mangaverse.utils.slug import generate_slug

logger = logging.getLogger(__name__)


@dataclass
class ResolvedChapter:
    chapter: Chapter
    content: Content

    @property
    def content_type(self) -> str:
        return self.content.type


def find_content_by_title(storage: ReaderStorage, title: str) -> Optional[Content]:
    """Exact title match first, then a slug match."""
    content = storage.get_content_by_title(title)
    if content is not None:
        return content

    wanted = generate_slug(title)
    if not wanted:
        return None
    for content_id, candidate in storage.list_content_titles():
        if generate_slug(candidate) == wanted:
            logger.debug(f"Title '{title}' matched content {content_id} by slug")
            return storage.get_content(content_id)
    return None


class ChapterResolver(ABC):
    @abstractmethod
    def resolve(self, storage: ReaderStorage) -> ResolvedChapter:
        """Find the chapter this resolver addresses."""


@dataclass
class ById(ChapterResolver):
    chapter_id: int

    def resolve(self, storage: ReaderStorage) -> ResolvedChapter:
        chapter = storage.get_chapter(self.chapter_id)
        if chapter is None:
            raise ChapterNotFound(self.chapter_id)
        content = storage.get_content(chapter.content_id)
        if content is None:
            raise ContentNotFound(chapter.content_id)
        return ResolvedChapter(chapter=chapter, content=content)


def _pick_by_number(
    storage: ReaderStorage, content: Content, number: int
) -> ResolvedChapter:
    for chapter in storage.list_chapters(content.id):
        if chapter.number == number:
            return ResolvedChapter(chapter=chapter, content=content)
    raise ChapterNotFound(content_id=content.id, number=number)


@dataclass
class ByContentNumber(ChapterResolver):
    content_id: int
    number: int

    def resolve(self, storage: ReaderStorage) -> ResolvedChapter:
        content = storage.get_content(self.content_id)
        if content is None:
            raise ContentNotFound(self.content_id)
        return _pick_by_number(storage, content, self.number)


@dataclass
class ByTitleNumber(ChapterResolver):
    title: str
    number: int

    def resolve(self, storage: ReaderStorage) -> ResolvedChapter:
        content = find_content_by_title(storage, self.title)
        if content is None:
            raise ContentNotFound(title=self.title)
        return _pick_by_number(storage, content, self.number)


def resolve_chapter(storage: ReaderStorage, resolver: ChapterResolver) -> ResolvedChapter:
    return resolver.resolve(storage)
