"""
Access gate: decides whether a resolved chapter can be read and builds the
reader view.
"""

import logging
from typing import List, Optional

from mangaverse.models.chapter import Chapter
from mangaverse.models.user import User
from mangaverse.schemas.chapter import (
    ChapterNavigation,
    ChapterResponse,
    ChapterView,
    NavigationLink,
)
from mangaverse.schemas.comment import CommentResponse
from mangaverse.services.content_parser import build_payload
from mangaverse.services.resolution import ResolvedChapter
from mangaverse.storage.base import ReaderStorage

logger = logging.getLogger(__name__)


def is_chapter_unlocked(
    storage: ReaderStorage, chapter: Chapter, user: Optional[User]
) -> bool:
    if not chapter.is_locked:
        return True
    if user is None:
        return False
    return storage.has_unlocked(user.id, chapter.id)


def build_navigation(chapters: List[Chapter], current: Chapter) -> ChapterNavigation:
    """Previous and next chapters by ascending number; None at either end."""
    ordered = sorted(chapters, key=lambda c: (c.number, c.id))
    ids = [c.id for c in ordered]
    if current.id not in ids:
        return ChapterNavigation()
    index = ids.index(current.id)
    previous = ordered[index - 1] if index > 0 else None
    following = ordered[index + 1] if index + 1 < len(ordered) else None
    return ChapterNavigation(
        previous=NavigationLink.model_validate(previous) if previous else None,
        next=NavigationLink.model_validate(following) if following else None,
    )


def open_chapter(
    storage: ReaderStorage, resolved: ResolvedChapter, user: Optional[User]
) -> ChapterView:
    """
    Evaluate the gate for ``user`` and return what they may see.

    An unlocked read bumps the chapter view counter, records reading history
    for signed-in users and commits. A locked chapter comes back with
    ``content`` set to None and has no side effects.
    """
    chapter = resolved.chapter
    content_type = resolved.content_type

    if not is_chapter_unlocked(storage, chapter, user):
        logger.debug(
            f"Chapter {chapter.id} is locked for "
            f"{'anonymous reader' if user is None else f'user {user.id}'}"
        )
        return ChapterView(
            chapter=ChapterResponse.model_validate(chapter),
            content_type=content_type,
            is_unlocked=False,
            content=None,
        )

    payload = build_payload(content_type, storage.get_chapter_contents(chapter.id))
    navigation = build_navigation(storage.list_chapters(chapter.content_id), chapter)
    comments = [
        CommentResponse.model_validate(comment)
        for comment in storage.list_chapter_comments(chapter.id)
    ]

    storage.increment_chapter_views(chapter.id)
    if user is not None:
        storage.record_reading(user.id, chapter.content_id, chapter.id)
    storage.commit()

    return ChapterView(
        chapter=ChapterResponse.model_validate(chapter),
        content_type=content_type,
        is_unlocked=True,
        content=payload,
        navigation=navigation,
        comments=comments,
    )
