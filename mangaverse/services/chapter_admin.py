import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from mangaverse.core.exceptions import InvalidLockState
from mangaverse.core.settings import settings
from mangaverse.crud.chapter import crud_chapter
from mangaverse.models.chapter import Chapter, ChapterContent
from mangaverse.models.content import Content, ContentType
from mangaverse.services.content_parser import build_page_map, normalize_novel_html

logger = logging.getLogger(__name__)


def next_chapter_number(db: Session, content_id: int) -> int:
    highest = crud_chapter.max_number(db, content_id=content_id)
    return (highest or 0) + 1


def apply_lock_rules(
    changes: Dict[str, Any],
    current_locked: bool = False,
    current_price: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Normalise ``is_locked`` / ``unlock_price`` in a set of chapter changes.

    An unlocked chapter never keeps a price. A locked one needs a positive
    price, taken from the changes or else from ``current_price``.
    """
    changes = dict(changes)
    locked = changes.get("is_locked")
    if locked is None:
        changes.pop("is_locked", None)
        locked = current_locked

    if not locked:
        changes["unlock_price"] = None
        return changes

    price = changes.get("unlock_price", current_price)
    if price is None or price <= 0:
        raise InvalidLockState()
    if price > settings.MAX_UNLOCK_PRICE:
        raise InvalidLockState(f"Unlock price cannot exceed {settings.MAX_UNLOCK_PRICE}")
    changes["unlock_price"] = price
    return changes


def build_bodies(
    content_type: str, images: Optional[List[str]] = None, html: Optional[str] = None
) -> List[ChapterContent]:
    """
    Storage rows for a chapter body.

    Manga images become a single JSON page map row; manga HTML is kept
    as-is. Novel HTML is normalised first.
    """
    if content_type == ContentType.MANGA.value:
        if images is not None:
            return [ChapterContent(content=build_page_map(images), page_order=1)]
        if html is not None:
            return [ChapterContent(content=html, page_order=1)]
        return []

    if html is not None:
        return [ChapterContent(content=normalize_novel_html(html), page_order=1)]
    if images is not None:
        # Novels have no page list; keep the images inline
        markup = "\n".join(f'<img src="{url}">' for url in images if url)
        return [ChapterContent(content=normalize_novel_html(markup), page_order=1)]
    return []


def create_chapter(db: Session, content: Content, chapter_in) -> Chapter:
    data = chapter_in.model_dump(exclude={"images", "html", "number"}, exclude_none=True)
    data = apply_lock_rules(data)
    number = chapter_in.number or next_chapter_number(db, content.id)

    chapter = Chapter(content_id=content.id, number=number, **data)
    bodies = build_bodies(content.type, images=chapter_in.images, html=chapter_in.html)
    chapter = crud_chapter.add(db, chapter=chapter, bodies=bodies)
    return chapter


def update_chapter(db: Session, chapter: Chapter, changes: Dict[str, Any]) -> Chapter:
    for required in ("number", "release_date"):
        if changes.get(required, 0) is None:
            changes.pop(required)
    changes = apply_lock_rules(
        changes, current_locked=chapter.is_locked, current_price=chapter.unlock_price
    )
    chapter = crud_chapter.update(db, db_obj=chapter, obj_in=changes)
    logger.info(
        f"Updated chapter {chapter.id}: locked={chapter.is_locked}, price={chapter.unlock_price}"
    )
    return chapter


def replace_chapter_content(
    db: Session,
    chapter: Chapter,
    content_type: str,
    images: Optional[List[str]] = None,
    html: Optional[str] = None,
) -> Chapter:
    bodies = build_bodies(content_type, images=images, html=html)
    chapter = crud_chapter.replace_contents(db, chapter=chapter, bodies=bodies)
    logger.info(f"Replaced content of chapter {chapter.id} ({len(bodies)} rows)")
    return chapter
