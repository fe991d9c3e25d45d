"""
Turning stored ChapterContent rows into reader payloads.

Manga pages can be stored three ways, tried in order:

1. a JSON page map in ``content``: ``{"1": "url", "2": "url"}``
2. one row per page carrying ``image_url``
3. ``<img src="...">`` tags inside HTML ``content``

The first strategy that yields pages wins. Parsing never raises: content
that matches nothing gives an empty page list.
"""

import json
import logging
import re
from typing import Callable, Dict, List, Optional, Sequence

from mangaverse.models.chapter import ChapterContent
from mangaverse.models.content import ContentType
from mangaverse.schemas.chapter import HtmlPayload, PagesPayload

logger = logging.getLogger(__name__)

TRAILING_COMMA = re.compile(r",\s*}\s*$")
IMG_SRC = re.compile(r"<img[^>]+src=[\"']([^\"'>]+)[\"']", re.IGNORECASE)
SCRIPT_OR_STYLE = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
BLOCK_TAG = re.compile(
    r"^<(p|div|h[1-6]|ul|ol|li|blockquote|pre|table|figure|img|hr|br)\b", re.IGNORECASE
)


def parse_page_map(raw: Optional[str]) -> List[str]:
    """Parse a ``{"<page>": "<url>"}`` map into URLs ordered by page number."""
    if not raw:
        return []
    text = raw.strip()
    if not text.startswith("{"):
        return []
    text = TRAILING_COMMA.sub("}", text)
    try:
        data = json.loads(text)
    except ValueError:
        return []
    if not isinstance(data, dict):
        return []

    pages = []
    for key, value in data.items():
        try:
            order = float(key)
        except (TypeError, ValueError):
            continue
        if isinstance(value, str) and value.strip():
            pages.append((order, value.strip()))
    pages.sort(key=lambda item: item[0])
    return [url for _, url in pages]


def pages_from_json_map(rows: Sequence[ChapterContent]) -> List[str]:
    for row in rows:
        pages = parse_page_map(row.content)
        if pages:
            return pages
    return []


def pages_from_image_rows(rows: Sequence[ChapterContent]) -> List[str]:
    # rows already come ordered by page_order, then id
    return [row.image_url for row in rows if row.image_url]


def pages_from_img_tags(rows: Sequence[ChapterContent]) -> List[str]:
    pages: List[str] = []
    for row in rows:
        if row.content:
            pages.extend(IMG_SRC.findall(row.content))
    return pages


PAGE_STRATEGIES: List[Callable[[Sequence[ChapterContent]], List[str]]] = [
    pages_from_json_map,
    pages_from_image_rows,
    pages_from_img_tags,
]


def extract_manga_pages(rows: Sequence[ChapterContent]) -> List[str]:
    for strategy in PAGE_STRATEGIES:
        pages = strategy(rows)
        if pages:
            return pages
    if rows:
        logger.debug(f"No pages found in {len(rows)} content rows")
    return []


def extract_novel_html(rows: Sequence[ChapterContent]) -> str:
    if not rows:
        return ""
    return rows[0].content or ""


def build_payload(content_type: str, rows: Sequence[ChapterContent]):
    if content_type == ContentType.MANGA.value:
        return PagesPayload(pages=extract_manga_pages(rows))
    return HtmlPayload(html=extract_novel_html(rows))


def build_page_map(images: Sequence[str]) -> str:
    """Serialize image URLs as a 1-based JSON page map."""
    page_map: Dict[str, str] = {
        str(index): url.strip()
        for index, url in enumerate((u for u in images if u and u.strip()), start=1)
    }
    return json.dumps(page_map, ensure_ascii=False)


def normalize_novel_html(html: str) -> str:
    """
    Clean novel HTML for storage.

    Drops script and style blocks, maps ``<b>``/``<i>`` to ``<strong>``/``<em>``
    and wraps bare text lines in paragraphs.
    """
    html = SCRIPT_OR_STYLE.sub("", html or "")
    html = re.sub(r"<b>", "<strong>", html, flags=re.IGNORECASE)
    html = re.sub(r"</b>", "</strong>", html, flags=re.IGNORECASE)
    html = re.sub(r"<i>", "<em>", html, flags=re.IGNORECASE)
    html = re.sub(r"</i>", "</em>", html, flags=re.IGNORECASE)

    lines = []
    for line in re.split(r"\r?\n", html):
        line = line.strip()
        if not line:
            continue
        if BLOCK_TAG.match(line) or line.startswith("</"):
            lines.append(line)
        else:
            lines.append(f"<p>{line}</p>")
    return "\n".join(lines)
