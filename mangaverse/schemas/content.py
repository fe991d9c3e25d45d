from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mangaverse.models.content import ContentStatus, ContentType
from mangaverse.schemas.catalog import (
    AuthorResponse,
    GenreResponse,
    TranslationGroupResponse,
)
from mangaverse.schemas.chapter import ChapterResponse


class ContentBase(BaseModel):
    title: str = Field(..., min_length=1)
    alternative_title: Optional[str] = None
    type: ContentType
    author_id: int
    translation_group_id: Optional[int] = None
    release_year: Optional[int] = None
    status: ContentStatus = ContentStatus.ONGOING
    description: Optional[str] = None
    cover_image: Optional[str] = None


class ContentCreate(ContentBase):
    genre_ids: List[int] = []


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    alternative_title: Optional[str] = None
    type: Optional[ContentType] = None
    author_id: Optional[int] = None
    translation_group_id: Optional[int] = None
    release_year: Optional[int] = None
    status: Optional[ContentStatus] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    # None keeps the current genres, a list replaces them
    genre_ids: Optional[List[int]] = None


class ContentResponse(ContentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    views: int = 0
    created_at: Optional[datetime] = None


class ContentDetail(ContentResponse):
    author: Optional[AuthorResponse] = None
    translation_group: Optional[TranslationGroupResponse] = None
    genres: List[GenreResponse] = []
    chapters: List[ChapterResponse] = []


class ContentTypeResponse(BaseModel):
    id: int
    type: ContentType
