from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mangaverse.models.content import ContentType
from mangaverse.schemas.comment import CommentResponse


class ChapterBase(BaseModel):
    title: Optional[str] = None
    is_locked: bool = False
    unlock_price: Optional[int] = Field(None, gt=0)


class ChapterCreate(ChapterBase):
    # Defaults to the next number after the highest existing one
    number: Optional[int] = Field(None, ge=1)
    release_date: Optional[datetime] = None
    images: Optional[List[str]] = None
    html: Optional[str] = None


class ChapterUpdate(BaseModel):
    number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = None
    release_date: Optional[datetime] = None
    is_locked: Optional[bool] = None
    unlock_price: Optional[int] = Field(None, gt=0)


class ChapterLockUpdate(BaseModel):
    is_locked: bool
    unlock_price: Optional[int] = Field(None, gt=0)


class ChapterContentReplace(BaseModel):
    """New body for a chapter: ordered image URLs or raw HTML."""

    images: Optional[List[str]] = None
    html: Optional[str] = None

    @model_validator(mode="after")
    def check_exactly_one(self):
        if (self.images is None) == (self.html is None):
            raise ValueError("Provide either 'images' or 'html'")
        return self


class ChapterResponse(ChapterBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content_id: int
    number: int
    release_date: Optional[datetime] = None
    views: int = 0


class ChapterListItem(ChapterResponse):
    is_unlocked: bool


class NavigationLink(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: int
    title: Optional[str] = None


class ChapterNavigation(BaseModel):
    previous: Optional[NavigationLink] = None
    next: Optional[NavigationLink] = None


class HtmlPayload(BaseModel):
    kind: Literal["html"] = "html"
    html: str


class PagesPayload(BaseModel):
    kind: Literal["pages"] = "pages"
    pages: List[str]


ChapterPayload = Annotated[
    Union[HtmlPayload, PagesPayload], Field(discriminator="kind")
]


class ChapterView(BaseModel):
    """What a reader gets back for one chapter.

    A locked chapter never carries content, navigation or comments.
    """

    chapter: ChapterResponse
    content_type: ContentType
    is_unlocked: bool
    content: Optional[ChapterPayload] = None
    navigation: Optional[ChapterNavigation] = None
    comments: Optional[List[CommentResponse]] = None


class UnlockResult(BaseModel):
    new_balance: int
    chapter_id: int
    unlocked_at: datetime


class UnlockedChapterIds(BaseModel):
    content_id: int
    chapter_ids: List[int]
