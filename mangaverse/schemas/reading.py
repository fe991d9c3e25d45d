from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mangaverse.schemas.content import ContentResponse


class ReadingHistoryCreate(BaseModel):
    content_id: int
    chapter_id: int


class ReadingHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    content_id: int
    chapter_id: int
    last_read_at: Optional[datetime] = None
    content: Optional[ContentResponse] = None


class FavoriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    content_id: int
    created_at: Optional[datetime] = None
    content: Optional[ContentResponse] = None


class FavoriteToggle(BaseModel):
    content_id: int
    added: bool
