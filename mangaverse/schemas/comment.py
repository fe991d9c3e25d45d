from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    content_id: int
    chapter_id: Optional[int] = None
    text: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    username: Optional[str] = None
    content_id: int
    chapter_id: Optional[int] = None
    text: str
    created_at: Optional[datetime] = None
