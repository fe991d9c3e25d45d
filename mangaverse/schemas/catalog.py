from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenreBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class GenreCreate(GenreBase):
    pass


class GenreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class GenreResponse(GenreBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AuthorBase(BaseModel):
    name: str = Field(..., min_length=1)
    info: Optional[str] = None
    birth_date: Optional[date] = None


class AuthorCreate(AuthorBase):
    pass


class AuthorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    info: Optional[str] = None
    birth_date: Optional[date] = None


class AuthorResponse(AuthorBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class TranslationGroupBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    founded_date: Optional[date] = None


class TranslationGroupCreate(TranslationGroupBase):
    pass


class TranslationGroupUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    founded_date: Optional[date] = None


class TranslationGroupResponse(TranslationGroupBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
