import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class ContentType(str, enum.Enum):
    MANGA = "manga"
    NOVEL = "novel"


class ContentStatus(str, enum.Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    HIATUS = "hiatus"


class ContentGenre(Base):
    __tablename__ = "content_genres"

    content_id = Column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id = Column(
        Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True
    )

    def __repr__(self):
        return f"<ContentGenre(content_id={self.content_id}, genre_id={self.genre_id})>"


class Content(Base):
    __tablename__ = "contents"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    alternative_title = Column(String, nullable=True)
    type = Column(String, nullable=False, index=True)  # manga, novel
    release_year = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default=ContentStatus.ONGOING.value)
    description = Column(Text, nullable=True)
    cover_image = Column(String, nullable=True)
    views = Column(Integer, nullable=False, default=0)

    # Foreign Keys
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False)
    translation_group_id = Column(
        Integer, ForeignKey("translation_groups.id", ondelete="SET NULL"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    author = relationship("Author", back_populates="contents")
    translation_group = relationship("TranslationGroup", back_populates="contents")
    genres = relationship(
        "Genre", secondary="content_genres", back_populates="contents"
    )
    chapters = relationship(
        "Chapter",
        back_populates="parent",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Chapter.number",
    )
    favorites = relationship(
        "UserFavorite",
        back_populates="content",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments = relationship(
        "Comment",
        back_populates="content",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reading_history = relationship(
        "ReadingHistory",
        back_populates="content",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Content(id={self.id}, title='{self.title}', type='{self.type}')>"
