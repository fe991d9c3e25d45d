from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(Integer, primary_key=True, index=True)
    # Unique per content by convention only
    number = Column(Integer, nullable=False, index=True)
    title = Column(String, nullable=True)
    release_date = Column(DateTime(timezone=True), server_default=func.now())
    is_locked = Column(Boolean, nullable=False, default=False)
    unlock_price = Column(Integer, nullable=True)
    views = Column(Integer, nullable=False, default=0)

    # Foreign Keys with proper cascade deletion
    content_id = Column(
        Integer,
        ForeignKey("contents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    parent = relationship("Content", back_populates="chapters")
    contents = relationship(
        "ChapterContent",
        back_populates="chapter",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChapterContent.id",
    )
    unlocks = relationship(
        "UnlockedChapter",
        back_populates="chapter",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reading_history = relationship(
        "ReadingHistory",
        back_populates="chapter",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments = relationship(
        "Comment",
        back_populates="chapter",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Chapter(id={self.id}, content_id={self.content_id}, number={self.number}, is_locked={self.is_locked})>"


class ChapterContent(Base):
    __tablename__ = "chapter_contents"

    id = Column(Integer, primary_key=True, index=True)
    chapter_id = Column(
        Integer,
        ForeignKey("chapters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Novel HTML or a JSON page map for manga
    content = Column(Text, nullable=True)
    page_order = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)

    chapter = relationship("Chapter", back_populates="contents")

    def __repr__(self):
        return f"<ChapterContent(id={self.id}, chapter_id={self.chapter_id}, page_order={self.page_order})>"
