from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class ReadingHistory(Base):
    __tablename__ = "reading_history"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys with proper cascade deletion
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content_id = Column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False
    )
    chapter_id = Column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )

    last_read_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    user = relationship("User", back_populates="reading_history")
    content = relationship("Content", back_populates="reading_history")
    chapter = relationship("Chapter", back_populates="reading_history")

    # One row per user per content, pointing at the latest chapter read
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="unique_user_content_history"),
    )

    def __repr__(self):
        return f"<ReadingHistory(id={self.id}, user_id={self.user_id}, content_id={self.content_id}, chapter_id={self.chapter_id})>"
