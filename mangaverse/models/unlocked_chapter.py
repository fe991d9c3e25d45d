from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class UnlockedChapter(Base):
    """Ledger row recording that a user paid for a chapter."""

    __tablename__ = "unlocked_chapters"

    # The composite key is the guard against double unlocks
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    chapter_id = Column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), primary_key=True
    )
    unlocked_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    user = relationship("User", back_populates="unlocked_chapters")
    chapter = relationship("Chapter", back_populates="unlocks")

    def __repr__(self):
        return f"<UnlockedChapter(user_id={self.user_id}, chapter_id={self.chapter_id})>"
