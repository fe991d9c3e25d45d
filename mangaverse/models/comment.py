from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)

    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content_id = Column(
        Integer,
        ForeignKey("contents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Null for comments on the content itself
    chapter_id = Column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="comments")
    content = relationship("Content", back_populates="comments")
    chapter = relationship("Chapter", back_populates="comments")

    @property
    def username(self):
        return self.user.username if self.user is not None else None

    def __repr__(self):
        return f"<Comment(id={self.id}, user_id={self.user_id}, content_id={self.content_id}, chapter_id={self.chapter_id})>"
