from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class UserFavorite(Base):
    __tablename__ = "user_favorites"

    # Foreign Keys with proper cascade deletion
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    content_id = Column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), primary_key=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="favorites")
    content = relationship("Content", back_populates="favorites")

    def __repr__(self):
        return f"<UserFavorite(user_id={self.user_id}, content_id={self.content_id})>"
