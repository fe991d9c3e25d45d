import enum

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from mangaverse.core.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    # Coin balance ("xu")
    balance = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships with proper cascade deletion
    unlocked_chapters = relationship(
        "UnlockedChapter",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reading_history = relationship(
        "ReadingHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorites = relationship(
        "UserFavorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    comments = relationship(
        "Comment",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (CheckConstraint("balance >= 0", name="ck_user_balance_non_negative"),)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
