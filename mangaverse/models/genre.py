from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from mangaverse.core.database import Base


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    contents = relationship(
        "Content", secondary="content_genres", back_populates="genres"
    )

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"
