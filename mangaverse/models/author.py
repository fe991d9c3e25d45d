from sqlalchemy import Column, Date, Integer, String, Text
from sqlalchemy.orm import relationship

from mangaverse.core.database import Base


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    info = Column(Text, nullable=True)
    birth_date = Column(Date, nullable=True)

    # Relationships
    contents = relationship("Content", back_populates="author")

    def __repr__(self):
        return f"<Author(id={self.id}, name='{self.name}')>"
