from sqlalchemy import Column, Date, Integer, String, Text
from sqlalchemy.orm import relationship

from mangaverse.core.database import Base


class TranslationGroup(Base):
    __tablename__ = "translation_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    founded_date = Column(Date, nullable=True)

    contents = relationship("Content", back_populates="translation_group")

    def __repr__(self):
        return f"<TranslationGroup(id={self.id}, name='{self.name}')>"
