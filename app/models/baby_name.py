from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, UTC
import enum

from app.db import Base


class BabyNameGender(str, enum.Enum):
    boy = "boy"
    girl = "girl"
    unisex = "unisex"


class BabyName(Base):
    __tablename__ = "baby_names"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    gender = Column(String(16), nullable=False, index=True)
    meaning = Column(Text, nullable=True)
    pronunciation = Column(String, nullable=True)
    story = Column(Text, nullable=True)
    reasoning = Column(Text, nullable=True)
    first_letter = Column(String(4), nullable=True, index=True)
    lexeme_id = Column(Integer, ForeignKey("lexemes.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))

    lexeme = relationship("Lexeme")
