from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from datetime import datetime, UTC

from app.db import Base


class Lexeme(Base):
    __tablename__ = "lexemes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sanskrit = Column(String, nullable=False, index=True)
    transliteration = Column(String, nullable=True, index=True)
    primary_meaning = Column(Text, nullable=False)
    english_meanings = Column(Text, nullable=True)  # JSON-encoded list
    part_of_speech = Column(String, nullable=True)
    hindi_meaning = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)  # comma separated
    raw_entry = Column(Text, nullable=True)

    # Enrichment flags
    baby_name_checked = Column(Boolean, nullable=False, default=False, index=True)
    baby_name_suitable = Column(Boolean, nullable=True)
    baby_name_gender = Column(String(16), nullable=True)

    # Enrichment outputs
    improved_translation = Column(Text, nullable=True)
    example_phrase = Column(Text, nullable=True)
    difficulty_level = Column(String(32), nullable=True, index=True)
    quiz_choices = Column(Text, nullable=True)  # JSON-encoded list of distractors

    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))
