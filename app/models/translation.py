from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from datetime import datetime, UTC

from app.db import Base


class TranslationKey(Base):
    """Registry of authored (English) UI strings."""
    __tablename__ = "translation_keys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    translation_key = Column(String(200), nullable=False, unique=True, index=True)
    source_text = Column(Text, nullable=False)
    context = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))


class Translation(Base):
    __tablename__ = "translations"
    __table_args__ = (UniqueConstraint("translation_key", "language_code", name="uq_translation_key_lang"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    translation_key = Column(String(200), nullable=False, index=True)
    language_code = Column(String(16), nullable=False, index=True)
    source_text = Column(Text, nullable=False)
    translated_text = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None),
                        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None))
