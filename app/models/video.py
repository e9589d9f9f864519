from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from datetime import datetime, UTC

from app.db import Base

VIDEO_CATEGORIES = ("Pronunciation", "Grammar", "Culture", "Stories", "Mantras", "Songs", "Other")


class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    youtube_url = Column(Text, nullable=False)
    youtube_id = Column(String(32), nullable=False, index=True)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    category = Column(String(64), nullable=False, default="Other")
    thumbnail_url = Column(Text, nullable=True)
    published_at = Column(DateTime, nullable=True)
    created_by = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None),
                        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None))
