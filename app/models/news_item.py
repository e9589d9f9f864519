from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from datetime import datetime, UTC

from app.db import Base


class NewsItem(Base):
    __tablename__ = "news_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    content_markdown = Column(Text, nullable=False, default="")
    content_html = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)
    source_name = Column(String(200), nullable=True)
    status = Column(String(16), nullable=False, default="published", index=True)
    published_at = Column(DateTime, nullable=True)
    created_by = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None),
                        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None))
