from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from datetime import datetime, UTC

from app.db import Base

POST_STATUSES = ("draft", "published")


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(320), nullable=False, unique=True, index=True)
    content_markdown = Column(Text, nullable=False, default="")
    content_html = Column(Text, nullable=True)
    excerpt = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="draft", index=True)
    published_at = Column(DateTime, nullable=True)
    author_id = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None),
                        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None))
