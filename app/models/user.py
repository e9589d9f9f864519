from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from app.db import Base


class User(Base):
    __tablename__ = "users"
    # Google account subject ("sub") from the sign-in flow
    id = Column(String, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    name = Column(String, nullable=True)
    picture = Column(String, nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))

    progress = relationship("LearningProgress", back_populates="user", uselist=False, cascade="all, delete-orphan")
    word_progress = relationship("WordProgress", back_populates="user", cascade="all, delete-orphan")
