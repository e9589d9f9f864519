from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from app.db import Base

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")


def _now():
    return datetime.now(UTC).replace(tzinfo=None)


class LearningProgress(Base):
    __tablename__ = "learning_progress"

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    words_studied = Column(Integer, nullable=False, default=0)
    flashcards_reviewed = Column(Integer, nullable=False, default=0)
    quizzes_taken = Column(Integer, nullable=False, default=0)
    quizzes_correct = Column(Integer, nullable=False, default=0)
    current_difficulty = Column(String(32), nullable=False, default="beginner")
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    user = relationship("User", back_populates="progress")


class WordProgress(Base):
    __tablename__ = "word_progress"
    __table_args__ = (UniqueConstraint("user_id", "baby_name_id", name="uq_word_progress_user_name"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    baby_name_id = Column(Integer, ForeignKey("baby_names.id"), nullable=False, index=True)
    review_count = Column(Integer, nullable=False, default=0)
    confidence_level = Column(Integer, nullable=False, default=0)  # 0-5 self rating
    last_reviewed = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="word_progress")
    baby_name = relationship("BabyName")


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    baby_name_id = Column(Integer, ForeignKey("baby_names.id"), nullable=False, index=True)
    correct = Column(Boolean, nullable=False)
    difficulty = Column(String(32), nullable=True)
    response_time_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_now)
