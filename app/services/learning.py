"""User accounts and learning progress (flashcards, quizzes, stats)."""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.exceptions import NotFoundException, ValidationException
from app.models.baby_name import BabyName
from app.models.learning import DIFFICULTY_LEVELS, LearningProgress, QuizAttempt, WordProgress
from app.models.lexeme import Lexeme
from app.models.user import User
from app.services.lexicon import parse_quiz_choices
from app.utils.datetime import db_now, isoformat_utc

logger = logging.getLogger("app.learning")

DEFAULT_WORDS_LIMIT = 10
MAX_WORDS_LIMIT = 50


def quiz_accuracy(correct: int, taken: int) -> int:
    """Percentage of correct answers rounded half-up; 0 before any quiz."""
    if not taken:
        return 0
    return (200 * correct + taken) // (2 * taken)


def validate_difficulty(difficulty: Optional[str]) -> Optional[str]:
    if difficulty is None:
        return None
    if difficulty not in DIFFICULTY_LEVELS:
        raise ValidationException(f"difficulty must be one of: {', '.join(DIFFICULTY_LEVELS)}")
    return difficulty


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundException("User not found")
    return user


def get_baby_name_or_404(db: Session, baby_name_id: int) -> BabyName:
    name = db.get(BabyName, baby_name_id)
    if not name:
        raise NotFoundException("Baby name not found")
    return name


def ensure_progress(db: Session, user: User) -> LearningProgress:
    if user.progress is None:
        user.progress = LearningProgress(
            words_studied=0,
            flashcards_reviewed=0,
            quizzes_taken=0,
            quizzes_correct=0,
            current_difficulty="beginner",
        )
        db.flush()
    return user.progress


def upsert_user(db: Session, user_id: str, email: str, name: Optional[str] = None, picture: Optional[str] = None) -> User:
    """Create or refresh the account on login; always bumps ``last_login``."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        user = User(id=user_id, email=email, name=name, picture=picture, is_admin=False)
        db.add(user)
        logger.info(f"New user signed up: {user_id}")
    else:
        user.email = email
        if name is not None:
            user.name = name
        if picture is not None:
            user.picture = picture
    user.last_login = db_now()
    ensure_progress(db, user)
    db.commit()
    db.refresh(user)
    return user


def serialize_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "picture": user.picture,
        "is_admin": bool(user.is_admin),
        "last_login": isoformat_utc(user.last_login),
        "created_at": isoformat_utc(user.created_at),
    }


def serialize_progress(progress: LearningProgress) -> Dict[str, Any]:
    return {
        "words_studied": progress.words_studied,
        "flashcards_reviewed": progress.flashcards_reviewed,
        "quizzes_taken": progress.quizzes_taken,
        "quizzes_correct": progress.quizzes_correct,
        "current_difficulty": progress.current_difficulty,
        "updated_at": isoformat_utc(progress.updated_at),
    }


def get_progress(db: Session, user_id: str) -> Dict[str, Any]:
    user = get_user_or_404(db, user_id)
    progress = ensure_progress(db, user)
    db.commit()
    rows = (
        db.query(WordProgress, BabyName)
        .join(BabyName, BabyName.id == WordProgress.baby_name_id)
        .filter(WordProgress.user_id == user_id)
        .order_by(WordProgress.last_reviewed.desc())
        .all()
    )
    words = [
        {
            "baby_name_id": wp.baby_name_id,
            "name": name.name,
            "slug": name.slug,
            "review_count": wp.review_count,
            "confidence_level": wp.confidence_level,
            "last_reviewed": isoformat_utc(wp.last_reviewed),
        }
        for wp, name in rows
    ]
    return {"progress": serialize_progress(progress), "words": words}


def record_flashcard_review(
    db: Session, user_id: str, baby_name_id: int, confidence_level: Optional[int] = None
) -> WordProgress:
    user = get_user_or_404(db, user_id)
    get_baby_name_or_404(db, baby_name_id)
    progress = ensure_progress(db, user)

    word = (
        db.query(WordProgress)
        .filter(WordProgress.user_id == user_id, WordProgress.baby_name_id == baby_name_id)
        .first()
    )
    if word is None:
        word = WordProgress(user_id=user_id, baby_name_id=baby_name_id, review_count=0, confidence_level=0)
        db.add(word)
        progress.words_studied += 1

    word.review_count += 1
    if confidence_level is not None:
        word.confidence_level = confidence_level
    word.last_reviewed = db_now()
    progress.flashcards_reviewed += 1
    db.commit()
    db.refresh(word)
    return word


def record_quiz_attempt(
    db: Session,
    user_id: str,
    baby_name_id: int,
    correct: bool,
    difficulty: Optional[str] = None,
    response_time_ms: Optional[int] = None,
) -> QuizAttempt:
    validate_difficulty(difficulty)
    user = get_user_or_404(db, user_id)
    get_baby_name_or_404(db, baby_name_id)
    progress = ensure_progress(db, user)

    attempt = QuizAttempt(
        user_id=user_id,
        baby_name_id=baby_name_id,
        correct=bool(correct),
        difficulty=difficulty,
        response_time_ms=response_time_ms,
    )
    db.add(attempt)
    progress.quizzes_taken += 1
    if correct:
        progress.quizzes_correct += 1
    if difficulty:
        progress.current_difficulty = difficulty
    db.commit()
    db.refresh(attempt)
    return attempt


def get_stats(db: Session, user_id: str) -> Dict[str, Any]:
    user = get_user_or_404(db, user_id)
    progress = ensure_progress(db, user)
    db.commit()
    reviewed_words = db.query(func.count(WordProgress.id)).filter(WordProgress.user_id == user_id).scalar() or 0
    return {
        "words_studied": progress.words_studied,
        "flashcards_reviewed": progress.flashcards_reviewed,
        "quizzes_taken": progress.quizzes_taken,
        "quizzes_correct": progress.quizzes_correct,
        "quiz_accuracy": quiz_accuracy(progress.quizzes_correct, progress.quizzes_taken),
        "current_difficulty": progress.current_difficulty,
        "words_reviewed": reviewed_words,
    }


def get_learning_words(db: Session, difficulty: Optional[str] = None, limit: int = DEFAULT_WORDS_LIMIT) -> List[Dict[str, Any]]:
    """Enriched baby names with quiz material, random order."""
    validate_difficulty(difficulty)
    if limit < 1 or limit > MAX_WORDS_LIMIT:
        raise ValidationException(f"limit must be between 1 and {MAX_WORDS_LIMIT}")

    q = (
        db.query(BabyName, Lexeme)
        .join(Lexeme, Lexeme.id == BabyName.lexeme_id)
        .filter(Lexeme.difficulty_level.isnot(None))
    )
    if difficulty:
        q = q.filter(Lexeme.difficulty_level == difficulty)
    rows = q.order_by(func.random()).limit(limit).all()

    words = []
    for name, lexeme in rows:
        answer = lexeme.improved_translation or lexeme.primary_meaning
        choices = parse_quiz_choices(lexeme.quiz_choices) + [answer]
        random.shuffle(choices)
        words.append({
            "id": name.id,
            "name": name.name,
            "slug": name.slug,
            "transliteration": lexeme.transliteration,
            "gender": name.gender,
            "meaning": answer,
            "example_phrase": lexeme.example_phrase,
            "difficulty_level": lexeme.difficulty_level,
            "choices": choices,
            "correct_answer": answer,
        })
    return words
