import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.learning import FlashcardReview, QuizAttemptCreate
from app.schemas.user import UserOut, UserUpsert
from app.services import learning
from app.utils.datetime import isoformat_utc

logger = logging.getLogger("app.routes.user")

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.post("/upsert", response_model=UserOut)
def upsert_user(payload: UserUpsert, db: Session = Depends(get_db)):
    user = learning.upsert_user(db, payload.id, payload.email, payload.name, payload.picture)
    return learning.serialize_user(user)


@router.get("/progress")
def get_progress(userId: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return learning.get_progress(db, userId)


@router.post("/flashcard-review")
def flashcard_review(payload: FlashcardReview, db: Session = Depends(get_db)):
    word = learning.record_flashcard_review(db, payload.user_id, payload.baby_name_id, payload.confidence_level)
    return {
        "success": True,
        "baby_name_id": word.baby_name_id,
        "review_count": word.review_count,
        "confidence_level": word.confidence_level,
        "last_reviewed": isoformat_utc(word.last_reviewed),
    }


@router.post("/quiz-attempt")
def quiz_attempt(payload: QuizAttemptCreate, db: Session = Depends(get_db)):
    attempt = learning.record_quiz_attempt(
        db,
        payload.user_id,
        payload.baby_name_id,
        payload.correct,
        difficulty=payload.difficulty,
        response_time_ms=payload.response_time_ms,
    )
    return {"success": True, "attempt_id": attempt.id, "correct": attempt.correct}


@router.get("/stats")
def get_stats(userId: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return learning.get_stats(db, userId)
