from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.learning import DEFAULT_WORDS_LIMIT, MAX_WORDS_LIMIT, get_learning_words

router = APIRouter(prefix="/api/learning-words", tags=["Learning"])


@router.get("")
def learning_words(
    difficulty: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_WORDS_LIMIT, ge=1, le=MAX_WORDS_LIMIT),
    db: Session = Depends(get_db),
):
    """Flashcard/quiz material drawn from enriched baby names."""
    return {"words": get_learning_words(db, difficulty, limit)}
