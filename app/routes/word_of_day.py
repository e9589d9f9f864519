import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.word_of_day import NoLexemesAvailable, get_word_of_day

logger = logging.getLogger("app.routes.word_of_day")

router = APIRouter(prefix="/api/word-of-day", tags=["Word of the Day"])


@router.get("")
def word_of_day(db: Session = Depends(get_db)):
    """Today's featured lexeme; stable for the whole rotation window."""
    try:
        return get_word_of_day(db)
    except (NoLexemesAvailable, SQLAlchemyError) as e:
        db.rollback()
        logger.error(f"Failed to retrieve word of the day: {e}")
        raise HTTPException(status_code=500, detail="Unable to retrieve word of the day")
