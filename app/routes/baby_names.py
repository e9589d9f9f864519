import logging
from typing import Callable, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.services.llm import llm_available
from app.db import get_db, get_session_factory
from app.exceptions import NotFoundException, ValidationException
from app.models.baby_name import BabyName, BabyNameGender
from app.services.enrichment import run_enrichment_job
from app.services.lexicon import format_baby_name

logger = logging.getLogger("app.routes.baby_names")

router = APIRouter(prefix="/api/baby-names", tags=["Baby Names"])

_GENDER_FILTERS = {"all"} | {g.value for g in BabyNameGender}


@router.get("")
def list_baby_names(
    background_tasks: BackgroundTasks,
    gender: str = Query("all"),
    letter: str = Query(""),
    search: str = Query(""),
    db: Session = Depends(get_db),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """Directory listing. Each call also enriches a few more lexemes in the background."""
    gender = (gender or "all").lower()
    if gender not in _GENDER_FILTERS:
        raise ValidationException(f"gender must be one of: {', '.join(sorted(_GENDER_FILTERS))}")

    q = db.query(BabyName)
    # unisex names belong under both boy and girl
    if gender != "all":
        q = q.filter(or_(BabyName.gender == gender, BabyName.gender == BabyNameGender.unisex.value))
    if letter:
        q = q.filter(BabyName.first_letter == letter.strip().upper())
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(
            BabyName.name.ilike(pattern),
            BabyName.meaning.ilike(pattern),
            BabyName.pronunciation.ilike(pattern),
        ))
    names = [format_baby_name(n) for n in q.order_by(BabyName.name.asc()).all()]

    if llm_available():
        background_tasks.add_task(run_enrichment_job, session_factory, letter)

    return {"names": names}


@router.get("/{slug}")
def get_baby_name(slug: str, db: Session = Depends(get_db)):
    name: Optional[BabyName] = db.query(BabyName).filter(BabyName.slug == slug).first()
    if not name:
        raise NotFoundException("Baby name not found")
    return format_baby_name(name)
