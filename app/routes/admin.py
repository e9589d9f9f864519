"""Admin endpoints: access checks, lexicon/user browsing, daily word, stats, audit trail.

Every route except ``/check`` resolves ``userId`` against ``users.is_admin``
through ``require_admin`` and answers 403 before touching anything.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import NotFoundException, ValidationException
from app.models.admin_audit_log import AdminAuditLog
from app.models.lexeme import Lexeme
from app.models.user import User
from app.models.word_of_day import WordOfDayLog
from app.schemas.admin import AdminCheckOut, SetDailyWordRequest
from app.schemas.user import GrantAdminRequest
from app.services import word_of_day
from app.services.audit import log_admin_action, serialize_entry
from app.services.auth import is_admin, require_admin
from app.services.learning import serialize_user
from app.services.lexicon import format_lexeme_admin
from app.services.metrics import get_overview
from app.utils.datetime import isoformat_utc
from app.utils.pagination import PageParams, paginate

logger = logging.getLogger("app.routes.admin")

router = APIRouter(prefix="/api/admin", tags=["Admin"])


class LexemeUpdate(BaseModel):
    sanskrit: Optional[str] = Field(None, min_length=1)
    transliteration: Optional[str] = None
    primary_meaning: Optional[str] = Field(None, min_length=1)
    part_of_speech: Optional[str] = None
    hindi_meaning: Optional[str] = None
    tags: Optional[str] = None
    improved_translation: Optional[str] = None
    example_phrase: Optional[str] = None


@router.get("/check", response_model=AdminCheckOut)
def check_admin(userId: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Never 403s; the client uses it to decide whether to show the admin area."""
    return {"isAdmin": is_admin(db, userId)}


@router.post("/grant")
def grant_admin(
    payload: GrantAdminRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    target = db.query(User).filter(User.id == payload.target_user_id).first()
    if not target:
        raise NotFoundException("User not found")
    if target.id == admin.id and not payload.is_admin:
        raise ValidationException("Admins cannot revoke their own access")

    target.is_admin = payload.is_admin
    db.add(target)
    log_admin_action(
        db, admin.id, "grant" if payload.is_admin else "revoke", "user", target.id,
        {"email": target.email, "is_admin": payload.is_admin},
    )
    db.refresh(target)
    return serialize_user(target)


# --- Lexicon -----------------------------------------------------------------

@router.get("/lexemes")
def list_lexemes(
    search: Optional[str] = Query(None),
    checked: Optional[bool] = Query(None),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    q = db.query(Lexeme)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(
            Lexeme.sanskrit.ilike(pattern),
            Lexeme.transliteration.ilike(pattern),
            Lexeme.primary_meaning.ilike(pattern),
        ))
    if checked is not None:
        q = q.filter(Lexeme.baby_name_checked.is_(checked))
    rows, total = paginate(q.order_by(Lexeme.id.asc()), page)
    return page.envelope("lexemes", [format_lexeme_admin(lx) for lx in rows], total)


@router.get("/lexemes/{lexeme_id}")
def get_lexeme(lexeme_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    lexeme = db.get(Lexeme, lexeme_id)
    if not lexeme:
        raise NotFoundException("Lexeme not found")
    return format_lexeme_admin(lexeme)


@router.put("/lexemes/{lexeme_id}")
def update_lexeme(
    lexeme_id: int,
    payload: LexemeUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    lexeme = db.get(Lexeme, lexeme_id)
    if not lexeme:
        raise NotFoundException("Lexeme not found")
    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(lexeme, k, v)
    db.add(lexeme)
    log_admin_action(db, admin.id, "update", "lexeme", lexeme.id, {"fields": sorted(data)})
    db.refresh(lexeme)
    return format_lexeme_admin(lexeme)


# --- Users -------------------------------------------------------------------

@router.get("/users")
def list_users(
    search: Optional[str] = Query(None),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    q = db.query(User)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(User.email.ilike(pattern), User.name.ilike(pattern)))
    rows, total = paginate(q.order_by(User.created_at.desc()), page)
    return page.envelope("users", [serialize_user(u) for u in rows], total)


@router.get("/users/{target_user_id}")
def get_user(target_user_id: str, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = db.query(User).filter(User.id == target_user_id).first()
    if not user:
        raise NotFoundException("User not found")
    data = serialize_user(user)
    progress = user.progress
    data["progress"] = {
        "words_studied": progress.words_studied if progress else 0,
        "flashcards_reviewed": progress.flashcards_reviewed if progress else 0,
        "quizzes_taken": progress.quizzes_taken if progress else 0,
        "quizzes_correct": progress.quizzes_correct if progress else 0,
        "current_difficulty": progress.current_difficulty if progress else "beginner",
    }
    return data


# --- Word of the day ---------------------------------------------------------

@router.get("/daily-words")
def daily_words(
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Current pick plus the usage log, most recent first."""
    q = (
        db.query(WordOfDayLog, Lexeme)
        .join(Lexeme, Lexeme.id == WordOfDayLog.lexeme_id)
        .order_by(WordOfDayLog.used_at.desc())
    )
    rows, total = paginate(q, page)
    history = [
        {
            "lexeme_id": lexeme.id,
            "sanskrit": lexeme.sanskrit,
            "transliteration": lexeme.transliteration,
            "primary_meaning": lexeme.primary_meaning,
            "used_at": isoformat_utc(entry.used_at),
        }
        for entry, lexeme in rows
    ]
    status = word_of_day.rotation_status(db)
    status.update(page.envelope("history", history, total))
    return status


@router.post("/daily-words")
def set_daily_word(
    payload: SetDailyWordRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    lexeme = db.get(Lexeme, payload.lexeme_id)
    if not lexeme:
        raise NotFoundException("Lexeme not found")
    word = word_of_day.set_word_of_day(db, lexeme)
    log_admin_action(db, admin.id, "set", "daily_word", lexeme.id, {"sanskrit": lexeme.sanskrit})
    return word


@router.post("/daily-words/reset")
def reset_daily_word(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """Drop the cached pick; the next public read selects a new word."""
    word_of_day.clear_cached_word(db)
    log_admin_action(db, admin.id, "reset", "daily_word")
    return {"success": True}


# --- Stats & audit -----------------------------------------------------------

@router.get("/stats/overview")
def stats_overview(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return get_overview(db)


@router.get("/audit-log")
def audit_log(
    resource_type: Optional[str] = Query(None, alias="resourceType"),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    q = db.query(AdminAuditLog)
    if resource_type:
        q = q.filter(AdminAuditLog.resource_type == resource_type)
    rows, total = paginate(q.order_by(AdminAuditLog.created_at.desc(), AdminAuditLog.id.desc()), page)
    return page.envelope("entries", [serialize_entry(e) for e in rows], total)
