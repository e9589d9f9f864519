"""Word-of-the-day rotation.

A singleton state row caches the current pick for ``settings.word_ttl_hours``.
Picks never repeat until every lexeme has been used once; then the usage log
is cleared and the rotation starts over.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.models.lexeme import Lexeme
from app.models.word_of_day import STATE_ROW_ID, WordOfDayLog, WordOfDayState
from app.services.lexicon import format_lexeme
from app.utils.datetime import ensure_aware_utc, to_naive_utc, utc_now

logger = logging.getLogger("app.word_of_day")


class NoLexemesAvailable(RuntimeError):
    """The lexicon is empty, so there is nothing to feature."""


def _ttl() -> timedelta:
    return timedelta(hours=settings.word_ttl_hours)


def get_cached_word(db: Session, now: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
    """Return the cached pick if it is younger than the TTL, clearing it otherwise."""
    now = now or utc_now()
    state = db.get(WordOfDayState, STATE_ROW_ID)
    if state is None:
        return None

    selected_at = ensure_aware_utc(state.selected_at)
    lexeme = db.get(Lexeme, state.lexeme_id)
    if selected_at is not None and lexeme is not None and now - selected_at < _ttl():
        return format_lexeme(lexeme, selected_at)

    logger.info("Word of the day cache expired (lexeme_id=%s)", state.lexeme_id)
    clear_cached_word(db)
    return None


def clear_cached_word(db: Session) -> None:
    db.query(WordOfDayState).filter(WordOfDayState.id == STATE_ROW_ID).delete()
    db.commit()


def pick_next_lexeme(db: Session, allow_reset: bool = True) -> Optional[Lexeme]:
    """Random lexeme absent from the usage log; resets the log at most once."""
    lexeme = (
        db.query(Lexeme)
        .outerjoin(WordOfDayLog, WordOfDayLog.lexeme_id == Lexeme.id)
        .filter(WordOfDayLog.lexeme_id.is_(None))
        .order_by(func.random())
        .first()
    )
    if lexeme is not None or not allow_reset:
        return lexeme

    cleared = db.query(WordOfDayLog).delete()
    db.commit()
    logger.info("Word of the day rotation exhausted; cleared %s log entries", cleared)
    return pick_next_lexeme(db, allow_reset=False)


def _insert_for(db: Session):
    """Dialect insert with ON CONFLICT support (Postgres in production, SQLite in tests)."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"Unsupported database dialect for word of the day: {dialect}")


def record_selection(db: Session, lexeme: Lexeme, now: Optional[datetime] = None) -> datetime:
    """Append to the usage log and upsert the singleton state row.

    Both writes are single ON CONFLICT statements, so two requests picking at
    once cannot collide on the primary keys; the later pick wins.
    """
    selected_at = to_naive_utc(now or utc_now())
    insert = _insert_for(db)

    db.execute(
        insert(WordOfDayLog)
        .values(lexeme_id=lexeme.id, used_at=selected_at)
        .on_conflict_do_nothing(index_elements=["lexeme_id"])
    )
    state = insert(WordOfDayState).values(id=STATE_ROW_ID, lexeme_id=lexeme.id, selected_at=selected_at)
    db.execute(state.on_conflict_do_update(
        index_elements=["id"],
        set_={"lexeme_id": state.excluded.lexeme_id, "selected_at": state.excluded.selected_at},
    ))
    db.commit()
    return selected_at


def get_word_of_day(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Today's word; the same lexeme is returned for the whole TTL window."""
    now = now or utc_now()
    cached = get_cached_word(db, now)
    if cached:
        return cached

    lexeme = pick_next_lexeme(db, allow_reset=True)
    if lexeme is None:
        raise NoLexemesAvailable("No lexemes available")

    selected_at = record_selection(db, lexeme, now)
    logger.info("Selected new word of the day: lexeme_id=%s (%s)", lexeme.id, lexeme.sanskrit)
    return format_lexeme(lexeme, selected_at)


def set_word_of_day(db: Session, lexeme: Lexeme, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Force ``lexeme`` as the current pick (admin override)."""
    selected_at = record_selection(db, lexeme, now)
    return format_lexeme(lexeme, selected_at)


def rotation_status(db: Session) -> Dict[str, Any]:
    state = db.get(WordOfDayState, STATE_ROW_ID)
    current = None
    if state is not None:
        lexeme = db.get(Lexeme, state.lexeme_id)
        if lexeme is not None:
            current = format_lexeme(lexeme, state.selected_at)
    return {
        "current": current,
        "used_count": db.query(WordOfDayLog).count(),
        "total_lexemes": db.query(Lexeme).count(),
        "ttl_hours": settings.word_ttl_hours,
    }
