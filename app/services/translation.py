"""UI string translations.

English is the authored source language. Other languages are filled in
lazily: each read of a language schedules a small background batch that
machine-translates a few registry keys still missing for it.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

import httpx
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.models.translation import Translation, TranslationKey
from app.utils.datetime import db_now

logger = logging.getLogger("app.translation")

SOURCE_LANGUAGE = "en"
_LANGUAGE_RE = re.compile(r"^[a-z]{2,3}(-[A-Za-z]{2,4})?$")


class TranslationError(RuntimeError):
    """The external translation API did not return a usable answer."""


def is_valid_language_code(code: str) -> bool:
    return bool(code and _LANGUAGE_RE.match(code))


def get_translations(db: Session, language_code: str) -> Dict[str, str]:
    rows = (
        db.query(Translation.translation_key, Translation.translated_text)
        .filter(Translation.language_code == language_code)
        .all()
    )
    return {key: text for key, text in rows}


def find_untranslated(db: Session, language_code: str, limit: int) -> List[TranslationKey]:
    """Registry keys with no translation in ``language_code``, random order."""
    return (
        db.query(TranslationKey)
        .outerjoin(
            Translation,
            and_(
                Translation.translation_key == TranslationKey.translation_key,
                Translation.language_code == language_code,
            ),
        )
        .filter(Translation.id.is_(None))
        .order_by(func.random())
        .limit(limit)
        .all()
    )


def translate_text(text: str, target_language: str, client: Optional[httpx.Client] = None) -> str:
    """Translate one string via the external translation API."""
    owns_client = client is None
    client = client or httpx.Client(timeout=settings.http_timeout_seconds)
    try:
        response = client.post(settings.translate_api_url, json={"text": text, "to": target_language})
        if response.status_code != 200:
            raise TranslationError(f"Translation API returned {response.status_code}")
        data = response.json()
    except httpx.HTTPError as e:
        raise TranslationError(f"Translation API request failed: {e}") from e
    finally:
        if owns_client:
            client.close()
    return data.get("translatedText") or data.get("text") or text


def upsert_translation(db: Session, key: str, language_code: str, source_text: str, translated_text: str) -> Translation:
    """Insert or update keyed by (translation_key, language_code)."""
    row = (
        db.query(Translation)
        .filter(Translation.translation_key == key, Translation.language_code == language_code)
        .first()
    )
    if row is None:
        row = Translation(
            translation_key=key,
            language_code=language_code,
            source_text=source_text,
            translated_text=translated_text,
        )
        db.add(row)
    else:
        row.translated_text = translated_text
        row.updated_at = db_now()
    db.commit()
    return row


def process_translations_batch(
    db: Session,
    language_code: str,
    batch_size: Optional[int] = None,
    translator: Callable[[str, str], str] | None = None,
) -> int:
    """Translate up to ``batch_size`` missing keys; returns how many were saved."""
    if language_code == SOURCE_LANGUAGE:
        return 0

    translator = translator or translate_text
    pending = find_untranslated(db, language_code, batch_size or settings.translation_batch_size)
    if not pending:
        logger.info(f"No untranslated strings found for {language_code}")
        return 0

    logger.info(f"Found {len(pending)} untranslated strings for {language_code}")
    saved = 0
    for item in pending:
        key, source_text = item.translation_key, item.source_text
        try:
            translated = translator(source_text, language_code)
            upsert_translation(db, key, language_code, source_text, translated)
            saved += 1
            logger.debug(f"Saved translation: {key} -> {translated}")
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to translate {key!r} to {language_code}: {e}")

    logger.info(f"Completed translation batch for {language_code}: {saved}/{len(pending)} saved")
    return saved


def run_translation_job(session_factory: Callable[[], Session], language_code: str) -> None:
    """Background-task entry point; errors are logged, never raised."""
    db = session_factory()
    try:
        process_translations_batch(db, language_code)
    except Exception:
        logger.exception("Background translation processing failed")
    finally:
        db.close()


def register_keys(db: Session, strings: Dict[str, str]) -> int:
    """Add missing keys to the registry (English source text). Returns the number added."""
    existing = {k for (k,) in db.query(TranslationKey.translation_key).all()}
    added = 0
    for key, source_text in strings.items():
        if key in existing:
            continue
        db.add(TranslationKey(translation_key=key, source_text=source_text))
        added += 1
    db.commit()
    return added
