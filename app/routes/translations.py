import logging
from typing import Callable
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.db import get_db, get_session_factory
from app.exceptions import ValidationException
from app.services.translation import (
    SOURCE_LANGUAGE,
    get_translations,
    is_valid_language_code,
    run_translation_job,
)

logger = logging.getLogger("app.routes.translations")

router = APIRouter(prefix="/api/translations", tags=["Translations"])


@router.get("/{language_code}")
def translations_for_language(
    language_code: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """Cached UI strings for a language; a few missing ones are translated after responding."""
    if not is_valid_language_code(language_code):
        raise ValidationException("Invalid language code")

    translations = get_translations(db, language_code)
    if language_code != SOURCE_LANGUAGE:
        background_tasks.add_task(run_translation_job, session_factory, language_code)
    return {"translations": translations}
