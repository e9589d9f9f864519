"""Read-side helpers turning stored lexeme/baby-name rows into API payloads."""
from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.models.baby_name import BabyName
from app.models.lexeme import Lexeme
from app.utils.datetime import isoformat_utc, utc_now

_MEANING_SPLIT_RE = re.compile(r"[,;]+")


def parse_meaning_field(value: Optional[str]) -> List[str]:
    """JSON array when possible, otherwise comma/semicolon separated text."""
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, list):
        return [str(item) for item in parsed if item]
    return [item.strip() for item in _MEANING_SPLIT_RE.split(value) if item.strip()]


def parse_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def parse_quiz_choices(value: Optional[str]) -> List[str]:
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return []
    return [str(c) for c in parsed if c] if isinstance(parsed, list) else []


def format_lexeme(lexeme: Lexeme, selected_at: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "id": lexeme.id,
        "sanskrit": lexeme.sanskrit,
        "transliteration": lexeme.transliteration,
        "primaryMeaning": lexeme.primary_meaning,
        "meanings": parse_meaning_field(lexeme.english_meanings),
        "partOfSpeech": lexeme.part_of_speech,
        "hindiMeaning": lexeme.hindi_meaning,
        "tags": parse_tags(lexeme.tags),
        "rawEntry": lexeme.raw_entry,
        "selectedAt": isoformat_utc(selected_at or utc_now()),
    }


def format_lexeme_admin(lexeme: Lexeme) -> Dict[str, Any]:
    """Full row including enrichment state, for the admin lexicon browser."""
    return {
        "id": lexeme.id,
        "sanskrit": lexeme.sanskrit,
        "transliteration": lexeme.transliteration,
        "primary_meaning": lexeme.primary_meaning,
        "english_meanings": parse_meaning_field(lexeme.english_meanings),
        "part_of_speech": lexeme.part_of_speech,
        "hindi_meaning": lexeme.hindi_meaning,
        "tags": parse_tags(lexeme.tags),
        "baby_name_checked": bool(lexeme.baby_name_checked),
        "baby_name_suitable": lexeme.baby_name_suitable,
        "baby_name_gender": lexeme.baby_name_gender,
        "improved_translation": lexeme.improved_translation,
        "example_phrase": lexeme.example_phrase,
        "difficulty_level": lexeme.difficulty_level,
        "quiz_choices": parse_quiz_choices(lexeme.quiz_choices),
    }


def format_baby_name(name: BabyName) -> Dict[str, Any]:
    return {
        "id": name.id,
        "name": name.name,
        "slug": name.slug,
        "gender": name.gender,
        "meaning": name.meaning,
        "pronunciation": name.pronunciation,
        "story": name.story,
        "reasoning": name.reasoning,
        "first_letter": name.first_letter,
        "lexeme_id": name.lexeme_id,
        "created_at": isoformat_utc(name.created_at),
    }
