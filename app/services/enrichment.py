"""Background enrichment of raw lexemes.

Each run takes a small batch of unchecked lexemes, asks the LLM in a single
structured-JSON call whether each word works as a baby name and for learning
metadata (better translation, example phrase, difficulty, quiz distractors),
then persists the answers.

Delivery is at-most-once: a lexeme is marked checked whether or not its
enrichment succeeded, and nothing is retried automatically. Concurrent runs
may pick overlapping lexemes; that race is accepted.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.core.settings import settings
from app.models.baby_name import BabyName, BabyNameGender
from app.models.lexeme import Lexeme
from app.models.learning import DIFFICULTY_LEVELS
from app.services.llm import LLMConfig, LLMService, get_llm_service
from app.utils.slugs import slugify, unique_slug

logger = logging.getLogger("app.enrichment")

SYSTEM_PROMPT = """You are a Sanskrit language and naming expert. Analyze the following Sanskrit words and determine if each would be suitable as a baby name, and prepare learning material for each.

For each word, respond with:
- suitable: boolean (true if this would make a good baby name)
- gender: string ("boy", "girl", or "unisex") - only if suitable is true, otherwise null
- reasoning: string (brief explanation of why this is or isn't suitable as a baby name)
- story: string (if suitable, provide 1-2 sentences of cultural or mythological context) - otherwise null
- improved_translation: string (a clear, natural English translation of the word)
- example_phrase: string (a short Sanskrit phrase using the word, with its English rendering)
- difficulty_level: string ("beginner", "intermediate", or "advanced") for an English-speaking learner
- quiz_choices: array of exactly 3 plausible but wrong English meanings, for a multiple-choice quiz

Criteria for suitability:
1. The word should have a positive or neutral meaning
2. It should be pronounceable as a name
3. It should not be primarily a verb, or grammatical particle
4. Consider traditional usage in Sanskrit/Hindu naming conventions
5. Determine the grammatical gender in Sanskrit to suggest appropriate gender for the name
6. Names of deities, virtues, natural phenomena with positive connotations are usually suitable

Return one result per word, in the same order as the input list.
"""

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "results": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "suitable": {"type": "boolean"},
                    "gender": {"type": "string", "nullable": True},
                    "reasoning": {"type": "string"},
                    "story": {"type": "string", "nullable": True},
                    "improved_translation": {"type": "string", "nullable": True},
                    "example_phrase": {"type": "string", "nullable": True},
                    "difficulty_level": {"type": "string", "nullable": True},
                    "quiz_choices": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["suitable", "reasoning"],
            },
        },
    },
    "required": ["results"],
}

_DIFFICULTY_ALIASES = {"easy": "beginner", "medium": "intermediate", "hard": "advanced"}
_GENDERS = {g.value for g in BabyNameGender}


class EnrichmentBatchError(RuntimeError):
    """The batched LLM call failed or returned something unusable."""


@dataclass
class EnrichmentResult:
    suitable: bool
    gender: Optional[str]
    reasoning: str
    story: Optional[str] = None
    improved_translation: Optional[str] = None
    example_phrase: Optional[str] = None
    difficulty_level: Optional[str] = None
    quiz_choices: List[str] = field(default_factory=list)


@dataclass
class BatchSummary:
    selected: int = 0
    enriched: int = 0
    baby_names_created: int = 0
    failed: int = 0
    batch_failed: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


def select_unprocessed(db: Session, limit: int, priority_letter: str = "") -> List[Lexeme]:
    """Unchecked lexemes; those starting with ``priority_letter`` sort first."""
    q = db.query(Lexeme).filter(Lexeme.baby_name_checked.is_(False))
    letter = (priority_letter or "").strip().upper()
    if letter:
        first = func.upper(func.substr(Lexeme.transliteration, 1, 1))
        q = q.order_by(case((first == letter, 0), else_=1), func.random())
    else:
        q = q.order_by(func.random())
    return q.limit(limit).all()


def build_word_list(lexemes: List[Lexeme]) -> str:
    return "Analyze these words:\n" + "\n".join(
        f"{i}. Sanskrit Word: {lx.sanskrit}, English Meaning: {lx.primary_meaning}"
        for i, lx in enumerate(lexemes, start=1)
    )


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_difficulty(value: Any) -> Optional[str]:
    text = (_clean_str(value) or "").lower()
    text = _DIFFICULTY_ALIASES.get(text, text)
    return text if text in DIFFICULTY_LEVELS else None


def normalize_quiz_choices(value: Any, correct: Optional[str]) -> List[str]:
    """Up to three distinct distractors, none equal to the correct answer."""
    if not isinstance(value, list):
        return []
    seen = {(correct or "").strip().casefold()}
    choices: List[str] = []
    for item in value:
        text = _clean_str(item)
        if not text or text.casefold() in seen:
            continue
        seen.add(text.casefold())
        choices.append(text)
        if len(choices) == 3:
            break
    return choices


def normalize_result(raw: Any, lexeme: Lexeme) -> Optional[EnrichmentResult]:
    if not isinstance(raw, dict):
        return None
    gender = (_clean_str(raw.get("gender")) or "").lower()
    improved = _clean_str(raw.get("improved_translation"))
    return EnrichmentResult(
        suitable=raw.get("suitable") is True,
        gender=gender if gender in _GENDERS else None,
        reasoning=_clean_str(raw.get("reasoning")) or "No reasoning provided",
        story=_clean_str(raw.get("story")),
        improved_translation=improved,
        example_phrase=_clean_str(raw.get("example_phrase")),
        difficulty_level=normalize_difficulty(raw.get("difficulty_level")),
        quiz_choices=normalize_quiz_choices(raw.get("quiz_choices"), improved or lexeme.primary_meaning),
    )


def request_enrichment(lexemes: List[Lexeme], llm: Optional[LLMService] = None) -> List[Optional[EnrichmentResult]]:
    """One LLM call for the whole batch; results are aligned with ``lexemes``."""
    llm = llm or get_llm_service()
    response = llm.generate(
        system_prompt=SYSTEM_PROMPT,
        user_content=build_word_list(lexemes),
        config=LLMConfig(temperature=0.2, json_mode=True, response_schema=RESPONSE_SCHEMA),
    )
    if not response.success:
        raise EnrichmentBatchError(response.error or "LLM call failed")

    content = response.content
    results = content.get("results") if isinstance(content, dict) else content
    if not isinstance(results, list):
        raise EnrichmentBatchError("LLM response has no results array")

    return [
        normalize_result(results[i], lexeme) if i < len(results) else None
        for i, lexeme in enumerate(lexemes)
    ]


def save_baby_name(db: Session, lexeme: Lexeme, gender: str, story: Optional[str], reasoning: Optional[str]) -> BabyName:
    source = lexeme.transliteration or lexeme.sanskrit
    base_slug = slugify(source, lexeme.id)
    baby_name = BabyName(
        name=lexeme.sanskrit,
        slug=unique_slug(db, BabyName, base_slug, lexeme.id),
        gender=gender,
        meaning=lexeme.primary_meaning,
        pronunciation=source,
        story=story,
        reasoning=reasoning,
        first_letter=source[0].upper(),
        lexeme_id=lexeme.id,
    )
    db.add(baby_name)
    logger.info(f"Added baby name: {lexeme.sanskrit} ({gender}) - slug: {baby_name.slug}")
    return baby_name


def apply_result(db: Session, lexeme: Lexeme, result: EnrichmentResult) -> Optional[BabyName]:
    """Persist one lexeme's enrichment; commits."""
    lexeme.baby_name_checked = True
    lexeme.baby_name_suitable = result.suitable
    lexeme.baby_name_gender = result.gender
    lexeme.improved_translation = result.improved_translation
    lexeme.example_phrase = result.example_phrase
    lexeme.difficulty_level = result.difficulty_level
    lexeme.quiz_choices = json.dumps(result.quiz_choices, ensure_ascii=False) if result.quiz_choices else None

    baby_name = None
    if result.suitable and result.gender:
        baby_name = save_baby_name(db, lexeme, result.gender, result.story, result.reasoning)
    db.commit()
    return baby_name


def mark_checked(db: Session, lexeme_ids: List[int]) -> None:
    if not lexeme_ids:
        return
    db.query(Lexeme).filter(Lexeme.id.in_(lexeme_ids)).update(
        {Lexeme.baby_name_checked: True}, synchronize_session=False
    )
    db.commit()


def process_lexemes_batch(
    db: Session,
    priority_letter: str = "",
    batch_size: Optional[int] = None,
    llm: Optional[LLMService] = None,
) -> BatchSummary:
    summary = BatchSummary()
    lexemes = select_unprocessed(db, batch_size or settings.enrichment_batch_size, priority_letter)
    summary.selected = len(lexemes)
    if not lexemes:
        logger.info("No unprocessed lexemes found")
        return summary

    letter = (priority_letter or "").strip().upper()
    if letter:
        priority_count = sum(
            1 for lx in lexemes if lx.transliteration and lx.transliteration.upper().startswith(letter)
        )
        logger.info(f"Processing {len(lexemes)} lexemes ({priority_count} starting with '{letter}')")
    else:
        logger.info(f"Processing {len(lexemes)} lexemes for baby name suitability")

    lexeme_ids = [lx.id for lx in lexemes]
    try:
        results = request_enrichment(lexemes, llm)
    except Exception as e:
        logger.error(f"Batch enrichment failed, marking {len(lexeme_ids)} lexemes checked: {e}")
        db.rollback()
        mark_checked(db, lexeme_ids)
        summary.batch_failed = True
        return summary

    for lexeme_id, result in zip(lexeme_ids, results):
        if result is None:
            logger.error(f"No result for lexeme {lexeme_id}")
            continue
        lexeme = db.get(Lexeme, lexeme_id)
        try:
            if apply_result(db, lexeme, result) is not None:
                summary.baby_names_created += 1
            summary.enriched += 1
        except Exception as e:
            logger.error(f"Failed to save result for lexeme {lexeme_id}: {e}")
            db.rollback()
            mark_checked(db, [lexeme_id])
            summary.failed += 1

    logger.info(f"Enrichment batch finished: {summary.as_dict()}")
    return summary


def run_enrichment_job(session_factory: Callable[[], Session], priority_letter: str = "") -> None:
    """Background-task entry point; errors are logged, never raised."""
    db = session_factory()
    try:
        process_lexemes_batch(db, priority_letter)
    except Exception:
        logger.exception("Background lexeme processing failed")
    finally:
        db.close()
