"""Parsing for the flat Sanskrit wordlist consumed by scripts/ingest_wordlist.py.

Each usable line looks like::

    सत्यम् (satyam) = n. truth, reality

i.e. headword, optional transliteration in parentheses, ``=``, then an
optional part-of-speech abbreviation followed by the English meanings.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

POS_MAP = {
    "adj": "adjective",
    "adv": "adverb",
    "m": "masculine noun",
    "f": "feminine noun",
    "n": "neuter noun",
    "masc": "masculine noun",
    "fem": "feminine noun",
    "neu": "neuter noun",
    "pron": "pronoun",
    "prep": "preposition",
    "pref": "prefix",
    "suf": "suffix",
    "suffix": "suffix",
    "prefix": "prefix",
    "num": "numeral",
    "conj": "conjunction",
    "int": "interjection",
    "interj": "interjection",
    "part": "particle",
    "ppp": "past passive participle",
    "pp": "past participle",
    "ger": "gerund",
    "vt": "transitive verb",
    "vi": "intransitive verb",
    "v": "verb",
}

_HEADWORD_RE = re.compile(r"^(.*?)\s*\((.*?)\)\s*$")
_POS_PREFIX_RE = re.compile(r"^([a-zA-Z./]+)\s+(.+)")
_OR_RE = re.compile(r"\s+or\s+", re.IGNORECASE)
_SPLIT_RE = re.compile(r"[,;/]+")


@dataclass
class WordlistEntry:
    sanskrit: str
    transliteration: Optional[str]
    primary_meaning: str
    english_meanings: List[str] = field(default_factory=list)
    part_of_speech: Optional[str] = None
    hindi_meaning: Optional[str] = None
    tags: Optional[str] = None
    raw: str = ""

    def to_row(self) -> dict:
        """Column mapping for the ``lexemes`` table."""
        return {
            "sanskrit": self.sanskrit,
            "transliteration": self.transliteration,
            "primary_meaning": self.primary_meaning,
            "english_meanings": json.dumps(self.english_meanings, ensure_ascii=False),
            "part_of_speech": self.part_of_speech,
            "hindi_meaning": self.hindi_meaning,
            "tags": self.tags,
            "raw_entry": self.raw,
        }


def parse_line(line: str | None) -> Optional[WordlistEntry]:
    """Parse one wordlist line; blank, comment and malformed lines give None."""
    if not line:
        return None
    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#"):
        return None

    left, sep, right = trimmed.partition("=")
    if not sep:
        return None
    left, right = left.strip(), right.strip()
    if not left or not right:
        return None

    sanskrit, transliteration = _split_headword(left)
    meanings, primary, pos = _extract_meanings(right)
    return WordlistEntry(
        sanskrit=sanskrit,
        transliteration=transliteration,
        primary_meaning=primary,
        english_meanings=meanings,
        part_of_speech=pos,
        raw=trimmed,
    )


def _split_headword(left: str) -> tuple[str, Optional[str]]:
    match = _HEADWORD_RE.match(left)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return left.strip(), None


def _detect_part_of_speech(meaning: str) -> Optional[tuple[str, str]]:
    match = _POS_PREFIX_RE.match(meaning.strip())
    if not match:
        return None
    prefix = match.group(1)
    if prefix.endswith("."):
        prefix = prefix[:-1]
    mapped = POS_MAP.get(prefix.lower())
    if not mapped:
        return None
    return mapped, match.group(2).strip()


def _extract_meanings(right: str) -> tuple[List[str], str, Optional[str]]:
    primary = " ".join(right.split())
    pos = None
    detected = _detect_part_of_speech(primary)
    if detected:
        pos, primary = detected

    parts = [p.strip() for p in _SPLIT_RE.split(_OR_RE.sub(",", primary))]
    meanings = [p for p in parts if p] or [primary]
    return meanings, meanings[0], pos


def iter_entries(path: Path | str, limit: int | None = None) -> Iterator[WordlistEntry]:
    """Yield parsed entries from a UTF-8 wordlist file, stopping after ``limit``."""
    count = 0
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            entry = parse_line(line)
            if entry is None:
                continue
            yield entry
            count += 1
            if limit and count >= limit:
                return


def chunked(items: list, size: int) -> Iterator[list]:
    for start in range(0, len(items), size):
        yield items[start:start + size]
