"""UI strings: bundled English defaults plus per-language overrides from the API."""
from __future__ import annotations

import logging
from typing import Dict, Optional

from vaan_client.api import VaanAPIError, VaanClient

logger = logging.getLogger("vaan_client.i18n")

FALLBACK_LANGUAGE = "en"

DEFAULT_STRINGS: Dict[str, str] = {
    "nav.home": "Home",
    "nav.translate": "Translate",
    "nav.babyNames": "Baby Names",
    "nav.dailyWord": "Daily Word",
    "nav.learn": "Learn",
    "nav.aiCompanion": "AI Companion",
    "nav.donate": "Donate",
    "hero.title": "Discover the Beauty of Sanskrit",
    "hero.subtitle": "Your gateway to ancient wisdom and linguistic elegance",
    "hero.cta": "Start Learning",
    "translate.title": "Sanskrit Translation",
    "translate.placeholder": "Enter text to translate to Sanskrit...",
    "translate.button": "Translate",
    "translate.result": "Translation",
    "babyNames.title": "Sanskrit Baby Names",
    "babyNames.subtitle": "Find the perfect name with deep meaning for your baby",
    "babyNames.search": "Search for names...",
    "babyNames.gender": "Gender",
    "babyNames.all": "All",
    "babyNames.boy": "Boy",
    "babyNames.girl": "Girl",
    "babyNames.meaning": "Meaning",
    "babyNames.pronunciation": "Pronunciation",
    "daily.title": "Daily Sanskrit Word",
    "daily.shareOn": "Share on",
    "daily.download": "Download",
    "daily.word": "Word",
    "daily.pronunciation": "Pronunciation",
    "daily.meaning": "Meaning",
    "daily.story": "Story",
    "learn.title": "Learn Sanskrit",
    "learn.flashcards": "Flashcards",
    "learn.quiz": "Quiz",
    "learn.progress": "Your Progress",
    "learn.flip": "Flip",
    "learn.next": "Next",
    "learn.previous": "Previous",
    "learn.checkAnswer": "Check Answer",
    "donate.title": "Support Sanskrit Revival",
    "donate.subtitle": "Help us preserve and promote the Sanskrit language",
    "donate.oneTime": "One-Time",
    "donate.monthly": "Monthly",
    "donate.custom": "Custom Amount",
    "donate.button": "Donate Now",
    "donate.secure": "Secure payment via Stripe",
    "settings.title": "Settings",
    "settings.theme": "Theme",
    "settings.light": "Light",
    "settings.dark": "Dark",
    "settings.language": "Language",
    "settings.font": "Font",
    "common.loading": "Loading...",
    "common.error": "Error",
    "common.success": "Success",
    "common.close": "Close",
    "common.save": "Save",
    "common.cancel": "Cancel",
}


class Translator:
    """``t(key)`` looks up the active language, then English, then echoes the key."""

    def __init__(self, client: Optional[VaanClient] = None, language: str = FALLBACK_LANGUAGE):
        self._client = client
        self._overrides: Dict[str, Dict[str, str]] = {}
        self.language = FALLBACK_LANGUAGE
        self.set_language(language)

    def set_language(self, language: str) -> None:
        self.language = language or FALLBACK_LANGUAGE
        if self.language == FALLBACK_LANGUAGE or self.language in self._overrides or self._client is None:
            return
        try:
            self._overrides[self.language] = self._client.translations(self.language)
        except VaanAPIError as e:
            logger.warning(f"Could not load translations for {self.language}: {e}")
            self._overrides[self.language] = {}

    def t(self, key: str) -> str:
        return self._overrides.get(self.language, {}).get(key) or DEFAULT_STRINGS.get(key, key)
