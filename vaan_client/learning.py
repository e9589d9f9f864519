"""Flashcard and quiz session over the ``/api/learning-words`` material."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from vaan_client.api import VaanAPIError, VaanClient
from vaan_client.state import AuthState

logger = logging.getLogger("vaan_client.learning")


class LearningSession:
    def __init__(
        self,
        words: List[Dict[str, Any]],
        client: Optional[VaanClient] = None,
        auth: Optional[AuthState] = None,
        difficulty: Optional[str] = None,
    ):
        if not words:
            raise ValueError("A learning session needs at least one word")
        self.words = words
        self.difficulty = difficulty
        self._client = client
        self._auth = auth

        self.card_index = 0
        self.flipped = False

        self.quiz_index = 0
        self.score = 0
        self.completed = 0
        self._asked_at = time.monotonic()

    @classmethod
    def start(cls, client: VaanClient, auth: Optional[AuthState] = None,
              difficulty: Optional[str] = None, limit: int = 10) -> "LearningSession":
        return cls(client.learning_words(difficulty, limit), client=client, auth=auth, difficulty=difficulty)

    @property
    def _user_id(self) -> Optional[str]:
        if self._client is None or self._auth is None or self._auth.user is None:
            return None
        return self._auth.user.id

    # Flashcards

    @property
    def current_card(self) -> Dict[str, Any]:
        return self.words[self.card_index]

    def flip(self) -> bool:
        self.flipped = not self.flipped
        return self.flipped

    def next_card(self) -> Dict[str, Any]:
        self.flipped = False
        self.card_index = (self.card_index + 1) % len(self.words)
        return self.current_card

    def previous_card(self) -> Dict[str, Any]:
        self.flipped = False
        self.card_index = (self.card_index - 1) % len(self.words)
        return self.current_card

    def mark_reviewed(self, confidence_level: Optional[int] = None) -> None:
        """Report the current card as reviewed, when someone is signed in."""
        user_id = self._user_id
        if user_id is None:
            return
        try:
            self._client.flashcard_review(user_id, self.current_card["id"], confidence_level)
        except VaanAPIError as e:
            logger.warning(f"Could not record flashcard review: {e}")

    # Quiz

    @property
    def current_question(self) -> Dict[str, Any]:
        return self.words[self.quiz_index]

    @property
    def progress_percent(self) -> float:
        return self.completed / len(self.words) * 100

    def answer(self, choice: str) -> bool:
        word = self.current_question
        correct = choice == word["correct_answer"]
        if correct:
            self.score += 1
        self.completed += 1

        user_id = self._user_id
        if user_id is not None:
            elapsed_ms = int((time.monotonic() - self._asked_at) * 1000)
            try:
                self._client.quiz_attempt(
                    user_id, word["id"], correct,
                    difficulty=self.difficulty or word.get("difficulty_level"),
                    response_time_ms=elapsed_ms,
                )
            except VaanAPIError as e:
                logger.warning(f"Could not record quiz attempt: {e}")
        return correct

    def next_question(self) -> Dict[str, Any]:
        """Advance; after the last question the quiz starts over with a fresh score."""
        if self.quiz_index < len(self.words) - 1:
            self.quiz_index += 1
        else:
            self.quiz_index = 0
            self.score = 0
            self.completed = 0
        self._asked_at = time.monotonic()
        return self.current_question
