"""Tests for user accounts, learning progress and learning words."""
import json

import pytest

from app.models.learning import LearningProgress, QuizAttempt, WordProgress
from app.models.user import User
from app.services.learning import quiz_accuracy


@pytest.mark.parametrize("correct,taken,expected", [
    (0, 0, 0),
    (1, 2, 50),
    (2, 3, 67),
    (1, 3, 33),
    (1, 8, 13),  # 12.5 rounds up
    (5, 5, 100),
])
def test_quiz_accuracy(correct, taken, expected):
    assert quiz_accuracy(correct, taken) == expected


class TestUpsert:

    def test_creates_user_with_progress(self, client, db_session):
        response = client.post("/api/user/upsert", json={
            "id": "google-123", "email": "Learner@Example.com", "name": "Learner",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "learner@example.com"
        assert data["is_admin"] is False
        assert data["last_login"] is not None

        assert db_session.get(LearningProgress, "google-123").words_studied == 0

    def test_updates_existing_user(self, client, regular_user, db_session):
        response = client.post("/api/user/upsert", json={
            "id": regular_user.id, "email": "new@example.com", "picture": "https://example.com/p.png",
        })
        assert response.status_code == 200
        db_session.expire_all()
        user = db_session.get(User, regular_user.id)
        assert user.email == "new@example.com"
        assert user.picture == "https://example.com/p.png"
        assert user.name == regular_user.name
        assert db_session.query(User).count() == 1

    def test_rejects_bad_email(self, client):
        response = client.post("/api/user/upsert", json={"id": "x", "email": "not-an-email"})
        assert response.status_code == 400


class TestFlashcards:

    def test_first_and_repeat_reviews(self, client, regular_user, make_baby_name, db_session):
        name = make_baby_name()
        payload = {"userId": regular_user.id, "babyNameId": name.id, "confidenceLevel": 3}

        first = client.post("/api/user/flashcard-review", json=payload).json()
        assert first["success"] is True
        assert first["review_count"] == 1
        assert first["confidence_level"] == 3

        second = client.post("/api/user/flashcard-review", json={**payload, "confidenceLevel": 5}).json()
        assert second["review_count"] == 2
        assert second["confidence_level"] == 5

        stats = client.get(f"/api/user/stats?userId={regular_user.id}").json()
        assert stats["words_studied"] == 1
        assert stats["flashcards_reviewed"] == 2
        assert stats["words_reviewed"] == 1
        assert db_session.query(WordProgress).count() == 1

    def test_confidence_out_of_range(self, client, regular_user, make_baby_name):
        name = make_baby_name()
        response = client.post("/api/user/flashcard-review", json={
            "userId": regular_user.id, "babyNameId": name.id, "confidenceLevel": 9,
        })
        assert response.status_code == 400

    def test_unknown_user(self, client, make_baby_name):
        name = make_baby_name()
        response = client.post("/api/user/flashcard-review", json={"userId": "ghost", "babyNameId": name.id})
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_unknown_baby_name(self, client, regular_user):
        response = client.post("/api/user/flashcard-review", json={"userId": regular_user.id, "babyNameId": 999})
        assert response.status_code == 404
        assert response.json()["detail"] == "Baby name not found"


class TestQuizzes:

    def test_attempts_update_stats(self, client, regular_user, make_baby_name, db_session):
        name = make_baby_name()
        for correct in (True, False, True):
            response = client.post("/api/user/quiz-attempt", json={
                "userId": regular_user.id, "babyNameId": name.id, "correct": correct,
                "difficulty": "intermediate", "responseTimeMs": 1200,
            })
            assert response.status_code == 200
            assert response.json()["correct"] is correct

        stats = client.get(f"/api/user/stats?userId={regular_user.id}").json()
        assert stats["quizzes_taken"] == 3
        assert stats["quizzes_correct"] == 2
        assert stats["quiz_accuracy"] == 67
        assert stats["current_difficulty"] == "intermediate"
        assert db_session.query(QuizAttempt).count() == 3

    def test_invalid_difficulty(self, client, regular_user, make_baby_name):
        name = make_baby_name()
        response = client.post("/api/user/quiz-attempt", json={
            "userId": regular_user.id, "babyNameId": name.id, "correct": True, "difficulty": "expert",
        })
        assert response.status_code == 400


def test_stats_before_any_activity(client, regular_user):
    stats = client.get(f"/api/user/stats?userId={regular_user.id}").json()
    assert stats["quiz_accuracy"] == 0
    assert stats["current_difficulty"] == "beginner"


def test_progress_lists_reviewed_words(client, regular_user, make_baby_name):
    name = make_baby_name()
    client.post("/api/user/flashcard-review", json={"userId": regular_user.id, "babyNameId": name.id})

    data = client.get(f"/api/user/progress?userId={regular_user.id}").json()
    assert data["progress"]["flashcards_reviewed"] == 1
    assert data["words"][0]["slug"] == name.slug
    assert data["words"][0]["review_count"] == 1


def test_progress_requires_user_id(client):
    assert client.get("/api/user/progress").status_code == 400


class TestLearningWords:

    def test_choices_include_answer(self, client, make_baby_name):
        make_baby_name("अदिति", "aditi", "girl", "boundless",
                       difficulty_level="beginner", improved_translation="limitless",
                       quiz_choices=json.dumps(["fire", "water", "sky"]))
        make_baby_name("उषा", "usha", "girl", "dawn")  # not enriched for learning

        words = client.get("/api/learning-words").json()["words"]
        assert len(words) == 1
        word = words[0]
        assert word["correct_answer"] == "limitless"
        assert sorted(word["choices"]) == ["fire", "limitless", "sky", "water"]
        assert word["difficulty_level"] == "beginner"

    def test_difficulty_filter(self, client, make_baby_name):
        make_baby_name("अदिति", "aditi", "girl", "boundless", difficulty_level="beginner")
        make_baby_name("अर्जुन", "arjun", "boy", "bright", difficulty_level="advanced")

        words = client.get("/api/learning-words?difficulty=advanced").json()["words"]
        assert [w["slug"] for w in words] == ["arjun"]
        assert words[0]["choices"] == ["bright"]

    def test_limit_bounds(self, client):
        assert client.get("/api/learning-words?limit=0").status_code == 400
        assert client.get("/api/learning-words?limit=51").status_code == 400
        assert client.get("/api/learning-words?difficulty=expert").status_code == 400
