"""Tests for the vaan_client package (HTTP wrapper, local state, translator, learning session)."""
import json

import httpx
import pytest

from vaan_client.api import VaanAPIError, VaanClient
from vaan_client.i18n import DEFAULT_STRINGS, Translator
from vaan_client.learning import LearningSession
from vaan_client.state import (
    FONT_KEY,
    LIKES_KEY,
    USER_KEY,
    AdminState,
    AuthState,
    LikesState,
    PreferencesState,
)
from vaan_client.storage import JsonFileStorage, MemoryStorage

USERINFO = {"sub": "google-42", "email": "learner@example.com", "name": "Learner", "picture": "https://p/x.png"}


class FakeServer:
    """Routes requests to canned JSON answers and remembers what it saw."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        status, body = answer if isinstance(answer, tuple) else (200, answer)
        return httpx.Response(status, json=body)

    def body(self, index=-1):
        return json.loads(self.requests[index].content)


def _client(server):
    return VaanClient("http://api.test", transport=httpx.MockTransport(server))


class TestVaanClient:

    def test_get_with_params(self):
        server = FakeServer({("GET", "/api/baby-names"): {"names": [{"slug": "aditi"}]}})
        names = _client(server).baby_names(gender="girl", letter="A")
        assert names == [{"slug": "aditi"}]
        assert server.requests[0].url.params["gender"] == "girl"
        assert server.requests[0].url.params["letter"] == "A"

    def test_none_params_are_dropped(self):
        server = FakeServer({("GET", "/api/learning-words"): {"words": []}})
        _client(server).learning_words(limit=5)
        params = server.requests[0].url.params
        assert "difficulty" not in params
        assert params["limit"] == "5"

    def test_error_carries_detail(self):
        server = FakeServer({("GET", "/api/baby-names/ghost"): (404, {"detail": "Baby name not found"})})
        with pytest.raises(VaanAPIError) as exc:
            _client(server).baby_name("ghost")
        assert exc.value.status_code == 404
        assert exc.value.detail == "Baby name not found"

    @pytest.mark.parametrize("body", [["first", "second"], "plain message"])
    def test_error_body_that_is_not_an_object(self, body):
        server = FakeServer({("GET", "/api/word-of-day"): (502, body)})
        with pytest.raises(VaanAPIError) as exc:
            _client(server).word_of_day()
        assert exc.value.status_code == 502
        assert exc.value.detail == body

    def test_error_body_that_is_not_json(self):
        def handler(request):
            return httpx.Response(503, text="upstream down")

        with pytest.raises(VaanAPIError) as exc:
            VaanClient("http://api.test", transport=httpx.MockTransport(handler)).word_of_day()
        assert exc.value.detail == "upstream down"

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(VaanAPIError) as exc:
            VaanClient(transport=httpx.MockTransport(handler)).word_of_day()
        assert exc.value.status_code == 0

    def test_checkout_body(self):
        server = FakeServer({("POST", "/api/create-checkout-session"): {"url": "https://checkout.stripe.com/x"}})
        url = _client(server).create_checkout_session(2500, "monthly", "https://s", "https://c", test_mode=True)
        assert url == "https://checkout.stripe.com/x"
        assert server.body() == {
            "amount": 2500, "type": "monthly", "testMode": True,
            "successUrl": "https://s", "cancelUrl": "https://c",
        }

    def test_admin_writes_put_user_id_in_body(self):
        server = FakeServer({("PUT", "/api/admin/blog/3"): {"id": 3}})
        _client(server).admin_update("blog", "admin-1", 3, {"status": "published"})
        assert server.body() == {"userId": "admin-1", "status": "published"}

    def test_admin_list_defaults_to_public(self):
        server = FakeServer({("GET", "/api/admin/videos"): {"videos": [], "total": 0, "page": 1, "limit": 20}})
        _client(server).admin_list("videos", category="Grammar")
        assert server.requests[0].url.params["userId"] == "public"
        assert server.requests[0].url.params["category"] == "Grammar"


class TestStorage:

    def test_json_file_round_trip(self, tmp_path):
        path = tmp_path / "state" / "vaan.json"
        storage = JsonFileStorage(path)
        storage.set("theme", "dark")
        storage.set("language", "hi")
        storage.remove("language")

        reopened = JsonFileStorage(path)
        assert reopened.get("theme") == "dark"
        assert reopened.get("language") is None

    def test_unreadable_file_starts_empty(self, tmp_path):
        path = tmp_path / "vaan.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileStorage(path).get("theme") is None


class TestAuthState:

    def test_login_persists_and_upserts(self):
        server = FakeServer({("POST", "/api/user/upsert"): {"id": "google-42"}})
        storage = MemoryStorage()
        auth = AuthState(storage, _client(server))

        user = auth.login(USERINFO)
        assert user.id == "google-42"
        assert auth.is_authenticated
        assert server.body()["email"] == "learner@example.com"
        assert json.loads(storage.get(USER_KEY))["id"] == "google-42"

        assert AuthState(storage).user == user

    def test_login_survives_upsert_failure(self):
        server = FakeServer({("POST", "/api/user/upsert"): (500, {"detail": "Internal server error"})})
        auth = AuthState(MemoryStorage(), _client(server))
        assert auth.login(USERINFO).email == "learner@example.com"
        assert auth.is_authenticated

    def test_logout(self):
        storage = MemoryStorage()
        auth = AuthState(storage)
        auth.login(USERINFO)
        auth.logout()
        assert not auth.is_authenticated
        assert storage.get(USER_KEY) is None

    @pytest.mark.parametrize("raw", ["{broken", json.dumps({"name": "no id"}), json.dumps(["list"])])
    def test_corrupt_user_discarded(self, raw):
        storage = MemoryStorage({USER_KEY: raw})
        assert AuthState(storage).user is None
        assert storage.get(USER_KEY) is None


class TestPreferences:

    def test_defaults_and_persistence(self):
        storage = MemoryStorage({FONT_KEY: "Comic Sans"})
        prefs = PreferencesState(storage)
        assert prefs.theme == "light"
        assert prefs.font == "Poppins"
        assert prefs.language == "en"

        prefs.set_theme("dark")
        prefs.set_font("Mukta")
        prefs.set_language("hi")
        again = PreferencesState(storage)
        assert (again.theme, again.font, again.language) == ("dark", "Mukta", "hi")

    def test_rejects_unknown_values(self):
        prefs = PreferencesState(MemoryStorage())
        with pytest.raises(ValueError):
            prefs.set_theme("sepia")
        with pytest.raises(ValueError):
            prefs.set_font("Comic Sans")


class TestLikes:

    def test_signed_out_prompts_for_sign_in(self):
        storage = MemoryStorage()
        likes = LikesState(storage, AuthState(storage))
        assert likes.toggle(7) is False
        assert likes.show_sign_in_prompt is True
        assert storage.get(LIKES_KEY) is None

    def test_toggle_and_persist(self):
        storage = MemoryStorage()
        auth = AuthState(storage)
        auth.login(USERINFO)
        likes = LikesState(storage, auth)

        assert likes.toggle(7) is True
        assert likes.toggle(9) is True
        assert likes.toggle(7) is False
        assert likes.liked_names() == ["9"]
        assert LikesState(storage, auth).is_liked(9)
        assert likes.like_count(9) == 1
        assert likes.like_count(7) == 0


class TestAdminState:

    def test_refresh(self):
        server = FakeServer({("GET", "/api/admin/check"): {"isAdmin": True}})
        auth = AuthState(MemoryStorage())
        admin = AdminState(_client(server), auth)
        assert admin.refresh() is False
        assert server.requests == []

        auth.login(USERINFO)
        assert admin.refresh() is True
        assert server.requests[0].url.params["userId"] == "google-42"

    def test_error_means_not_admin(self):
        auth = AuthState(MemoryStorage())
        auth.login(USERINFO)
        admin = AdminState(_client(FakeServer()), auth)
        assert admin.refresh() is False


class TestTranslator:

    def test_english_defaults(self):
        t = Translator()
        assert t.t("nav.home") == DEFAULT_STRINGS["nav.home"]
        assert t.t("missing.key") == "missing.key"

    def test_server_overrides_fall_back_to_english(self):
        server = FakeServer({("GET", "/api/translations/hi"): {"translations": {"nav.home": "मुख्य पृष्ठ"}}})
        t = Translator(_client(server), language="hi")
        assert t.t("nav.home") == "मुख्य पृष्ठ"
        assert t.t("nav.learn") == "Learn"

        t.set_language("en")
        t.set_language("hi")
        assert len(server.requests) == 1

    def test_fetch_failure_uses_english(self):
        t = Translator(_client(FakeServer()), language="fr")
        assert t.t("nav.home") == "Home"


WORDS = [
    {"id": 1, "name": "अदिति", "correct_answer": "boundless", "choices": ["boundless", "fire"], "difficulty_level": "beginner"},
    {"id": 2, "name": "उषा", "correct_answer": "dawn", "choices": ["dawn", "water"], "difficulty_level": "beginner"},
]


class TestLearningSession:

    def test_requires_words(self):
        with pytest.raises(ValueError):
            LearningSession([])

    def test_flashcards_wrap_both_ways(self):
        session = LearningSession(WORDS)
        assert session.flip() is True
        assert session.next_card()["id"] == 2
        assert session.flipped is False
        assert session.next_card()["id"] == 1
        assert session.previous_card()["id"] == 2

    def test_quiz_scoring_and_restart(self):
        session = LearningSession(WORDS)
        assert session.answer("boundless") is True
        session.next_question()
        assert session.answer("water") is False
        assert session.score == 1
        assert session.progress_percent == 100

        assert session.next_question()["id"] == 1
        assert session.score == 0
        assert session.completed == 0

    def test_reports_to_api_when_signed_in(self):
        server = FakeServer({
            ("POST", "/api/user/upsert"): {"id": "google-42"},
            ("POST", "/api/user/quiz-attempt"): {"success": True},
            ("POST", "/api/user/flashcard-review"): {"success": True},
        })
        client = _client(server)
        auth = AuthState(MemoryStorage(), client)
        auth.login(USERINFO)

        session = LearningSession(WORDS, client=client, auth=auth)
        session.mark_reviewed(4)
        session.answer("boundless")

        review, attempt = server.body(-2), server.body(-1)
        assert review == {"userId": "google-42", "babyNameId": 1, "confidenceLevel": 4}
        assert attempt["correct"] is True
        assert attempt["difficulty"] == "beginner"
        assert attempt["responseTimeMs"] >= 0

    def test_signed_out_reports_nothing(self):
        server = FakeServer()
        session = LearningSession(WORDS, client=_client(server), auth=AuthState(MemoryStorage()))
        session.mark_reviewed()
        session.answer("dawn")
        assert server.requests == []

    def test_start_fetches_words(self):
        server = FakeServer({("GET", "/api/learning-words"): {"words": WORDS}})
        session = LearningSession.start(_client(server), difficulty="beginner", limit=2)
        assert session.current_question["id"] == 1
        assert server.requests[0].url.params["difficulty"] == "beginner"
