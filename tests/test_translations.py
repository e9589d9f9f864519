"""Tests for the UI string translation cache."""
import json
from unittest.mock import MagicMock

import httpx
import pytest

from app.models.translation import Translation, TranslationKey
from app.services.translation import (
    TranslationError,
    find_untranslated,
    get_translations,
    is_valid_language_code,
    process_translations_batch,
    register_keys,
    translate_text,
    upsert_translation,
)


@pytest.fixture
def registry(db_session):
    register_keys(db_session, {"nav.home": "Home", "nav.learn": "Learn", "nav.donate": "Donate"})
    return db_session


@pytest.mark.parametrize("code,valid", [
    ("hi", True), ("fr", True), ("zh-CN", True), ("fil", True),
    ("", False), ("HI", False), ("english", False), ("hi_IN", False), ("../x", False),
])
def test_language_code_validation(code, valid):
    assert is_valid_language_code(code) is valid


def test_register_keys_is_idempotent(db_session):
    assert register_keys(db_session, {"a": "A", "b": "B"}) == 2
    assert register_keys(db_session, {"a": "changed", "c": "C"}) == 1
    assert db_session.query(TranslationKey).filter_by(translation_key="a").one().source_text == "A"


def test_english_is_never_translated(registry):
    translator = MagicMock()
    assert process_translations_batch(registry, "en", translator=translator) == 0
    translator.assert_not_called()
    assert registry.query(Translation).count() == 0


def test_batch_translates_missing_keys(registry):
    saved = process_translations_batch(registry, "hi", translator=lambda text, lang: f"{lang}:{text}")
    assert saved == 3
    assert get_translations(registry, "hi") == {
        "nav.home": "hi:Home", "nav.learn": "hi:Learn", "nav.donate": "hi:Donate",
    }
    assert find_untranslated(registry, "hi", 5) == []
    assert len(find_untranslated(registry, "fr", 5)) == 3


def test_batch_size_limits_work(registry):
    assert process_translations_batch(registry, "fr", batch_size=2, translator=lambda t, l: t.upper()) == 2
    assert len(get_translations(registry, "fr")) == 2


def test_failures_are_skipped(registry):
    def flaky(text, lang):
        if text == "Learn":
            raise TranslationError("Translation API returned 503")
        return f"~{text}"

    assert process_translations_batch(registry, "de", translator=flaky) == 2
    assert "nav.learn" not in get_translations(registry, "de")


def test_upsert_updates_in_place(registry):
    upsert_translation(registry, "nav.home", "hi", "Home", "घर")
    upsert_translation(registry, "nav.home", "hi", "Home", "गृह")
    rows = registry.query(Translation).filter_by(translation_key="nav.home", language_code="hi").all()
    assert len(rows) == 1
    assert rows[0].translated_text == "गृह"


class TestTranslateText:

    def _client(self, handler):
        return httpx.Client(transport=httpx.MockTransport(handler))

    def test_reads_translated_text(self):
        def handler(request):
            assert json.loads(request.content) == {"text": "Home", "to": "hi"}
            return httpx.Response(200, json={"translatedText": "घर"})

        assert translate_text("Home", "hi", client=self._client(handler)) == "घर"

    def test_falls_back_to_text_then_source(self):
        assert translate_text("Home", "hi", client=self._client(
            lambda r: httpx.Response(200, json={"text": "घर"}))) == "घर"
        assert translate_text("Home", "hi", client=self._client(
            lambda r: httpx.Response(200, json={}))) == "Home"

    def test_error_status_raises(self):
        with pytest.raises(TranslationError):
            translate_text("Home", "hi", client=self._client(lambda r: httpx.Response(503)))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(TranslationError):
            translate_text("Home", "hi", client=self._client(handler))


class TestTranslationsEndpoint:

    def test_returns_cached_map_and_fills_gaps(self, client, registry):
        upsert_translation(registry, "nav.home", "hi", "Home", "घर")

        response = client.get("/api/translations/hi")
        assert response.status_code == 200
        assert response.json() == {"translations": {"nav.home": "घर"}}

        # the background batch ran after the response (fake translator from conftest)
        registry.expire_all()
        assert get_translations(registry, "hi")["nav.learn"] == "[hi] Learn"
        assert client.get("/api/translations/hi").json()["translations"]["nav.donate"] == "[hi] Donate"

    def test_english_schedules_nothing(self, client, registry):
        assert client.get("/api/translations/en").json() == {"translations": {}}
        registry.expire_all()
        assert registry.query(Translation).count() == 0

    def test_invalid_language_code(self, client):
        response = client.get("/api/translations/not-a-language")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid language code"


def test_register_translation_keys_script(tmp_path):
    from sqlalchemy.orm import sessionmaker
    from app.db import Base, build_engine
    from scripts.register_translation_keys import main

    url = f"sqlite:///{tmp_path / 'strings.db'}"
    engine = build_engine(url)
    Base.metadata.create_all(bind=engine)
    strings = tmp_path / "strings.json"
    strings.write_text(json.dumps({"greeting": "Hello"}), encoding="utf-8")

    assert main(["--file", str(strings), "--database-url", url]) == 0
    assert main(["--database-url", url]) == 0

    session = sessionmaker(bind=engine)()
    try:
        keys = {k for (k,) in session.query(TranslationKey.translation_key).all()}
        assert "greeting" in keys
        assert "nav.home" in keys
    finally:
        session.close()
