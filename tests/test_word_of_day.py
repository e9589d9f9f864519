"""Tests for the word-of-the-day rotation."""
from datetime import datetime, timedelta, UTC

from sqlalchemy.orm import sessionmaker

from app.models.word_of_day import STATE_ROW_ID, WordOfDayLog, WordOfDayState
from app.services.word_of_day import (
    get_cached_word,
    get_word_of_day,
    record_selection,
    rotation_status,
    set_word_of_day,
)

T0 = datetime(2025, 3, 1, 6, 0, tzinfo=UTC)


def test_same_word_within_ttl(db_session, make_lexeme):
    make_lexeme("सत्यम्", "satyam", "truth")
    make_lexeme("अग्नि", "agni", "fire")

    first = get_word_of_day(db_session, now=T0)
    later = get_word_of_day(db_session, now=T0 + timedelta(hours=23, minutes=59))
    assert later["id"] == first["id"]
    assert later["selectedAt"] == first["selectedAt"] == "2025-03-01T06:00:00Z"


def test_new_word_after_ttl(db_session, make_lexeme):
    make_lexeme("सत्यम्", "satyam", "truth")
    make_lexeme("अग्नि", "agni", "fire")

    first = get_word_of_day(db_session, now=T0)
    second = get_word_of_day(db_session, now=T0 + timedelta(hours=24))
    assert second["id"] != first["id"]
    assert db_session.query(WordOfDayLog).count() == 2


def test_rotation_resets_when_exhausted(db_session, make_lexeme):
    """Every lexeme is used once before any repeats; then the log starts over."""
    for i, word in enumerate(["satyam", "agni", "jala"]):
        make_lexeme(f"w{i}", word, word)

    seen = [get_word_of_day(db_session, now=T0 + timedelta(days=d))["id"] for d in range(3)]
    assert len(set(seen)) == 3

    fourth = get_word_of_day(db_session, now=T0 + timedelta(days=3))
    assert fourth["id"] in seen
    assert db_session.query(WordOfDayLog).count() == 1


def test_single_lexeme_repeats(db_session, make_lexeme):
    only = make_lexeme()
    for d in range(3):
        assert get_word_of_day(db_session, now=T0 + timedelta(days=d))["id"] == only.id
    assert db_session.query(WordOfDayLog).count() <= 1


def test_payload_shape(db_session, make_lexeme):
    make_lexeme("सत्यम्", "satyam", "truth", english_meanings=["truth", "reality"], part_of_speech="neuter noun",
                tags="virtue, philosophy")
    word = get_word_of_day(db_session, now=T0)
    assert word["sanskrit"] == "सत्यम्"
    assert word["primaryMeaning"] == "truth"
    assert word["meanings"] == ["truth", "reality"]
    assert word["partOfSpeech"] == "neuter noun"
    assert word["tags"] == ["virtue", "philosophy"]


def test_deleted_lexeme_invalidates_cache(db_session, make_lexeme):
    first = make_lexeme("सत्यम्", "satyam", "truth")
    second = make_lexeme("अग्नि", "agni", "fire")
    set_word_of_day(db_session, first, now=T0)
    db_session.query(WordOfDayLog).delete()
    db_session.delete(first)
    db_session.commit()

    assert get_word_of_day(db_session, now=T0 + timedelta(hours=1))["id"] == second.id


def test_set_word_of_day_overrides_cache(db_session, make_lexeme):
    make_lexeme("सत्यम्", "satyam", "truth")
    forced = make_lexeme("अग्नि", "agni", "fire")
    get_word_of_day(db_session, now=T0)

    set_word_of_day(db_session, forced, now=T0 + timedelta(hours=1))
    assert get_word_of_day(db_session, now=T0 + timedelta(hours=2))["id"] == forced.id
    state = db_session.get(WordOfDayState, STATE_ROW_ID)
    assert state.lexeme_id == forced.id



def test_concurrent_pick_after_expiry_keeps_one_state_row(db_session, make_lexeme):
    """A second request committing its pick first must not break the one still in flight."""
    mine = make_lexeme("सत्यम्", "satyam", "truth")
    make_lexeme("अग्नि", "agni", "fire")
    assert get_cached_word(db_session, now=T0) is None

    other = sessionmaker(bind=db_session.get_bind())()
    try:
        get_word_of_day(other, now=T0)
    finally:
        other.close()

    record_selection(db_session, mine, now=T0 + timedelta(seconds=1))
    assert db_session.query(WordOfDayState).count() == 1
    assert db_session.get(WordOfDayState, STATE_ROW_ID).lexeme_id == mine.id
    assert get_word_of_day(db_session, now=T0 + timedelta(hours=1))["id"] == mine.id


def test_recording_the_same_lexeme_twice_keeps_one_log_entry(db_session, make_lexeme):
    lexeme = make_lexeme()
    record_selection(db_session, lexeme, now=T0)
    record_selection(db_session, lexeme, now=T0 + timedelta(days=1))
    assert db_session.query(WordOfDayLog).count() == 1
    assert db_session.query(WordOfDayState).count() == 1

def test_rotation_status(db_session, make_lexeme):
    make_lexeme()
    status = rotation_status(db_session)
    assert status["current"] is None
    assert status["total_lexemes"] == 1
    assert status["ttl_hours"] == 24

    get_word_of_day(db_session, now=T0)
    status = rotation_status(db_session)
    assert status["current"]["transliteration"] == "satyam"
    assert status["used_count"] == 1


class TestWordOfDayEndpoint:

    def test_returns_word(self, client, make_lexeme):
        make_lexeme()
        response = client.get("/api/word-of-day")
        assert response.status_code == 200
        assert response.json()["transliteration"] == "satyam"

    def test_stable_across_requests(self, client, make_lexeme):
        make_lexeme("सत्यम्", "satyam", "truth")
        make_lexeme("अग्नि", "agni", "fire")
        first = client.get("/api/word-of-day").json()
        assert client.get("/api/word-of-day").json()["id"] == first["id"]

    def test_empty_lexicon(self, client):
        response = client.get("/api/word-of-day")
        assert response.status_code == 500
        assert response.json()["detail"] == "Unable to retrieve word of the day"
