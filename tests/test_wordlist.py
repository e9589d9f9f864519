"""Tests for wordlist parsing and the ingestion CLI."""
import json

import pytest

from app.models.lexeme import Lexeme
from app.services.wordlist import chunked, iter_entries, parse_line


class TestParseLine:

    def test_full_entry(self):
        """Headword, transliteration, part of speech and several meanings."""
        entry = parse_line("सत्यम् (satyam) = n. truth, reality")
        assert entry.sanskrit == "सत्यम्"
        assert entry.transliteration == "satyam"
        assert entry.part_of_speech == "neuter noun"
        assert entry.primary_meaning == "truth"
        assert entry.english_meanings == ["truth", "reality"]
        assert entry.raw == "सत्यम् (satyam) = n. truth, reality"

    @pytest.mark.parametrize("line", ["", "   ", "# a comment", "no equals sign here", "= orphan", "अग्नि ="])
    def test_unusable_lines(self, line):
        assert parse_line(line) is None

    def test_none_line(self):
        assert parse_line(None) is None

    def test_without_transliteration(self):
        entry = parse_line("अग्नि = fire")
        assert entry.sanskrit == "अग्नि"
        assert entry.transliteration is None
        assert entry.part_of_speech is None
        assert entry.english_meanings == ["fire"]

    def test_or_and_separators_split_meanings(self):
        entry = parse_line("मित्र (mitra) = m. friend or companion; ally/partner")
        assert entry.part_of_speech == "masculine noun"
        assert entry.english_meanings == ["friend", "companion", "ally", "partner"]
        assert entry.primary_meaning == "friend"

    def test_unknown_prefix_is_kept_in_meaning(self):
        """Only known abbreviations count as a part of speech."""
        entry = parse_line("गज (gaja) = big elephant")
        assert entry.part_of_speech is None
        assert entry.primary_meaning == "big elephant"

    def test_whitespace_collapsed(self):
        entry = parse_line("  जल  (jala) =   adj.   watery ,  liquid  ")
        assert entry.part_of_speech == "adjective"
        assert entry.english_meanings == ["watery", "liquid"]

    def test_to_row(self):
        row = parse_line("सत्यम् (satyam) = n. truth, reality").to_row()
        assert json.loads(row["english_meanings"]) == ["truth", "reality"]
        assert row["raw_entry"].startswith("सत्यम्")
        assert row["hindi_meaning"] is None


def test_iter_entries_skips_noise_and_honours_limit(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text(
        "# header\n\nसत्यम् (satyam) = n. truth\nbroken line\nअग्नि (agni) = m. fire\nजल (jala) = n. water\n",
        encoding="utf-8",
    )
    assert [e.transliteration for e in iter_entries(path)] == ["satyam", "agni", "jala"]
    assert [e.transliteration for e in iter_entries(path, limit=2)] == ["satyam", "agni"]


def test_chunked():
    assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]


class TestIngestScript:
    """scripts/ingest_wordlist.py against a SQLite file."""

    @pytest.fixture
    def wordlist(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text(
            "सत्यम् (satyam) = n. truth, reality\nअग्नि (agni) = m. fire\n# skip me\n",
            encoding="utf-8",
        )
        return path

    def test_ingest_creates_lexemes_and_is_idempotent(self, tmp_path, wordlist):
        from sqlalchemy.orm import sessionmaker
        from app.db import build_engine
        from scripts.ingest_wordlist import main

        url = f"sqlite:///{tmp_path / 'lexicon.db'}"
        assert main(["--file", str(wordlist), "--database-url", url]) == 0
        assert main(["--file", str(wordlist), "--database-url", url]) == 0

        session = sessionmaker(bind=build_engine(url))()
        try:
            lexemes = session.query(Lexeme).order_by(Lexeme.id).all()
            assert [lx.transliteration for lx in lexemes] == ["satyam", "agni"]
            assert lexemes[0].baby_name_checked is False
            assert json.loads(lexemes[0].english_meanings) == ["truth", "reality"]
        finally:
            session.close()

    def test_dry_run_writes_nothing(self, tmp_path, wordlist):
        from scripts.ingest_wordlist import main

        db_file = tmp_path / "dry.db"
        assert main(["--file", str(wordlist), "--database-url", f"sqlite:///{db_file}", "--dry-run"]) == 0
        assert not db_file.exists()

    def test_missing_file(self, tmp_path):
        from scripts.ingest_wordlist import main

        assert main(["--file", str(tmp_path / "nope.txt"), "--database-url", "sqlite://"]) != 0
