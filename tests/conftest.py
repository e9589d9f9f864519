import json
import os

os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.settings import settings
from app.db import Base, get_db, get_session_factory
from app.models.baby_name import BabyName
from app.models.lexeme import Lexeme
from app.models.user import User
from app.services.llm import reset_llm_service
from app.utils.datetime import db_now

# Use SQLite in-memory for test DB
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
# For in-memory SQLite we must use a StaticPool so multiple connections share the
# same in-memory database during the test run (TestClient requests, background
# jobs and test setup all use separate sessions).
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency overrides
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

def override_get_session_factory():
    return TestingSessionLocal

app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_session_factory] = override_get_session_factory

@pytest.fixture(autouse=True)
def setup_test_db():
    # recreate schema for each test to ensure isolation
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def db_session():
    # use the testing session factory bound to the in-memory SQLite engine
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

# --- Outbound calls (autouse) ---
@pytest.fixture(autouse=True)
def no_external_services(monkeypatch):
    """Tests never reach the network or use real provider keys."""
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(settings, "google_cloud_project", None)
    monkeypatch.setattr(settings, "llm_provider", "gemini")
    monkeypatch.setattr(settings, "llm_model", None)
    monkeypatch.setattr(settings, "llm_fallback_enabled", False)
    monkeypatch.setattr(settings, "stripe_secret_key", None)
    monkeypatch.setattr(settings, "stripe_test_secret_key", None)

    from app.services import translation as translation_mod
    from app.services import youtube as youtube_mod
    monkeypatch.setattr(translation_mod, "translate_text", lambda text, lang, client=None: f"[{lang}] {text}")
    monkeypatch.setattr(youtube_mod, "fetch_oembed", lambda video_id: None)
    reset_llm_service()
    yield
    reset_llm_service()

# --- Data factories ---
@pytest.fixture
def make_user(db_session):
    def _make(user_id="user-1", email=None, is_admin=False, **kwargs):
        user = User(
            id=user_id,
            email=email or f"{user_id}@example.com",
            name=kwargs.pop("name", user_id.title()),
            is_admin=is_admin,
            last_login=kwargs.pop("last_login", db_now()),
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make

@pytest.fixture
def admin_user(make_user):
    return make_user("admin-1", email="admin@example.com", is_admin=True)

@pytest.fixture
def regular_user(make_user):
    return make_user("user-1", email="learner@example.com")

@pytest.fixture
def make_lexeme(db_session):
    def _make(sanskrit="सत्यम्", transliteration="satyam", primary_meaning="truth", **kwargs):
        meanings = kwargs.pop("english_meanings", [primary_meaning])
        lexeme = Lexeme(
            sanskrit=sanskrit,
            transliteration=transliteration,
            primary_meaning=primary_meaning,
            english_meanings=json.dumps(meanings, ensure_ascii=False),
            raw_entry=kwargs.pop("raw_entry", f"{sanskrit} ({transliteration}) = {primary_meaning}"),
            **kwargs,
        )
        db_session.add(lexeme)
        db_session.commit()
        return lexeme
    return _make

@pytest.fixture
def make_baby_name(db_session, make_lexeme):
    def _make(name="अदिति", slug="aditi", gender="girl", meaning="boundless", lexeme=None, **lexeme_kwargs):
        lexeme = lexeme or make_lexeme(sanskrit=name, transliteration=slug, primary_meaning=meaning,
                                       baby_name_checked=True, baby_name_suitable=True,
                                       baby_name_gender=gender, **lexeme_kwargs)
        baby_name = BabyName(
            name=name,
            slug=slug,
            gender=gender,
            meaning=meaning,
            pronunciation=slug,
            first_letter=slug[0].upper(),
            lexeme_id=lexeme.id,
        )
        db_session.add(baby_name)
        db_session.commit()
        return baby_name
    return _make
