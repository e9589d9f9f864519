"""Client session state: signed-in user, display preferences, liked names, admin flag.

Each state object persists through an injected ``Storage`` under the same
keys the web app uses, so a JSON file can stand in for localStorage.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from vaan_client.api import VaanAPIError, VaanClient
from vaan_client.storage import Storage

logger = logging.getLogger("vaan_client.state")

USER_KEY = "vaan_user"
LIKES_KEY = "vaan_baby_name_likes"
THEME_KEY = "theme"
FONT_KEY = "font"
LANGUAGE_KEY = "language"

THEMES = ("light", "dark")
DEFAULT_FONT = "Poppins"
AVAILABLE_FONTS = (
    "Poppins", "Noto Sans", "Mukta", "Hind", "Rajdhani", "Teko", "Kalam", "Eczar",
    "Martel", "Yantramanav", "Baloo 2", "Khand", "Amita", "Martel Sans",
    "Pragati Narrow", "Sarala", "Palanquin", "Yatra One", "Khula", "Palanquin Dark",
    "Akshar", "Laila", "Glegoo", "Karma", "Rozha One", "Biryani",
    "Noto Serif Devanagari", "Arya", "Halant", "Sura", "Amiko", "Kadwa", "Jaldi",
    "Cambay", "Modak", "Kurale", "Gotu", "Vesper Libre", "Playpen Sans Deva",
    "Anek Devanagari", "Inknut Antiqua", "Bakbak One", "Sarpanch", "Sumana",
    "Matangi", "Tiro Devanagari Hindi", "Asar", "Ranga", "Sahitya",
    "IBM Plex Sans Devanagari", "Jaini", "Annapurna SIL", "Gajraj One", "Jaini Purva",
)


@dataclass
class User:
    id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class AuthState:
    def __init__(self, storage: Storage, client: Optional[VaanClient] = None):
        self._storage = storage
        self._client = client
        self.user: Optional[User] = self._restore()

    def _restore(self) -> Optional[User]:
        raw = self._storage.get(USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return User(id=data["id"], email=data["email"], name=data.get("name"), picture=data.get("picture"))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding corrupt stored user")
            self._storage.remove(USER_KEY)
            return None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def login(self, userinfo: Dict[str, str]) -> User:
        """Sign in from a Google userinfo payload (``sub``, ``email``, ``name``, ``picture``)."""
        user = User(
            id=userinfo["sub"],
            email=userinfo["email"],
            name=userinfo.get("name"),
            picture=userinfo.get("picture"),
        )
        if self._client is not None:
            try:
                self._client.upsert_user(user.id, user.email, user.name, user.picture)
            except VaanAPIError as e:
                # the local session still works without the server-side profile
                logger.warning(f"User upsert failed: {e}")
        self.user = user
        self._storage.set(USER_KEY, json.dumps(asdict(user), ensure_ascii=False))
        return user

    def logout(self) -> None:
        self.user = None
        self._storage.remove(USER_KEY)


class PreferencesState:
    def __init__(self, storage: Storage):
        self._storage = storage
        theme = storage.get(THEME_KEY)
        font = storage.get(FONT_KEY)
        self.theme = theme if theme in THEMES else "light"
        self.font = font if font in AVAILABLE_FONTS else DEFAULT_FONT
        self.language = storage.get(LANGUAGE_KEY) or "en"

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"theme must be one of {THEMES}")
        self.theme = theme
        self._storage.set(THEME_KEY, theme)

    def set_font(self, font: str) -> None:
        if font not in AVAILABLE_FONTS:
            raise ValueError(f"Unknown font: {font}")
        self.font = font
        self._storage.set(FONT_KEY, font)

    def set_language(self, language: str) -> None:
        self.language = language
        self._storage.set(LANGUAGE_KEY, language)


class LikesState:
    """Liked baby names, kept locally. Liking requires a signed-in user."""

    def __init__(self, storage: Storage, auth: AuthState):
        self._storage = storage
        self._auth = auth
        self.show_sign_in_prompt = False
        try:
            data = json.loads(storage.get(LIKES_KEY) or "{}")
        except ValueError:
            data = {}
        self._likes: Dict[str, bool] = {str(k): True for k, v in data.items() if v} if isinstance(data, dict) else {}

    def toggle(self, name_id) -> bool:
        """Flip the like; returns the new state. Signed-out callers get a sign-in prompt instead."""
        key = str(name_id)
        if not self._auth.is_authenticated:
            self.show_sign_in_prompt = True
            return False
        if self._likes.pop(key, None) is None:
            self._likes[key] = True
        self._storage.set(LIKES_KEY, json.dumps(self._likes))
        return key in self._likes

    def is_liked(self, name_id) -> bool:
        return str(name_id) in self._likes

    def liked_names(self) -> List[str]:
        return list(self._likes)

    def like_count(self, name_id) -> int:
        return 1 if self.is_liked(name_id) else 0


class AdminState:
    def __init__(self, client: VaanClient, auth: AuthState):
        self._client = client
        self._auth = auth
        self.is_admin = False

    def refresh(self) -> bool:
        """Ask the server; any failure counts as not admin."""
        if not self._auth.user:
            self.is_admin = False
            return False
        try:
            self.is_admin = self._client.admin_check(self._auth.user.id)
        except VaanAPIError as e:
            logger.warning(f"Admin check failed: {e}")
            self.is_admin = False
        return self.is_admin
