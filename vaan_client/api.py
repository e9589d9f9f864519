"""HTTP client for the Vaan Sanskrit API.

A thin synchronous wrapper: one method per route, JSON in and out. Non-2xx
answers raise ``VaanAPIError`` carrying the server's ``detail``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("vaan_client.api")

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0


class VaanAPIError(Exception):
    def __init__(self, status_code: int, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class VaanClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "VaanClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, params: Optional[dict] = None, json: Optional[dict] = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise VaanAPIError(0, str(e)) from e
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            detail = body.get("detail") if isinstance(body, dict) else body
            raise VaanAPIError(response.status_code, detail)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Public content

    def word_of_day(self) -> Dict[str, Any]:
        return self._request("GET", "/api/word-of-day")

    def baby_names(self, gender: str = "all", letter: str = "", search: str = "") -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/baby-names", params={"gender": gender, "letter": letter, "search": search})
        return data.get("names", [])

    def baby_name(self, slug: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/baby-names/{slug}")

    def learning_words(self, difficulty: Optional[str] = None, limit: int = 10) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/learning-words", params={"difficulty": difficulty, "limit": limit})
        return data.get("words", [])

    def translations(self, language_code: str) -> Dict[str, str]:
        return self._request("GET", f"/api/translations/{language_code}").get("translations", {})

    def create_checkout_session(
        self,
        amount: int,
        donation_type: str,
        success_url: str,
        cancel_url: str,
        test_mode: bool = False,
    ) -> str:
        data = self._request("POST", "/api/create-checkout-session", json={
            "amount": amount,
            "type": donation_type,
            "testMode": test_mode,
            "successUrl": success_url,
            "cancelUrl": cancel_url,
        })
        return data["url"]

    # Users & learning

    def upsert_user(self, user_id: str, email: str, name: Optional[str] = None, picture: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/api/user/upsert", json={"id": user_id, "email": email, "name": name, "picture": picture})

    def progress(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", "/api/user/progress", params={"userId": user_id})

    def stats(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", "/api/user/stats", params={"userId": user_id})

    def flashcard_review(self, user_id: str, baby_name_id: int, confidence_level: Optional[int] = None) -> Dict[str, Any]:
        body = {"userId": user_id, "babyNameId": baby_name_id}
        if confidence_level is not None:
            body["confidenceLevel"] = confidence_level
        return self._request("POST", "/api/user/flashcard-review", json=body)

    def quiz_attempt(
        self,
        user_id: str,
        baby_name_id: int,
        correct: bool,
        difficulty: Optional[str] = None,
        response_time_ms: Optional[int] = None,
    ) -> Dict[str, Any]:
        body = {"userId": user_id, "babyNameId": baby_name_id, "correct": correct}
        if difficulty:
            body["difficulty"] = difficulty
        if response_time_ms is not None:
            body["responseTimeMs"] = response_time_ms
        return self._request("POST", "/api/user/quiz-attempt", json=body)

    # Admin

    def admin_check(self, user_id: str) -> bool:
        return bool(self._request("GET", "/api/admin/check", params={"userId": user_id}).get("isAdmin"))

    def admin_grant(self, user_id: str, target_user_id: str, is_admin: bool = True) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/grant",
                             json={"userId": user_id, "targetUserId": target_user_id, "isAdmin": is_admin})

    def admin_stats(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/stats/overview", params={"userId": user_id})

    def admin_audit_log(self, user_id: str, resource_type: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/audit-log",
                             params={"userId": user_id, "resourceType": resource_type, "page": page, "limit": limit})

    def admin_list(self, resource: str, user_id: str = "public", **params) -> Dict[str, Any]:
        """List ``videos``, ``blog``, ``news``, ``lexemes`` or ``users``."""
        return self._request("GET", f"/api/admin/{resource}", params={"userId": user_id, **params})

    def admin_create(self, resource: str, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/api/admin/{resource}", json={"userId": user_id, **payload})

    def admin_update(self, resource: str, user_id: str, item_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/admin/{resource}/{item_id}", json={"userId": user_id, **payload})

    def admin_delete(self, resource: str, user_id: str, item_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/admin/{resource}/{item_id}", params={"userId": user_id})

    def admin_daily_words(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/daily-words", params={"userId": user_id})

    def admin_set_daily_word(self, user_id: str, lexeme_id: int) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/daily-words", json={"userId": user_id, "lexemeId": lexeme_id})

    def admin_reset_daily_word(self, user_id: str) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/daily-words/reset", params={"userId": user_id})
