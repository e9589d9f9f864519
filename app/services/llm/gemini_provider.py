"""
Gemini provider (google-genai SDK).

Uses ``GEMINI_API_KEY`` against the generative-language API, or Vertex AI
when only ``GOOGLE_CLOUD_PROJECT`` is set. Structured output is requested
with ``response_mime_type=application/json`` plus the caller's schema.
"""

import logging
from typing import Dict, List, Optional, Tuple

from app.core.settings import settings

from .base import LLMProvider, LLMConfig

logger = logging.getLogger(__name__)

_TRUNCATION_MARKERS = ("MAX_TOKENS", "LENGTH", "TRUNCAT")


class GeminiProvider(LLMProvider):
    PROVIDER_NAME = "gemini"
    DEFAULT_MODEL = "gemini-flash-lite-latest"  # batch yes/no classification does not need more

    PRICING = {
        "gemini-flash-lite-latest": (0.10, 0.40),
        "gemini-2.5-flash-lite": (0.10, 0.40),
        "gemini-2.5-flash": (0.30, 2.50),
        "gemini-2.5-pro": (1.25, 10.00),
    }
    DEFAULT_PRICE = (0.10, 0.40)

    def _init_client(self, api_key: Optional[str] = None, project_id: Optional[str] = None,
                     location: Optional[str] = None, **kwargs) -> None:
        self._api_key = api_key or settings.gemini_api_key
        self._project_id = project_id or settings.google_cloud_project
        self._location = location or settings.google_cloud_location
        self._client = None

    def is_available(self) -> bool:
        return bool(self._api_key or self._project_id)

    def _get_client(self):
        if self._client is not None:
            return self._client

        from google import genai

        if self._api_key:
            self._client = genai.Client(api_key=self._api_key)
        elif self._project_id:
            self._client = genai.Client(vertexai=True, project=self._project_id, location=self._location)
        else:
            raise ValueError("Gemini not configured (set GEMINI_API_KEY or GOOGLE_CLOUD_PROJECT)")
        return self._client

    def _build_config(self, system_text: str, config: LLMConfig):
        from google.genai import types

        gen_config = types.GenerateContentConfig(
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            system_instruction=system_text or None,
        )
        if config.json_mode:
            gen_config.response_mime_type = "application/json"
            if config.response_schema:
                gen_config.response_schema = config.response_schema
        return gen_config

    def _call_api(self, messages: List[Dict[str, str]], config: LLMConfig) -> Tuple[str, int, int]:
        client = self._get_client()
        system_text = "\n".join(m["content"] for m in messages if m["role"] == "system").strip()
        prompt = "\n".join(m["content"] for m in messages if m["role"] != "system").strip()

        response = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._build_config(system_text, config),
        )

        candidates = getattr(response, "candidates", None) or []
        if candidates:
            finish_reason = str(getattr(candidates[0], "finish_reason", "") or "").upper()
            if any(marker in finish_reason for marker in _TRUNCATION_MARKERS):
                # a cut-off JSON batch is useless, fail it rather than parse half of it
                raise ValueError(f"Gemini response truncated (finish_reason={finish_reason})")

        text = response.text or ""
        if not text:
            raise ValueError("Gemini returned no text")

        usage = getattr(response, "usage_metadata", None)
        prompt_tokens = (getattr(usage, "prompt_token_count", 0) or 0) if usage else 0
        completion_tokens = (getattr(usage, "candidates_token_count", 0) or 0) if usage else 0
        logger.debug(f"[gemini] finish_reason={finish_reason if candidates else 'n/a'} chars={len(text)}")
        return text, prompt_tokens, completion_tokens
