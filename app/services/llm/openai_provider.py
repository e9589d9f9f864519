"""
OpenAI provider, the optional fallback behind Gemini.

Chat completions in ``json_object`` mode; that mode has no schema slot, so
the schema is appended to the system turn instead.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from app.core.settings import settings

from .base import LLMProvider, LLMConfig

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    PROVIDER_NAME = "openai"
    DEFAULT_MODEL = "gpt-4o-mini"

    PRICING = {
        "gpt-4o-mini": (0.15, 0.60),
        "gpt-4o": (2.50, 10.00),
    }
    DEFAULT_PRICE = (0.15, 0.60)

    def _init_client(self, api_key: Optional[str] = None, **kwargs) -> None:
        self._api_key = api_key or settings.openai_api_key
        self._client = None

    def is_available(self) -> bool:
        # .env.example ships "your_openai_key" placeholders
        return bool(self._api_key) and not self._api_key.startswith("your_")

    def _get_client(self):
        if self._client is None:
            if not self.is_available():
                raise ValueError("OpenAI API key not configured")
            from openai import OpenAI
            self._client = OpenAI(api_key=self._api_key)
        return self._client

    def _call_api(self, messages: List[Dict[str, str]], config: LLMConfig) -> Tuple[str, int, int]:
        client = self._get_client()

        request: Dict = {
            "model": self.model,
            "messages": messages,
            "temperature": config.temperature,
            "max_tokens": config.max_tokens,
            "timeout": config.timeout_seconds,
        }
        if config.json_mode:
            request["response_format"] = {"type": "json_object"}
            if config.response_schema:
                schema_note = "\n\nRespond with JSON matching this schema:\n" + json.dumps(config.response_schema)
                request["messages"] = [
                    {**m, "content": m["content"] + schema_note} if m["role"] == "system" else m
                    for m in messages
                ]

        response = client.chat.completions.create(**request)
        text = (response.choices[0].message.content or "").strip()
        usage = response.usage
        if usage is None:
            return text, 0, 0
        return text, usage.prompt_tokens, usage.completion_tokens
