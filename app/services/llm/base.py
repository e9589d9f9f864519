"""
Provider contract for the enrichment LLM calls.

A provider turns (system prompt, user prompt, config) into raw text plus
token counts; ``LLMProvider.generate`` wraps that into an ``LLMResponse``
with parsed JSON, latency and an estimated cost.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import re
import time

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```[a-zA-Z0-9_-]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


@dataclass
class LLMResponse:
    """What every provider hands back, successful or not."""
    success: bool
    content: Any  # parsed JSON (object or array), or text when json_mode is off
    raw_response: str
    latency_ms: int
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_cost_usd: float
    provider: str
    model: str
    error: Optional[str] = None

    @property
    def json_valid(self) -> bool:
        return self.success and self.content is not None

    @classmethod
    def failure(cls, provider: str, model: str, error: str, latency_ms: int = 0) -> "LLMResponse":
        return cls(False, {}, "", latency_ms, 0, 0, 0, 0.0, provider, model, error)


@dataclass
class LLMConfig:
    """Per-call options. One attempt per provider; callers decide what a failure means."""
    temperature: float = 0.2
    max_tokens: int = 4000
    json_mode: bool = True
    response_schema: Optional[Dict[str, Any]] = None  # OpenAPI-style, used for structured output
    timeout_seconds: int = 60


def parse_json_content(text: str) -> Any:
    """Parse model output as JSON, tolerating code fences, surrounding prose and trailing commas."""
    if not text or not text.strip():
        raise ValueError("Empty response from LLM")

    body = text.strip()
    if body.startswith("```"):
        body = _FENCE_CLOSE_RE.sub("", _FENCE_OPEN_RE.sub("", body))

    candidates = [body]
    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        start, end = body.find(open_ch), body.rfind(close_ch)
        if start != -1 and end > start:
            candidates.append(body[start:end + 1])
    candidates.append(_TRAILING_COMMA_RE.sub(r"\1", body))

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    preview = body[:500] + ("..." if len(body) > 500 else "")
    logger.error(f"Could not parse LLM output as JSON. Preview: {preview}")
    raise ValueError("Could not parse JSON from LLM response")


class LLMProvider(ABC):
    PROVIDER_NAME: str = "base"
    DEFAULT_MODEL: str = "unknown"

    # USD per 1M tokens: (input, output). Unknown models fall back to DEFAULT_PRICE.
    PRICING: Dict[str, Tuple[float, float]] = {}
    DEFAULT_PRICE: Tuple[float, float] = (0.0, 0.0)

    def __init__(self, model: Optional[str] = None, **kwargs):
        self.model = model or self.DEFAULT_MODEL
        self._init_client(**kwargs)

    @abstractmethod
    def _init_client(self, **kwargs) -> None:
        """Read credentials; the SDK client itself is created lazily."""

    @abstractmethod
    def _call_api(self, messages: List[Dict[str, str]], config: LLMConfig) -> Tuple[str, int, int]:
        """One request. Returns (raw_text, prompt_tokens, completion_tokens)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Credentials are present (no network call)."""

    def estimate_cost(self, prompt_tokens: int, completion_tokens: int) -> float:
        input_price, output_price = self.PRICING.get(self.model, self.DEFAULT_PRICE)
        return (prompt_tokens * input_price + completion_tokens * output_price) / 1_000_000

    def generate(self, system_prompt: str, user_content: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        """Single call; never raises. Errors come back as ``success=False``."""
        config = config or LLMConfig()
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]
        started = time.time()
        try:
            raw, prompt_tokens, completion_tokens = self._call_api(messages, config)
            content = parse_json_content(raw) if config.json_mode else raw
        except Exception as e:
            latency_ms = int((time.time() - started) * 1000)
            logger.error(f"[llm] provider={self.PROVIDER_NAME} model={self.model} error={e}")
            return LLMResponse.failure(self.PROVIDER_NAME, self.model, str(e), latency_ms)

        latency_ms = int((time.time() - started) * 1000)
        cost = self.estimate_cost(prompt_tokens, completion_tokens)
        logger.info(
            f"[llm] provider={self.PROVIDER_NAME} model={self.model} latency_ms={latency_ms} "
            f"tokens={prompt_tokens + completion_tokens} (prompt={prompt_tokens}, "
            f"completion={completion_tokens}) cost_usd={cost:.6f}"
        )
        return LLMResponse(
            success=True,
            content=content,
            raw_response=raw,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            estimated_cost_usd=cost,
            provider=self.PROVIDER_NAME,
            model=self.model,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"
