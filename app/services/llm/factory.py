"""
Provider selection for enrichment.

``LLMService`` asks the primary provider (``LLM_PROVIDER``, Gemini by
default) and, when ``LLM_FALLBACK_ENABLED`` is on, the other provider once
if the primary fails.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Type

from app.core.settings import settings

from .base import LLMProvider, LLMResponse, LLMConfig
from .openai_provider import OpenAIProvider
from .gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)


class LLMProviderType(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"


PROVIDER_REGISTRY: Dict[str, Type[LLMProvider]] = {
    LLMProviderType.OPENAI: OpenAIProvider,
    LLMProviderType.GEMINI: GeminiProvider,
}

_OTHER = {
    LLMProviderType.GEMINI: LLMProviderType.OPENAI,
    LLMProviderType.OPENAI: LLMProviderType.GEMINI,
}


class LLMService:
    def __init__(
        self,
        primary_provider: Optional[str] = None,
        primary_model: Optional[str] = None,
        fallback_enabled: Optional[bool] = None,
        **kwargs
    ):
        self.primary_type = LLMProviderType(primary_provider or settings.llm_provider)
        self.model = primary_model or settings.llm_model
        self.fallback_enabled = settings.llm_fallback_enabled if fallback_enabled is None else fallback_enabled
        self._kwargs = kwargs
        self._instances: Dict[LLMProviderType, LLMProvider] = {}
        logger.info(
            f"[llm_service] primary={self.primary_type.value} model={self.model or 'default'} "
            f"fallback={self.fallback_enabled}"
        )

    def _provider(self, kind: LLMProviderType) -> LLMProvider:
        if kind not in self._instances:
            cls = PROVIDER_REGISTRY[kind]
            # model and extra kwargs only apply to the primary
            self._instances[kind] = (
                cls(model=self.model, **self._kwargs) if kind == self.primary_type else cls()
            )
        return self._instances[kind]

    @property
    def primary_provider(self) -> LLMProvider:
        return self._provider(self.primary_type)

    @property
    def fallback_provider(self) -> Optional[LLMProvider]:
        return self._provider(_OTHER[self.primary_type]) if self.fallback_enabled else None

    def _candidates(self, use_fallback: bool = True) -> List[LLMProvider]:
        fallback = self.fallback_provider if use_fallback else None
        return [self.primary_provider] + ([fallback] if fallback is not None else [])

    def providers(self, use_fallback: bool = True) -> List[LLMProvider]:
        """Providers with credentials, primary first; the bare primary when none have any."""
        return [p for p in self._candidates(use_fallback) if p.is_available()] or [self.primary_provider]

    def generate(
        self,
        system_prompt: str,
        user_content: str,
        config: Optional[LLMConfig] = None,
        use_fallback: bool = True,
    ) -> LLMResponse:
        """First successful answer along the provider chain, else the first failure."""
        first_failure: Optional[LLMResponse] = None
        for provider in self.providers(use_fallback):
            response = provider.generate(system_prompt=system_prompt, user_content=user_content, config=config)
            if response.success:
                if first_failure is not None:
                    logger.info(f"[llm_service] fallback succeeded via {response.provider}")
                return response
            logger.warning(f"[llm_service] {provider.PROVIDER_NAME} failed: {response.error}")
            first_failure = first_failure or response
        return first_failure

    def is_available(self) -> bool:
        """Some provider in the chain has credentials, so a call can succeed."""
        return any(p.is_available() for p in self._candidates())


_service_instance: Optional[LLMService] = None


def get_llm_service(**kwargs) -> LLMService:
    """Shared service; passing kwargs replaces it with a differently configured one."""
    global _service_instance
    if _service_instance is None or kwargs:
        _service_instance = LLMService(**kwargs)
    return _service_instance


def reset_llm_service() -> None:
    global _service_instance
    _service_instance = None


def llm_available() -> bool:
    """Gate for background enrichment: the configured chain can actually be called."""
    return get_llm_service().is_available()
