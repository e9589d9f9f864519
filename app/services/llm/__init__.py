"""
LLM Service Module

Unified interface over the LLM providers used for lexeme enrichment.

Configuration:
- LLM_PROVIDER: Primary provider ('gemini' or 'openai', default: 'gemini')
- LLM_MODEL: Specific model to use (optional, uses provider default)
- LLM_FALLBACK_ENABLED: Try the other provider on failure (default: 'false')

For Gemini:
- GEMINI_API_KEY: generative-language API key
- GOOGLE_CLOUD_PROJECT / GOOGLE_CLOUD_LOCATION: Vertex AI instead of a key

For OpenAI:
- OPENAI_API_KEY: OpenAI API key

Usage:
    from app.services.llm import get_llm_service, LLMConfig

    response = get_llm_service().generate(
        system_prompt="You are a Sanskrit naming expert.",
        user_content="1. Sanskrit Word: ...",
        config=LLMConfig(response_schema=SCHEMA),
    )
    if response.success:
        results = response.content["results"]
"""

from .base import LLMProvider, LLMResponse, LLMConfig, parse_json_content
from .openai_provider import OpenAIProvider
from .gemini_provider import GeminiProvider
from .factory import (
    LLMService,
    LLMProviderType,
    get_llm_service,
    reset_llm_service,
    llm_available,
    PROVIDER_REGISTRY,
)

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "parse_json_content",
    "OpenAIProvider",
    "GeminiProvider",
    "LLMService",
    "LLMProviderType",
    "get_llm_service",
    "reset_llm_service",
    "llm_available",
    "PROVIDER_REGISTRY",
]
