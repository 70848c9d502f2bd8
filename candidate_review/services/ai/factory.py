"""
AI Provider Factory
Centralized access to AI providers with fallback support
"""
import logging
from typing import Optional

from candidate_review.config import settings
from .base import AIProvider

logger = logging.getLogger(__name__)


class AIFactory:
    """Factory to get AI provider based on configuration"""

    _key_mapping = {
        'openai': 'OPENAI_API_KEY',
        'openrouter': 'OPENROUTER_API_KEY',
        'gemini': 'GEMINI_API_KEY',
    }

    _instances = {}  # Singleton instances

    @classmethod
    def _provider_class(cls, provider_name: str):
        # Imported lazily so an unused SDK is never loaded
        if provider_name == 'openai':
            from .openai_service import OpenAIService
            return OpenAIService
        if provider_name == 'openrouter':
            from .openrouter_service import OpenRouterService
            return OpenRouterService
        if provider_name == 'gemini':
            from .gemini_service import GeminiService
            return GeminiService
        available = ', '.join(cls._key_mapping.keys())
        raise ValueError(
            f"Unknown AI provider: {provider_name}. "
            f"Available providers: {available}"
        )

    @classmethod
    def is_configured(cls, provider_name: Optional[str]) -> bool:
        """True when the provider is known and its API key is set."""
        key_name = cls._key_mapping.get(provider_name or '')
        if not key_name:
            return False
        return bool(getattr(settings, key_name, None))

    @classmethod
    def get_provider(cls, provider_name: Optional[str] = None) -> AIProvider:
        """
        Get AI provider instance

        Args:
            provider_name: Provider name ('openai', 'openrouter', 'gemini')
                          If None, uses settings.AI_PROVIDER

        Raises:
            ValueError: If provider not found or API key missing
        """
        if provider_name is None:
            provider_name = settings.AI_PROVIDER

        # Check if already instantiated (singleton)
        if provider_name in cls._instances:
            return cls._instances[provider_name]

        provider_class = cls._provider_class(provider_name)

        if not cls.is_configured(provider_name):
            raise ValueError(
                f"{provider_name} requires {cls._key_mapping[provider_name]} to be set in environment variables"
            )

        instance = provider_class()
        cls._instances[provider_name] = instance
        logger.info(f"Initialized AI provider: {provider_name}")
        return instance

    @classmethod
    def resolve_provider(cls) -> Optional[AIProvider]:
        """
        Get the primary provider, or the fallback when only it has a key.

        Returns None when no configured provider has a credential; the AI path
        treats that as "skipped", not as an error.
        """
        primary = settings.AI_PROVIDER
        fallback = settings.AI_FALLBACK_PROVIDER

        if cls.is_configured(primary):
            return cls.get_provider(primary)

        if fallback and cls.is_configured(fallback):
            logger.warning(f"Primary provider {primary} has no API key, using fallback {fallback}")
            return cls.get_provider(fallback)

        return None

    @classmethod
    def reset(cls) -> None:
        """Drop cached instances (after settings change)."""
        cls._instances.clear()

    @classmethod
    def list_providers(cls) -> list:
        """List all available providers"""
        return list(cls._key_mapping.keys())


# Convenience function
def get_ai_provider() -> Optional[AIProvider]:
    """Get the configured AI provider, or None when no credential is set"""
    return AIFactory.resolve_provider()
