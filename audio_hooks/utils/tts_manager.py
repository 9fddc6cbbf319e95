"""
TTS Manager for Claude audio hooks.

This module provides a unified interface for speaking voice summaries,
coordinating between the TTS providers and handling fallbacks.
"""

from typing import Dict, List, Optional

from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.tts_providers import TTSProvider, TTSProviderError, create_provider

logger = setup_logger(__name__)


class TTSManager:
    """
    Manager for TTS providers with fallback support.

    Providers are tried in order until one speaks the text. When every
    provider fails the text is logged so the summary is not lost.
    """

    def __init__(self, providers: Optional[List[str]] = None, **provider_kwargs):
        """
        Initialize the TTS manager with ordered provider list.

        Args:
            providers (list): Provider names in order of preference (leftmost = highest priority)
            **provider_kwargs: Additional arguments for provider initialization
        """
        self.provider_kwargs = provider_kwargs
        self.providers: Dict[str, TTSProvider] = {}

        if not providers:
            providers = ["say"]

        # Remove duplicates while preserving order
        self.provider_chain: List[str] = list(dict.fromkeys(providers))
        self._initialize_providers()

    def _initialize_providers(self) -> None:
        for provider_name in self.provider_chain:
            provider = create_provider(provider_name, **self.provider_kwargs)
            if provider:
                self.providers[provider_name] = provider
                logger.debug(f"Initialized TTS provider: {provider_name}")
            else:
                logger.warning(f"Failed to initialize TTS provider: {provider_name}")

    def speak(self, text: str) -> Optional[str]:
        """
        Speak text with the first provider that succeeds.

        Args:
            text (str): Summary to speak

        Returns:
            str or None: Name of the provider that spoke, None if all failed
        """
        for provider_name in self.provider_chain:
            provider = self.providers.get(provider_name)
            if not provider:
                continue

            try:
                if provider.speak(text):
                    logger.debug(f"Spoke summary with provider: {provider_name}")
                    return provider_name
                logger.info(f"Provider '{provider_name}' did not speak, trying next")
            except TTSProviderError as e:
                logger.warning(f"{provider_name}: {e}")
            except Exception as e:
                logger.error(f"Error from provider '{provider_name}': {e}")

        logger.info(f"TTS message: {text}")
        return None

    def cleanup(self) -> None:
        """Clean up all providers."""
        for provider in self.providers.values():
            try:
                provider.cleanup()
            except Exception as e:
                logger.error(f"Error cleaning up provider: {e}")
