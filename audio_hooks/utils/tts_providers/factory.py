"""
Factory for creating TTS providers based on configuration.

This module handles instantiation of different TTS providers
and provides a clean interface for provider creation.
"""

import inspect
from typing import Dict, Optional, Type

from audio_hooks.utils.colored_logger import setup_logger
from .base import TTSProvider
from .elevenlabs_provider import ElevenLabsProvider
from .mcp_provider import McpProvider
from .say_provider import SayProvider

logger = setup_logger(__name__)

# Registry of available providers
PROVIDER_REGISTRY: Dict[str, Type[TTSProvider]] = {
    "mcp": McpProvider,
    "elevenlabs": ElevenLabsProvider,
    "say": SayProvider,
}


def create_provider(provider_name: str, **kwargs) -> Optional[TTSProvider]:
    """
    Create a TTS provider instance, passing only the parameters it accepts.

    Args:
        provider_name (str): Name of the provider to create
        **kwargs: All available parameters (filtered by the provider's signature)

    Returns:
        TTSProvider or None: Provider instance if successful, None otherwise
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)
    if provider_class is None:
        logger.error(f"Unknown TTS provider: {provider_name}")
        logger.info(f"Available providers: {list(PROVIDER_REGISTRY.keys())}")
        return None

    accepted = inspect.signature(provider_class.__init__).parameters
    provider_kwargs = {k: v for k, v in kwargs.items() if k in accepted}

    try:
        return provider_class(**provider_kwargs)
    except Exception as e:
        logger.error(f"Error creating TTS provider '{provider_name}': {e}")
        return None
