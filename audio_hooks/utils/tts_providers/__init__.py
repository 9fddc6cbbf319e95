"""
TTS Providers for Claude audio hooks.

This package provides a unified interface for the ways a voice summary can be
spoken: the ElevenLabs MCP server through the claude CLI, the ElevenLabs API
directly, and the local macOS voice.
"""

from .base import TTSProvider, TTSProviderError
from .factory import create_provider

__all__ = ["TTSProvider", "TTSProviderError", "create_provider"]
