"""
Base abstract class for TTS providers in Claude audio hooks.

Defines the common interface that all TTS providers must implement,
ensuring consistent behavior across different TTS services.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.sound_player import play_sound_file

logger = setup_logger(__name__)


class TTSProviderError(Exception):
    """Raised when a provider cannot produce or play speech."""


class TTSProvider(ABC):
    """Abstract base class for text-to-speech providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this TTS provider."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this provider is available and ready to use.

        Returns:
            bool: True if provider can be used, False otherwise
        """
        pass

    @abstractmethod
    def speak(self, text: str) -> bool:
        """
        Speak the given text.

        Args:
            text (str): Short summary to speak

        Returns:
            bool: True if speech was played, False otherwise
        """
        pass

    def cleanup(self) -> None:
        """
        Perform any cleanup operations for this provider.

        Override if your provider holds resources between calls.
        """
        pass

    def _play_audio_bytes(self, audio: bytes, volume: float) -> bool:
        """Play an MP3 clip through a temporary file that is removed afterwards."""
        if not audio:
            raise TTSProviderError("Empty audio clip")

        fd, temp_name = tempfile.mkstemp(prefix="tts-", suffix=".mp3")
        temp_file = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(audio)
            logger.debug(f"Playing {len(audio)} bytes of {self.provider_name} audio")
            return play_sound_file(temp_file, volume, wait=True)
        finally:
            temp_file.unlink(missing_ok=True)
