"""Local macOS voice provider, the last resort before logging the text."""

import shutil

from audio_hooks.utils.platform_utils import is_macos
from audio_hooks.utils.sound_player import speak_fallback_summary
from .base import TTSProvider


class SayProvider(TTSProvider):
    """TTS provider that uses the macOS `say` command."""

    @property
    def provider_name(self) -> str:
        return "say"

    def is_available(self) -> bool:
        return is_macos() and shutil.which("say") is not None

    def speak(self, text: str) -> bool:
        if not self.is_available():
            return False
        return speak_fallback_summary(text)
