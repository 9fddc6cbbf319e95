"""
ElevenLabs Text-to-Speech provider for Claude audio hooks.

Calls the ElevenLabs API directly with the key saved by the installer. Used
when the MCP route through the claude CLI is unavailable or fails.
"""

from typing import Optional

from audio_hooks.utils.colored_logger import setup_logger
from .base import TTSProvider, TTSProviderError

logger = setup_logger(__name__)

try:
    from elevenlabs.client import ElevenLabs

    ELEVENLABS_AVAILABLE = True
except ImportError:
    ELEVENLABS_AVAILABLE = False


class ElevenLabsProvider(TTSProvider):
    """TTS provider that uses ElevenLabs API for high-quality speech generation."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        model_id: str = "eleven_flash_v2_5",
        volume: float = 0.7,
        timeout: float = 10.0,
    ):
        """
        Initialize the ElevenLabs provider.

        Args:
            api_key (str): ElevenLabs API key
            voice_id (str): Voice ID to use (defaults to Adam)
            model_id (str): Model ID to use (default: "eleven_flash_v2_5" for speed)
            volume (float): Playback volume 0.0-1.0
            timeout (float): Seconds before an API request is treated as failed
        """
        self.api_key = api_key or ""
        self.voice_id = voice_id or "pNInz6obpgDQGcFmaJgB"
        self.model_id = model_id
        self.volume = volume
        self.timeout = timeout
        self._client = None

    @property
    def provider_name(self) -> str:
        return "elevenlabs"

    def is_available(self) -> bool:
        if not ELEVENLABS_AVAILABLE:
            logger.warning("ElevenLabs not available. Install with: pip install elevenlabs")
            return False
        if not self.api_key:
            logger.warning("ElevenLabs API key not configured")
            return False
        return True

    def _get_client(self):
        if self._client is None:
            self._client = ElevenLabs(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def generate_audio(self, text: str) -> bytes:
        """
        Generate MP3 audio for text.

        Raises:
            TTSProviderError: If the API call fails or returns no audio
        """
        try:
            audio = self._get_client().text_to_speech.convert(
                voice_id=self.voice_id,
                text=text,
                model_id=self.model_id,
                output_format="mp3_44100_128",
            )
            audio_bytes = b"".join(audio)
        except Exception as e:
            raise TTSProviderError(f"Error generating ElevenLabs speech: {e}") from e

        if not audio_bytes:
            raise TTSProviderError("ElevenLabs API returned empty audio data")
        logger.debug(f"Received {len(audio_bytes)} bytes of audio data from ElevenLabs")
        return audio_bytes

    def speak(self, text: str) -> bool:
        if not self.is_available():
            return False
        return self._play_audio_bytes(self.generate_audio(text), self.volume)

    def cleanup(self) -> None:
        self._client = None
