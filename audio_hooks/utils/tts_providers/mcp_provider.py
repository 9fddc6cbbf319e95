"""
ElevenLabs MCP provider for Claude audio hooks.

Asks Claude Code's own CLI to call the ElevenLabs MCP server registered by the
installer, then plays the base64 clip it returns.
"""

import base64
import binascii
import json
import shutil
import subprocess
from typing import Optional

from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import TTSConstants
from .base import TTSProvider, TTSProviderError

logger = setup_logger(__name__)


class McpProvider(TTSProvider):
    """TTS provider that goes through `claude mcp call elevenlabs generate_speech`."""

    def __init__(
        self,
        voice_id: str = "pNInz6obpgDQGcFmaJgB",
        timeout: float = 10.0,
        volume: float = 0.7,
        claude_binary: str = "claude",
    ):
        """
        Initialize the MCP provider.

        Args:
            voice_id (str): ElevenLabs voice used for the summary
            timeout (float): Seconds before the CLI call is treated as failed
            volume (float): Playback volume 0.0-1.0
            claude_binary (str): Name or path of the Claude Code CLI
        """
        self.voice_id = voice_id
        self.timeout = timeout
        self.volume = volume
        self.claude_binary = claude_binary

    @property
    def provider_name(self) -> str:
        return "mcp"

    def is_available(self) -> bool:
        return shutil.which(self.claude_binary) is not None

    def build_command(self, text: str) -> list:
        return [
            self.claude_binary,
            "mcp",
            "call",
            TTSConstants.MCP_SERVER_NAME,
            "generate_speech",
            "--text",
            text,
            "--voice_id",
            self.voice_id,
            "--output_format",
            TTSConstants.MCP_OUTPUT_FORMAT,
        ]

    def fetch_audio(self, text: str) -> bytes:
        """
        Request speech for text.

        Raises:
            TTSProviderError: On timeout, a failed call or an unusable response
        """
        try:
            result = subprocess.run(
                self.build_command(text),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise TTSProviderError(f"MCP TTS generation timed out after {self.timeout}s")
        except OSError as e:
            raise TTSProviderError(f"MCP TTS generation failed: {e}")

        if result.returncode != 0:
            raise TTSProviderError(
                f"MCP TTS generation failed: {result.stderr.strip() or result.returncode}"
            )

        audio_base64 = self._extract_audio(result.stdout)
        if not audio_base64:
            raise TTSProviderError("MCP response contained no audio")
        try:
            return base64.b64decode(audio_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise TTSProviderError(f"Invalid base64 audio in MCP response: {e}")

    @staticmethod
    def _extract_audio(stdout: str) -> Optional[str]:
        try:
            response = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise TTSProviderError(f"Failed to parse MCP response: {e}")
        if not isinstance(response, dict):
            return None
        return response.get("audio_base64")

    def speak(self, text: str) -> bool:
        if not self.is_available():
            logger.info(f"{self.claude_binary} CLI not found, skipping MCP provider")
            return False
        audio = self.fetch_audio(text)
        return self._play_audio_bytes(audio, self.volume)
