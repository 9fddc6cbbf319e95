"""
Centralized constants for Claude audio hooks.

This module consolidates all system constants, enums, and file names
into a single location for better maintainability and type safety.
"""

from enum import Enum

# Re-export HookEvent for convenience
from audio_hooks.utils.hooks_constants import HookEvent

__all__ = [
    "HookMode",
    "ExitCode",
    "FileNames",
    "LogNames",
    "HandlerFiles",
    "SoundFiles",
    "MacSystemSounds",
    "TTSConstants",
    "DateTimeConstants",
    "HookEvent",
]


class HookMode(Enum):
    """
    Installation mode enumeration.

    STANDARD plays sound effects, TTS speaks short generated summaries.
    """

    STANDARD = "standard"
    TTS = "tts"

    def __str__(self) -> str:
        """Return the string value of the mode."""
        return self.value

    @property
    def label(self) -> str:
        """Human readable label used by status and installer output."""
        return "🗣️ TTS Summary" if self is HookMode.TTS else "📢 Standard"

    def toggled(self) -> "HookMode":
        """Return the other mode."""
        return HookMode.STANDARD if self is HookMode.TTS else HookMode.TTS


class ExitCode:
    """Process exit codes shared by the CLI and the hook handlers."""

    SUCCESS = 0
    FAILURE = 1
    INVALID_INPUT = 2


class FileNames:
    """Files owned or patched by this tool, relative to their directories."""

    CONFIG = "audio-hooks-config.json"
    HOST_SETTINGS = "settings.json"
    INTEGRATION_CONFIG = ".claude.json"
    HOOK_STATE = "hook-state.json"
    CHAT_LOG = "chat.json"
    SOUND_CATALOG = "sound-config.json"


class LogNames:
    """Event log names (one JSON array file per name in the logs directory)."""

    WORKING = "working"
    NOTIFICATIONS = "notifications"
    STOP = "stop"
    TTS_SUMMARY = "tts-summary"


class HandlerFiles:
    """Hook handler entry points inside the handlers package."""

    WORKING = "working.py"
    NOTIFICATION = "notification.py"
    STOP = "stop.py"
    TTS_SUMMARY = "tts_summary.py"

    ALL = (WORKING, NOTIFICATION, STOP, TTS_SUMMARY)


class SoundFiles:
    """Bundled sound effect file names."""

    ATTENTION = "on-agent-need-attention.mp3"
    COMPLETE = "on-agent-complete.mp3"
    CHIME = "chime.mp3"
    BELL = "bell.mp3"


class MacSystemSounds:
    """Built-in macOS sounds used when no custom or bundled file exists."""

    NOTIFICATION = "/System/Library/Sounds/Funk.aiff"
    COMPLETION = "/System/Library/Sounds/Glass.aiff"


class TTSConstants:
    """Constants related to spoken summaries."""

    MAX_SUMMARY_WORDS = 8
    MCP_SERVER_NAME = "elevenlabs"
    MCP_OUTPUT_FORMAT = "mp3_44100_128"
    SAY_VOICE = "Samantha"
    SAY_RATE = "200"
    NOTIFICATION_PHRASE = "Your agent needs attention"
    COMPLETION_PHRASE = "Your agent has finished"


class DateTimeConstants:
    """Constants related to date and time formatting."""

    ISO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
    DISPLAY_DATE_FORMAT = "%Y-%m-%d"
