# Configuration management for Claude audio hooks
# Loads settings from environment variables with sensible defaults

import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Package directory - hook commands point at handler files inside it
PACKAGE_DIR = Path(__file__).parent

# DON'T override existing env vars (global env takes priority)
load_dotenv()


def parse_bool_env(value: str, default: bool = False) -> bool:
    """
    Helper function to parse boolean environment variables consistently.

    Accepts multiple formats for better UX:
    - "true", "yes", "on", "1" → True
    - "false", "no", "off", "0" → False
    - Empty/None → default value

    Case-insensitive.
    """
    if not value:
        return default
    return value.lower() in ("true", "yes", "on", "1")


def parse_float_env(value: str, default: float) -> float:
    """Parse a numeric environment variable, falling back to default on garbage."""
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_home_dir() -> Path:
    """Base directory holding .claude/ and .claude.json (AUDIO_HOOKS_HOME or ~)."""
    override = os.getenv("AUDIO_HOOKS_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home()


def get_claude_dir() -> Path:
    """Directory owned by Claude Code: ~/.claude"""
    return get_home_dir() / ".claude"


def get_logs_dir() -> Path:
    """Directory holding per-event log files: ~/.claude/logs"""
    return get_claude_dir() / "logs"


def resolve_api_key(stored_key: str = "", env_var_name: str = "ELEVENLABS_API_KEY") -> str:
    """Resolve API key with priority: stored config key > environment > empty string.

    Args:
        stored_key: Key saved by the installer (may be empty)
        env_var_name: Name of the environment variable to fall back to

    Returns:
        Resolved API key string (may be empty if not configured)
    """
    if stored_key and stored_key.strip():
        return stored_key.strip()
    return os.getenv(env_var_name, "").strip()


@dataclass
class Config:
    """Configuration settings loaded from environment variables."""

    volume: float = 0.5
    debounce_seconds: float = 3.0
    terminal_title: bool = True
    debug: bool = False

    # Voice summary configuration
    tts_providers: str = "mcp,elevenlabs,say"
    tts_timeout_seconds: float = 10.0
    tts_volume: float = 0.7

    # ElevenLabs Configuration
    elevenlabs_voice_id: str = "pNInz6obpgDQGcFmaJgB"  # Adam voice
    elevenlabs_model_id: str = "eleven_flash_v2_5"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables.

        Values are re-read on every call so that hook processes and tests
        always see the current environment.
        """
        return cls(
            volume=parse_float_env(os.getenv("AUDIO_HOOKS_VOLUME", ""), 0.5),
            debounce_seconds=parse_float_env(
                os.getenv("AUDIO_HOOKS_DEBOUNCE_SECONDS", ""), 3.0
            ),
            terminal_title=parse_bool_env(
                os.getenv("AUDIO_HOOKS_TERMINAL_TITLE", "true"), True
            ),
            debug=parse_bool_env(os.getenv("DEBUG_HOOKS", "")),
            tts_providers=os.getenv("AUDIO_HOOKS_TTS_PROVIDERS", "mcp,elevenlabs,say"),
            tts_timeout_seconds=parse_float_env(
                os.getenv("AUDIO_HOOKS_TTS_TIMEOUT", ""), 10.0
            ),
            tts_volume=parse_float_env(os.getenv("AUDIO_HOOKS_TTS_VOLUME", ""), 0.7),
            elevenlabs_voice_id=os.getenv("ELEVENLABS_VOICE_ID", "pNInz6obpgDQGcFmaJgB"),
            elevenlabs_model_id=os.getenv("ELEVENLABS_MODEL_ID", "eleven_flash_v2_5"),
        )

    def get_tts_providers_list(self) -> list:
        """Parse TTS providers string into ordered list (leftmost = highest priority)."""
        if not self.tts_providers:
            return ["say"]  # Default fallback
        return [p.strip() for p in self.tts_providers.split(",") if p.strip()]
