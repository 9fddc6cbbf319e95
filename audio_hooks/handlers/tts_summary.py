#!/usr/bin/env python3
# Voice summary hook for TTS mode: speak a short summary instead of a sound
#
# Usage (registered by the installer):
#   tts_summary.py notification
#   tts_summary.py stop

import sys
from typing import Any, Dict, Optional

from audio_hooks.config import Config, resolve_api_key
from audio_hooks.config_store import read_config
from audio_hooks.handlers.common import HookArguments, first_field, run_hook
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import ExitCode, LogNames, TTSConstants
from audio_hooks.utils.event_logger import log_event
from audio_hooks.utils.tts_manager import TTSManager

logger = setup_logger(__name__)


def truncate_message(message: str, max_words: int = TTSConstants.MAX_SUMMARY_WORDS) -> str:
    words = message.split()
    return " ".join(words[:max_words])


def generate_summary_message(hook_type: Optional[str], payload: Dict[str, Any]) -> Optional[str]:
    """
    Templated summary for a hook event, at most eight words.

    Returns:
        str or None: None for hook types without a summary
    """
    if hook_type == "notification":
        message = first_field(payload, ["message", "type"], "attention needed")
        return truncate_message(f"Attention: {message}")

    if hook_type == "stop":
        tools = payload.get("tools_used")
        if isinstance(tools, list) and tools:
            return truncate_message(f"Completed: {', '.join(str(t) for t in tools[:2])}")
        result = first_field(payload, ["result", "summary"], "task completed")
        return truncate_message(f"Completed: {result}")

    return None


def build_tts_manager(api_key: str, settings: Config) -> TTSManager:
    return TTSManager(
        providers=settings.get_tts_providers_list(),
        api_key=api_key,
        voice_id=settings.elevenlabs_voice_id,
        model_id=settings.elevenlabs_model_id,
        timeout=settings.tts_timeout_seconds,
        volume=settings.tts_volume,
    )


def handle_tts_summary(payload: Dict[str, Any], arguments: HookArguments) -> int:
    log_event(LogNames.TTS_SUMMARY, payload)

    config = read_config()
    if not config or not config.is_tts_configured:
        print("TTS mode not configured properly", file=sys.stderr)
        return ExitCode.FAILURE

    hook_type = arguments.positional[0] if arguments.positional else None
    message = generate_summary_message(hook_type, payload)
    if not message:
        return ExitCode.SUCCESS

    settings = Config.from_env()
    manager = build_tts_manager(resolve_api_key(config.api_key), settings)
    try:
        manager.speak(message)
    finally:
        manager.cleanup()
    return ExitCode.SUCCESS


def main(argv=None, stdin=None) -> int:
    return run_hook(handle_tts_summary, "TTS summary", argv, stdin)


if __name__ == "__main__":
    sys.exit(main())
