#!/usr/bin/env python3
# Stop hook: log the event, show "completed" and play the completion sound
#
# Flags:
#   --speak    on macOS, say "Your agent has finished" instead of the sound
#   --chat     copy the session transcript into logs/chat.json

import sys
from typing import Any, Dict

from audio_hooks.config import Config
from audio_hooks.config_store import read_config
from audio_hooks.handlers.common import HookArguments, first_field, run_hook
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import ExitCode, LogNames, TTSConstants
from audio_hooks.utils.event_logger import (
    is_debounced,
    log_event,
    set_hook_timestamp,
    write_chat_log,
)
from audio_hooks.utils.platform_utils import is_macos
from audio_hooks.utils.sound_manager import SoundFileNotFoundError
from audio_hooks.utils.sound_player import play_event_sound, speak_text
from audio_hooks.utils.status_manager import set_terminal_status
from audio_hooks.utils.transcript_parser import read_transcript

logger = setup_logger(__name__)

HOOK_STATE_KEY = "stop"


def notify_completion(arguments: HookArguments, settings: Config) -> None:
    """Speak or play the completion sound; errors are reported, never raised."""
    if arguments.has("speak") and is_macos():
        if not speak_text(TTSConstants.COMPLETION_PHRASE):
            logger.error("Error speaking notification")
        return

    config = read_config()
    sound_id = config.sound_selection.completion if config else None
    try:
        if not play_event_sound("completion", sound_id, settings.volume):
            logger.error("Error playing completion sound")
    except SoundFileNotFoundError as e:
        print(str(e), file=sys.stderr)
        print("Please ensure on-agent-complete.mp3 exists", file=sys.stderr)


def save_chat_log(transcript_path: str) -> None:
    entries = read_transcript(transcript_path)
    if entries is None:
        return
    try:
        chat_file = write_chat_log(entries)
        logger.debug(f"Wrote {len(entries)} transcript entries to {chat_file}")
    except OSError as e:
        logger.error(f"Error processing transcript: {e}")


def handle_stop(payload: Dict[str, Any], arguments: HookArguments) -> int:
    settings = Config.from_env()
    log_event(LogNames.STOP, payload)

    # Rapid repeated stops (e.g. subagents finishing together) play one sound
    debounced = is_debounced(HOOK_STATE_KEY, settings.debounce_seconds)
    set_hook_timestamp(HOOK_STATE_KEY)

    set_terminal_status(
        "completed",
        first_field(payload, ["result", "summary"], "Task completed"),
        verbose=arguments.has("verbose"),
        config=settings,
    )

    if debounced:
        logger.debug("Completion sound suppressed, previous stop was moments ago")
    else:
        notify_completion(arguments, settings)

    transcript_path = payload.get("transcript_path")
    if arguments.has("chat") and isinstance(transcript_path, str) and transcript_path:
        save_chat_log(transcript_path)

    return ExitCode.SUCCESS


def main(argv=None, stdin=None) -> int:
    return run_hook(handle_stop, "stop event", argv, stdin)


if __name__ == "__main__":
    sys.exit(main())
