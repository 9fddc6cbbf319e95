#!/usr/bin/env python3
# Notification hook: log the event and, with --notify, alert the user
#
# Flags:
#   --notify   show the attention status, a toast on Windows/WSL and play a sound
#   --speak    on macOS, say "Your agent needs attention" instead of the sound

import sys
from typing import Any, Dict

from audio_hooks.config import Config
from audio_hooks.config_store import read_config
from audio_hooks.handlers.common import HookArguments, first_field, run_hook
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import ExitCode, LogNames, TTSConstants
from audio_hooks.utils.event_logger import log_event
from audio_hooks.utils.platform_utils import is_macos, is_windows_like
from audio_hooks.utils.sound_manager import SoundFileNotFoundError
from audio_hooks.utils.sound_player import play_event_sound, send_toast, speak_text
from audio_hooks.utils.status_manager import set_terminal_status

logger = setup_logger(__name__)


def handle_notification(payload: Dict[str, Any], arguments: HookArguments) -> int:
    log_event(LogNames.NOTIFICATIONS, payload)

    if not arguments.has("notify"):
        return ExitCode.SUCCESS

    settings = Config.from_env()
    set_terminal_status(
        "attention",
        first_field(payload, ["message", "type"], "Attention needed"),
        verbose=arguments.has("verbose"),
        config=settings,
    )

    if is_windows_like():
        title = first_field(payload, ["message"], "Claude Hook")
        message = first_field(payload, ["type"], "Action required")
        if not send_toast(title, message):
            logger.info("wsl-notify-send unavailable, skipping toast")

    if arguments.has("speak") and is_macos():
        if not speak_text(TTSConstants.NOTIFICATION_PHRASE):
            logger.error("Error speaking notification")
        return ExitCode.SUCCESS

    config = read_config()
    sound_id = config.sound_selection.notification if config else None
    try:
        if not play_event_sound("notification", sound_id, settings.volume):
            logger.error("Error playing notification sound")
    except SoundFileNotFoundError as e:
        print(str(e), file=sys.stderr)
        print("Please ensure on-agent-need-attention.mp3 exists", file=sys.stderr)

    return ExitCode.SUCCESS


def main(argv=None, stdin=None) -> int:
    return run_hook(handle_notification, "notification", argv, stdin)


if __name__ == "__main__":
    sys.exit(main())
