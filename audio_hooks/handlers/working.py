#!/usr/bin/env python3
# PreToolUse hook: log the tool call and show a "working" status

import sys
from typing import Any, Dict

from audio_hooks.handlers.common import HookArguments, first_field, run_hook
from audio_hooks.utils.constants import ExitCode, LogNames
from audio_hooks.utils.event_logger import log_event
from audio_hooks.utils.status_manager import set_terminal_status

TASK_FIELDS = ["task", "tool", "tool_name", "action"]


def handle_working(payload: Dict[str, Any], arguments: HookArguments) -> int:
    log_event(LogNames.WORKING, payload)

    task = first_field(payload, TASK_FIELDS, "Working")
    set_terminal_status("working", f"{task}...", verbose=arguments.has("verbose"))
    return ExitCode.SUCCESS


def main(argv=None, stdin=None) -> int:
    return run_hook(handle_working, "working state", argv, stdin)


if __name__ == "__main__":
    sys.exit(main())
