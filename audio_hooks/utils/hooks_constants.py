"""
Hook event constants for Claude audio hooks.

This module defines the hook event types this tool registers as an Enum,
providing type safety and preventing magic string usage throughout the system.
"""

from enum import Enum


class HookEvent(Enum):
    """
    Enumeration of the Claude Code hook events this tool touches.

    Each enum member has a string value that matches the key used under
    "hooks" in ~/.claude/settings.json.
    """

    PRE_TOOL_USE = "PreToolUse"
    NOTIFICATION = "Notification"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"

    def __str__(self) -> str:
        """Return the string value of the hook event."""
        return self.value


# Hook types that carry one of this tool's commands
COMMAND_HOOK_EVENTS = [HookEvent.PRE_TOOL_USE, HookEvent.NOTIFICATION, HookEvent.STOP]

