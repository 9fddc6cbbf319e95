"""
Terminal status indicator for Claude audio hooks.

Status changes are explicit calls: a handler sets "working", "attention" or
"completed" once per invocation. The animated indicator is a cooperative
StatusAnimator whose caller owns the timing and calls tick().
"""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from audio_hooks.config import Config
from audio_hooks.utils.colored_logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class StatusConfig:
    emoji: str
    message: str
    color: str


STATUS_CONFIGS = {
    "working": StatusConfig("⚡", "Claude is working...", "\033[33m"),  # Yellow
    "attention": StatusConfig("🔔", "Attention required", "\033[31m"),  # Red
    "completed": StatusConfig("✅", "Task completed", "\033[32m"),  # Green
    "error": StatusConfig("❌", "Error occurred", "\033[31m"),  # Red
    "idle": StatusConfig("💤", "Claude is idle", "\033[37m"),  # White/Default
}

RESET = "\033[0m"


@dataclass
class StatusUpdate:
    """What a status change produced."""

    status: str
    message: str
    title: str


def format_title(status: str, message: Optional[str] = None) -> str:
    config = STATUS_CONFIGS[status]
    return f"{config.emoji} Claude - {message or config.message}"


def title_sequence(title: str) -> str:
    """OSC 0 escape sequence that sets the terminal window title."""
    return f"\033]0;{title}\033\\"


def set_terminal_status(
    status: str,
    custom_message: Optional[str] = None,
    stream: Optional[TextIO] = None,
    verbose: bool = False,
    config: Optional[Config] = None,
) -> StatusUpdate:
    """
    Show a status in the terminal title.

    Args:
        status: One of STATUS_CONFIGS
        custom_message: Text replacing the status' default message
        stream: Where the escape sequence is written (default stdout)
        verbose: Also print a colored status line
        config: Settings (read from the environment when omitted)

    Returns:
        StatusUpdate: The status, message and title that were applied
    """
    if status not in STATUS_CONFIGS:
        raise ValueError(f"Unknown status: {status}")

    config = config or Config.from_env()
    status_config = STATUS_CONFIGS[status]
    message = custom_message or status_config.message
    title = format_title(status, message)
    stream = stream or sys.stdout

    logger.debug(f"Setting terminal status: {status} - {message}")

    if config.terminal_title:
        stream.write(title_sequence(title))
    if verbose:
        stream.write(f"{status_config.color}{status_config.emoji} {message}{RESET}\n")
    stream.flush()

    return StatusUpdate(status=status, message=message, title=title)


def clear_terminal_status(stream: Optional[TextIO] = None) -> None:
    """Reset the terminal title to plain "Claude"."""
    stream = stream or sys.stdout
    stream.write(title_sequence("Claude"))
    stream.flush()


class StatusAnimator:
    """
    Cycling indicator frames for a status, advanced by the caller.

    Example:
        animator = StatusAnimator("working", "Edit...")
        title = animator.tick()  # call again whenever the caller's timer fires
    """

    FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

    def __init__(self, status: str = "working", message: Optional[str] = None):
        if status not in STATUS_CONFIGS:
            raise ValueError(f"Unknown status: {status}")
        self.status = status
        self.message = message or STATUS_CONFIGS[status].message
        self.index = 0

    def tick(self, stream: Optional[TextIO] = None) -> str:
        """Advance one frame, write it when a stream is given, and return the title."""
        frame = self.FRAMES[self.index % len(self.FRAMES)]
        self.index += 1
        title = f"{frame} Claude - {self.message}"
        if stream is not None:
            stream.write(title_sequence(title))
            stream.flush()
        return title
