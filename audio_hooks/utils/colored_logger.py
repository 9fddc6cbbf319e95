"""
Colored logging for the CLI and hook handlers, with API keys redacted.

Hook handlers share stdout with Claude Code, so every handler writes its
diagnostics to stderr. Set LOG_FILE to send them to a plain-text file instead.
"""

import logging
import os
import re
import sys
from datetime import datetime
from pathlib import Path

from audio_hooks.config import Config
from audio_hooks.utils.constants import DateTimeConstants

# (pattern, replacement) pairs applied in order to every log message
REDACTIONS = [
    # ElevenLabs keys (sk_...) and other sk- style keys
    (re.compile(r"sk[-_][a-zA-Z0-9_-]{20,}"), "sk_***REDACTED***"),
    (re.compile(r"Bearer\s+[a-zA-Z0-9_-]{20,}", re.IGNORECASE), "Bearer ***REDACTED***"),
    # Legacy ElevenLabs keys are 32 hex characters
    (re.compile(r"\b[a-f0-9]{32,}\b", re.IGNORECASE), "***REDACTED***"),
    # ELEVENLABS_API_KEY=..., "apiKey": "...", xi-api-key: ...
    (
        re.compile(
            r'(API_KEY|APIKEY|API-KEY|TOKEN|SECRET|PASSWORD)(["\']?\s*[:=]\s*["\']?)([^\s"\',}\]]+)',
            re.IGNORECASE,
        ),
        r"\1\2***REDACTED***",
    ),
]


def redact_sensitive_data(text: str) -> str:
    """
    Mask API keys and tokens in a log message.

    Args:
        text: Log message text

    Returns:
        Text with secrets replaced by ***REDACTED***
    """
    if not text:
        return text
    for pattern, replacement in REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class ColoredFormatter(logging.Formatter):
    """Level-colored formatter for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",  # cyan
        "INFO": "\033[32m",  # green
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",  # red
        "CRITICAL": "\033[35m",  # magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        message = redact_sensitive_data(record.getMessage())
        return f"{color}{record.levelname}:{self.RESET}     {record.name}:{message}"


class PlainFormatter(logging.Formatter):
    """Timestamped formatter for LOG_FILE (no colors)."""

    def format(self, record):
        message = redact_sensitive_data(record.getMessage())
        timestamp = datetime.fromtimestamp(record.created).strftime(
            DateTimeConstants.ISO_DATETIME_FORMAT
        )
        return f"{timestamp} {record.levelname:8} {record.name}:{message}"


class StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr is when a record is emitted."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def _level_from_env() -> int:
    return logging.DEBUG if Config.from_env().debug else logging.INFO


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger at the level chosen by DEBUG_HOOKS.

    Records propagate to the root logger, which configure_root_logging
    points at stderr or LOG_FILE.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    logger.setLevel(_level_from_env())
    return logger


def setup_file_logging(log_file: str) -> str:
    """
    Attach a PlainFormatter file handler to the root logger once.

    Returns:
        Absolute path to the log file
    """
    log_path = Path(log_file).expanduser().absolute()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_path):
            return str(log_path)

    file_handler = logging.FileHandler(log_path, mode="a")
    file_handler.setFormatter(PlainFormatter())
    root_logger.addHandler(file_handler)
    return str(log_path)


def configure_root_logging() -> None:
    """Route diagnostics to colored stderr, or only to LOG_FILE when it is set."""
    log_file = os.getenv("LOG_FILE")
    root_logger = logging.getLogger()

    if log_file:
        setup_file_logging(log_file)
    elif not any(isinstance(h, StderrHandler) for h in root_logger.handlers):
        handler = StderrHandler()
        handler.setFormatter(ColoredFormatter())
        root_logger.addHandler(handler)

    root_logger.setLevel(_level_from_env())
