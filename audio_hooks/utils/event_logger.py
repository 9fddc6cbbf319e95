"""
Append-only JSON event logs and the small hook-state file.

Each event type owns one file in the logs directory holding a JSON array of
records; every record is the hook payload with a leading ISO timestamp.
"""

import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from audio_hooks.config import get_logs_dir
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import FileNames

logger = setup_logger(__name__)


def ensure_logs_dir() -> Path:
    """Create the logs directory if it does not exist and return it."""
    logs_dir = get_logs_dir()
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def _read_json(path: Path, default: Any) -> Any:
    """Read a JSON file, returning default for missing or unreadable files."""
    if not path.exists():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Resetting unreadable file {path.name}: {e}")
        return default


def _write_json(path: Path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def get_log_file(event_type: str) -> Path:
    """Path of the log file for an event type."""
    return get_logs_dir() / f"{event_type}.json"


def log_event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Append a timestamped record to the event type's log file.

    Args:
        event_type: Log name, e.g. "working" or "notifications"
        data: Hook payload read from stdin

    Returns:
        The record that was appended
    """
    ensure_logs_dir()
    log_file = get_log_file(event_type)

    logs = _read_json(log_file, [])
    if not isinstance(logs, list):
        logger.warning(f"Log file {log_file.name} is not a JSON array, starting over")
        logs = []

    record = {"timestamp": datetime.now(timezone.utc).isoformat(), **data}
    logs.append(record)
    _write_json(log_file, logs)

    logger.debug(f"Logged {event_type} event ({len(logs)} total)")
    return record


def read_events(event_type: str) -> List[Dict[str, Any]]:
    """Return all logged records for an event type (empty when none)."""
    logs = _read_json(get_log_file(event_type), [])
    return logs if isinstance(logs, list) else []


def write_chat_log(entries: List[Dict[str, Any]]) -> Path:
    """Overwrite the consolidated chat log with parsed transcript entries."""
    chat_file = ensure_logs_dir() / FileNames.CHAT_LOG
    _write_json(chat_file, entries)
    return chat_file


def get_hook_state_file() -> Path:
    return get_logs_dir() / FileNames.HOOK_STATE


def set_hook_timestamp(hook_type: str, now_ms: Optional[int] = None) -> int:
    """Record the time (epoch milliseconds) a hook type last fired."""
    ensure_logs_dir()
    state_file = get_hook_state_file()

    state = _read_json(state_file, {})
    if not isinstance(state, dict):
        state = {}

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    state[hook_type] = stamp
    _write_json(state_file, state)
    return stamp


def get_hook_timestamp(hook_type: str) -> Optional[int]:
    """Return the last recorded time for a hook type, or None."""
    state = _read_json(get_hook_state_file(), {})
    if not isinstance(state, dict):
        return None
    value = state.get(hook_type)
    return int(value) if isinstance(value, (int, float)) else None


def is_debounced(hook_type: str, window_seconds: float, now_ms: Optional[int] = None) -> bool:
    """
    True when the hook type fired less than window_seconds ago.

    A window of zero or less disables debouncing.
    """
    if window_seconds <= 0:
        return False
    last = get_hook_timestamp(hook_type)
    if last is None:
        return False
    current = now_ms if now_ms is not None else int(time.time() * 1000)
    return 0 <= current - last < window_seconds * 1000
