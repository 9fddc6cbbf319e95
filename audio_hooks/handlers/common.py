# Shared plumbing for the hook entry points
# Claude Code runs each handler once per event with a JSON object on stdin

import json
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TextIO

from audio_hooks.utils.colored_logger import configure_root_logging, setup_logger
from audio_hooks.utils.constants import ExitCode

logger = setup_logger(__name__)


class HookInputError(ValueError):
    """Raised when stdin does not hold a single JSON object."""


@dataclass
class HookArguments:
    """Flags and positional words from the registered hook command line."""

    flags: Dict[str, Any] = field(default_factory=dict)
    positional: List[str] = field(default_factory=list)

    def has(self, flag: str) -> bool:
        return bool(self.flags.get(flag))


def read_json_from_stdin(stream: Optional[TextIO] = None) -> Dict[str, Any]:
    """
    Read and parse the hook payload.

    Raises:
        HookInputError: If the input is empty, malformed or not an object
    """
    stream = stream or sys.stdin
    data = stream.read()
    if not data.strip():
        raise HookInputError("No data received from stdin")

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise HookInputError(f"Invalid JSON format - {e}") from e

    if not isinstance(payload, dict):
        raise HookInputError("Hook input must be a JSON object")
    return payload


def parse_hook_arguments(argv: Optional[List[str]] = None) -> HookArguments:
    """
    Parse --key=value, --flag and positional arguments.

    Dashes in keys become underscores, so --dry-run is read as flags["dry_run"].
    """
    args = HookArguments()
    for arg in sys.argv[1:] if argv is None else argv:
        if arg.startswith("--"):
            key = arg[2:]
            if "=" in key:
                key, value = key.split("=", 1)
                args.flags[key.replace("-", "_")] = value
            else:
                args.flags[key.replace("-", "_")] = True
        else:
            args.positional.append(arg)
    return args


HookHandler = Callable[[Dict[str, Any], HookArguments], int]


def run_hook(
    handler: HookHandler,
    name: str,
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
) -> int:
    """
    Read stdin, run the handler and map failures to exit codes.

    Returns:
        int: 0 on success, 2 for unreadable input, 1 when the handler fails
    """
    configure_root_logging()
    arguments = parse_hook_arguments(argv)

    try:
        payload = read_json_from_stdin(stdin)
    except HookInputError as e:
        print(f"Error processing {name}: {e}", file=sys.stderr)
        return ExitCode.INVALID_INPUT

    try:
        return handler(payload, arguments)
    except Exception as e:
        logger.debug(f"{name} handler failed", exc_info=True)
        print(f"Error processing {name}: {e}", file=sys.stderr)
        return ExitCode.FAILURE


def first_field(payload: Dict[str, Any], keys: List[str], default: str) -> str:
    """First non-empty string value among keys, else default."""
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return default
