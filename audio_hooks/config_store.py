# Configuration store for Claude audio hooks
# Owns ~/.claude/audio-hooks-config.json and patches the two documents owned by
# Claude Code: ~/.claude/settings.json (hooks) and ~/.claude.json (MCP servers)

import json
import os
import sys
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from audio_hooks import __version__
from audio_hooks.config import PACKAGE_DIR, get_claude_dir, get_home_dir
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import (
    DateTimeConstants,
    FileNames,
    HandlerFiles,
    HookMode,
    TTSConstants,
)
from audio_hooks.utils.hooks_constants import COMMAND_HOOK_EVENTS, HookEvent

logger = setup_logger(__name__)

HANDLERS_DIR = PACKAGE_DIR / "handlers"

# Path component every hook command of ours contains
OWN_COMMAND_MARKER = PACKAGE_DIR.name


class ConfigError(Exception):
    """Raised when the audio hooks configuration file cannot be parsed."""


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def get_config_path() -> Path:
    return get_claude_dir() / FileNames.CONFIG


def get_host_settings_path() -> Path:
    return get_claude_dir() / FileNames.HOST_SETTINGS


def get_integration_config_path() -> Path:
    return get_home_dir() / FileNames.INTEGRATION_CONFIG


# ---------------------------------------------------------------------------
# Audio hooks configuration
# ---------------------------------------------------------------------------


@dataclass
class SoundSelection:
    """Selected sound id per event type."""

    notification: str = "attention"
    completion: str = "complete"

    def to_dict(self) -> Dict[str, str]:
        return {"notification": self.notification, "completion": self.completion}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SoundSelection":
        """
        Raises:
            ConfigError: If the selection is not an object of sound ids
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"soundSelection must be an object, got {type(data).__name__}")
        for key in ("notification", "completion"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ConfigError(f"soundSelection.{key} must be a sound id")
        return cls(
            notification=data.get("notification") or "attention",
            completion=data.get("completion") or "complete",
        )

    def get(self, event_type: str) -> str:
        return getattr(self, event_type)


@dataclass
class AudioHooksConfig:
    """Installed mode, optional API key and sound selection."""

    mode: HookMode
    api_key: Optional[str] = None
    sound_selection: SoundSelection = field(default_factory=SoundSelection)
    installed_at: str = ""
    version: str = __version__
    # True when install added the "hooks" object to settings.json
    created_hooks_section: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"mode": self.mode.value}
        if self.api_key:
            data["apiKey"] = self.api_key
        data["soundSelection"] = self.sound_selection.to_dict()
        data["installedAt"] = self.installed_at
        data["version"] = self.version
        if self.created_hooks_section:
            data["createdHooksSection"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AudioHooksConfig":
        """
        Build a config from its JSON form.

        Raises:
            ConfigError: If the document has no valid mode or a field has the wrong type
        """
        try:
            mode = HookMode(data.get("mode"))
        except (ValueError, TypeError):
            raise ConfigError(f"Invalid or missing mode: {data.get('mode')!r}")

        api_key = data.get("apiKey") or data.get("elevenLabsApiKey") or None
        for name, value in (
            ("apiKey", api_key),
            ("installedAt", data.get("installedAt")),
            ("version", data.get("version")),
        ):
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {type(value).__name__}")

        return cls(
            mode=mode,
            api_key=api_key,
            sound_selection=SoundSelection.from_dict(data.get("soundSelection")),
            installed_at=data.get("installedAt") or "",
            version=data.get("version") or __version__,
            created_hooks_section=data.get("createdHooksSection") is True,
        )

    @property
    def is_tts_configured(self) -> bool:
        return self.mode is HookMode.TTS and bool(self.api_key)

    def installed_date(self) -> str:
        """Install date for display, or the raw value if it is not ISO 8601."""
        try:
            return datetime.fromisoformat(self.installed_at.replace("Z", "+00:00")).strftime(
                DateTimeConstants.DISPLAY_DATE_FORMAT
            )
        except ValueError:
            return self.installed_at or "unknown"


def create_default_config(
    mode: HookMode,
    api_key: Optional[str] = None,
    sound_selection: Optional[SoundSelection] = None,
) -> AudioHooksConfig:
    return AudioHooksConfig(
        mode=mode,
        api_key=api_key,
        sound_selection=sound_selection or SoundSelection(),
        installed_at=datetime.now(timezone.utc).isoformat(),
        version=__version__,
    )


def load_config() -> Optional[AudioHooksConfig]:
    """
    Load the audio hooks configuration.

    Returns:
        AudioHooksConfig or None: None when the file is missing or emptied

    Raises:
        ConfigError: If the file holds malformed JSON or an invalid document
    """
    config_path = get_config_path()
    if not config_path.exists():
        return None

    content = config_path.read_text(encoding="utf-8")
    if not content.strip():
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse audio hooks config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Audio hooks config is not a JSON object")

    return AudioHooksConfig.from_dict(data)


def read_config() -> Optional[AudioHooksConfig]:
    """Load the configuration, treating an unreadable file as not configured."""
    try:
        return load_config()
    except (ConfigError, OSError) as e:
        logger.error(str(e))
        return None


def save_config(config: AudioHooksConfig) -> Path:
    config_path = get_config_path()
    _write_json_atomic(config_path, config.to_dict())
    logger.debug(f"Saved configuration to {config_path}")
    return config_path


def remove_config() -> None:
    """Empty the configuration file (an empty file reads as not configured)."""
    config_path = get_config_path()
    if config_path.exists():
        config_path.write_text("", encoding="utf-8")


def validate_api_key(api_key: Optional[str]) -> bool:
    """Minimal format check: a non-blank string longer than 10 characters."""
    return isinstance(api_key, str) and api_key.strip() != "" and len(api_key.strip()) > 10


# ---------------------------------------------------------------------------
# Documents owned by Claude Code
# ---------------------------------------------------------------------------


def _write_json_atomic(path: Path, data: Any) -> None:
    """Write JSON to a sibling temp file and move it over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonDocument:
    """
    A JSON object owned by another program.

    Only the keys this tool manages are read or changed through the typed
    accessors; everything else is written back exactly as it was loaded.
    """

    def __init__(self, path: Path, data: Optional[Dict[str, Any]] = None):
        self.path = path
        self.data: Dict[str, Any] = data if data is not None else {}

    @classmethod
    def load(cls, path: Path) -> "JsonDocument":
        """Load a document; missing or malformed files become an empty document."""
        if not path.exists():
            return cls(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not read {path}, starting from an empty document: {e}")
            return cls(path)
        if not isinstance(data, dict):
            logger.warning(f"{path} is not a JSON object, starting from an empty document")
            return cls(path)
        return cls(path, data)

    def save(self) -> None:
        _write_json_atomic(self.path, self.data)

    # Hooks (settings.json)

    def get_hooks(self) -> Dict[str, Any]:
        hooks = self.data.get("hooks")
        return hooks if isinstance(hooks, dict) else {}

    def get_hook_entries(self, hook_event: HookEvent) -> List[Dict[str, Any]]:
        entries = self.get_hooks().get(hook_event.value)
        return entries if isinstance(entries, list) else []

    def set_hook_entries(self, hook_event: HookEvent, entries: List[Dict[str, Any]]) -> None:
        hooks = self.data.get("hooks")
        if not isinstance(hooks, dict):
            hooks = {}
            self.data["hooks"] = hooks
        if entries:
            hooks[hook_event.value] = entries
        else:
            hooks.pop(hook_event.value, None)

    def has_hooks_section(self) -> bool:
        return isinstance(self.data.get("hooks"), dict)

    def remove_empty_hooks_section(self) -> bool:
        if self.has_hooks_section() and not self.data["hooks"]:
            del self.data["hooks"]
            return True
        return False

    # MCP servers (.claude.json)

    def get_mcp_server(self, name: str) -> Optional[Dict[str, Any]]:
        servers = self.data.get("mcpServers")
        if not isinstance(servers, dict):
            return None
        return servers.get(name)

    def set_mcp_server(self, name: str, server: Dict[str, Any]) -> None:
        servers = self.data.get("mcpServers")
        if not isinstance(servers, dict):
            servers = {}
            self.data["mcpServers"] = servers
        servers[name] = server

    def remove_mcp_server(self, name: str) -> bool:
        servers = self.data.get("mcpServers")
        if isinstance(servers, dict) and name in servers:
            del servers[name]
            return True
        return False


def load_host_settings() -> JsonDocument:
    return JsonDocument.load(get_host_settings_path())


def save_host_settings(settings: JsonDocument) -> None:
    settings.save()


def load_integration_config() -> JsonDocument:
    return JsonDocument.load(get_integration_config_path())


def save_integration_config(document: JsonDocument) -> None:
    document.save()


def configure_integration_server(api_key: str) -> None:
    """Register the ElevenLabs MCP server in ~/.claude.json."""
    document = load_integration_config()
    document.set_mcp_server(
        TTSConstants.MCP_SERVER_NAME,
        {
            "type": "stdio",
            "command": "uvx",
            "args": ["elevenlabs-mcp"],
            "env": {"ELEVENLABS_API_KEY": api_key},
        },
    )
    save_integration_config(document)


def remove_integration_server() -> bool:
    """Remove the ElevenLabs MCP server entry; True if one was removed."""
    document = load_integration_config()
    if document.remove_mcp_server(TTSConstants.MCP_SERVER_NAME):
        save_integration_config(document)
        return True
    return False


def is_integration_server_configured() -> bool:
    return load_integration_config().get_mcp_server(TTSConstants.MCP_SERVER_NAME) is not None


# ---------------------------------------------------------------------------
# Hook registration
# ---------------------------------------------------------------------------


def _handler_command(handler_file: str, *args: str) -> str:
    command = f'"{sys.executable}" "{HANDLERS_DIR / handler_file}"'
    if args:
        command += " " + " ".join(args)
    return command


def get_hook_commands(mode: HookMode = HookMode.STANDARD) -> Dict[HookEvent, str]:
    """Commands registered for each hook type in the given mode."""
    if mode is HookMode.TTS:
        return {
            HookEvent.PRE_TOOL_USE: _handler_command(HandlerFiles.WORKING),
            HookEvent.NOTIFICATION: _handler_command(HandlerFiles.TTS_SUMMARY, "notification"),
            HookEvent.STOP: _handler_command(HandlerFiles.TTS_SUMMARY, "stop"),
        }
    return {
        HookEvent.PRE_TOOL_USE: _handler_command(HandlerFiles.WORKING),
        HookEvent.NOTIFICATION: _handler_command(HandlerFiles.NOTIFICATION, "--notify"),
        HookEvent.STOP: _handler_command(HandlerFiles.STOP, "--chat"),
    }


def is_own_hook_command(command: Optional[str]) -> bool:
    """
    Check whether a hook command runs one of this package's handlers.

    The command must name the package directory and a handler file; a
    user's command that merely mentions "stop.py" does not count.
    """
    if not command or OWN_COMMAND_MARKER not in command:
        return False
    return any(name in command for name in HandlerFiles.ALL)


def _is_own_entry(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    hooks = entry.get("hooks")
    if not isinstance(hooks, list):
        return False
    return any(isinstance(h, dict) and is_own_hook_command(h.get("command")) for h in hooks)


def _is_empty_placeholder(entry: Any) -> bool:
    return isinstance(entry, dict) and entry.get("matcher", "") == "" and entry.get("hooks") == []


def find_own_command(settings: JsonDocument, hook_event: HookEvent) -> Optional[str]:
    """The command of our registration for a hook type, if any."""
    for entry in settings.get_hook_entries(hook_event):
        if not _is_own_entry(entry):
            continue
        for hook in entry["hooks"]:
            if isinstance(hook, dict) and is_own_hook_command(hook.get("command")):
                return hook["command"]
    return None


def first_hook_command(settings: JsonDocument, hook_event: HookEvent) -> Optional[str]:
    """The first command registered for a hook type, ours or not."""
    for entry in settings.get_hook_entries(hook_event):
        hooks = entry.get("hooks") if isinstance(entry, dict) else None
        for hook in hooks or []:
            if isinstance(hook, dict) and hook.get("command"):
                return hook["command"]
    return None


def register_hooks(settings: JsonDocument, mode: HookMode) -> bool:
    """
    Register this tool's commands, replacing any earlier registration.

    Entries that belong to other tools are kept in place.

    Returns:
        bool: True if the "hooks" object did not exist and was created
    """
    created = not settings.has_hooks_section()
    for hook_event, command in get_hook_commands(mode).items():
        entries = [e for e in settings.get_hook_entries(hook_event) if not _is_own_entry(e)]
        entries.append({"matcher": "", "hooks": [{"type": "command", "command": command}]})
        settings.set_hook_entries(hook_event, entries)

    if HookEvent.SUBAGENT_STOP.value not in settings.get_hooks():
        settings.set_hook_entries(HookEvent.SUBAGENT_STOP, [{"matcher": "", "hooks": []}])

    return created


def unregister_hooks(settings: JsonDocument, remove_empty_section: bool = False) -> int:
    """
    Remove this tool's registrations and the empty SubagentStop placeholder.

    The "hooks" object itself is only deleted when remove_empty_section is
    set (install created it) and nothing else is left in it.

    Returns:
        int: Number of entries removed
    """
    removed = 0
    for hook_event in COMMAND_HOOK_EVENTS:
        entries = settings.get_hook_entries(hook_event)
        kept = [e for e in entries if not _is_own_entry(e)]
        if len(kept) != len(entries):
            removed += len(entries) - len(kept)
            settings.set_hook_entries(hook_event, kept)

    subagent = settings.get_hook_entries(HookEvent.SUBAGENT_STOP)
    kept = [e for e in subagent if not _is_empty_placeholder(e)]
    if len(kept) != len(subagent):
        removed += len(subagent) - len(kept)
        settings.set_hook_entries(HookEvent.SUBAGENT_STOP, kept)

    if remove_empty_section:
        settings.remove_empty_hooks_section()
    return removed
