"""Tests for audio_hooks/config_store.py: config file and Claude settings patching."""

import pytest

from audio_hooks.config_store import (
    AudioHooksConfig,
    ConfigError,
    JsonDocument,
    SoundSelection,
    configure_integration_server,
    create_default_config,
    find_own_command,
    get_config_path,
    get_hook_commands,
    get_host_settings_path,
    get_integration_config_path,
    is_own_hook_command,
    load_config,
    load_host_settings,
    load_integration_config,
    read_config,
    register_hooks,
    remove_config,
    remove_integration_server,
    save_config,
    unregister_hooks,
    validate_api_key,
)
from audio_hooks.utils.constants import HookMode
from audio_hooks.utils.hooks_constants import HookEvent
from tests.helpers import read_json, write_json


def _own_entries(settings, hook_event):
    return [
        e
        for e in settings.get_hook_entries(hook_event)
        if any(is_own_hook_command(h.get("command")) for h in e.get("hooks", []))
    ]


# ── Audio hooks config ───────────────────────────────────────────────────────


class TestAudioHooksConfig:
    @pytest.mark.parametrize(
        "config",
        [
            create_default_config(HookMode.STANDARD),
            create_default_config(
                HookMode.TTS, "sk_1234567890abcdef", SoundSelection("bell", "silent")
            ),
        ],
    )
    def test_save_then_load_round_trips(self, claude_home, config):
        save_config(config)
        assert load_config() == config

    def test_saved_file_uses_documented_keys(self, claude_home):
        save_config(create_default_config(HookMode.TTS, "sk_1234567890abcdef"))
        data = read_json(get_config_path())
        assert data["mode"] == "tts"
        assert data["apiKey"] == "sk_1234567890abcdef"
        assert data["soundSelection"] == {"notification": "attention", "completion": "complete"}
        assert "installedAt" in data and "version" in data

    def test_save_creates_claude_dir(self, claude_home):
        assert not (claude_home / ".claude").exists()
        save_config(create_default_config(HookMode.STANDARD))
        assert get_config_path().exists()

    def test_missing_file_is_not_configured(self, claude_home):
        assert load_config() is None

    def test_removed_config_reads_as_not_configured(self, claude_home):
        save_config(create_default_config(HookMode.STANDARD))
        remove_config()
        assert get_config_path().read_text() == ""
        assert load_config() is None

    def test_malformed_json_raises(self, claude_home):
        get_config_path().parent.mkdir(parents=True)
        get_config_path().write_text("{not json")
        with pytest.raises(ConfigError):
            load_config()

    def test_read_config_treats_malformed_as_not_configured(self, claude_home):
        get_config_path().parent.mkdir(parents=True)
        get_config_path().write_text("[1, 2")
        assert read_config() is None

    def test_document_without_mode_is_invalid(self, claude_home):
        write_json(get_config_path(), {"version": "1.0.0"})
        with pytest.raises(ConfigError):
            load_config()

    def test_legacy_api_key_name_is_accepted(self):
        config = AudioHooksConfig.from_dict(
            {"mode": "tts", "elevenLabsApiKey": "sk_legacy_key_value"}
        )
        assert config.api_key == "sk_legacy_key_value"
        assert config.is_tts_configured

    @pytest.mark.parametrize(
        "document",
        [
            {"mode": "standard", "soundSelection": "bell"},
            {"mode": "standard", "soundSelection": ["bell"]},
            {"mode": "standard", "soundSelection": {"notification": 3}},
            {"mode": "standard", "installedAt": 1700000000},
            {"mode": "tts", "apiKey": {"key": "sk_1234567890abcdef"}},
            {"mode": "standard", "version": 1.0},
            {"mode": ["tts"]},
        ],
    )
    def test_wrongly_shaped_fields_are_config_errors(self, claude_home, document):
        write_json(get_config_path(), document)
        with pytest.raises(ConfigError):
            load_config()
        assert read_config() is None

    def test_hooks_section_flag_round_trips(self, claude_home):
        config = create_default_config(HookMode.STANDARD)
        assert "createdHooksSection" not in config.to_dict()
        config.created_hooks_section = True
        save_config(config)
        assert read_json(get_config_path())["createdHooksSection"] is True
        assert load_config().created_hooks_section is True

    def test_missing_sound_selection_uses_defaults(self):
        config = AudioHooksConfig.from_dict({"mode": "standard"})
        assert config.sound_selection == SoundSelection("attention", "complete")

    @pytest.mark.parametrize(
        "key,valid",
        [
            ("sk_1234567890", True),
            ("   ", False),
            ("", False),
            ("short", False),
            (None, False),
        ],
    )
    def test_validate_api_key(self, key, valid):
        assert validate_api_key(key) is valid


# ── Claude settings ──────────────────────────────────────────────────────────


class TestJsonDocument:
    def test_missing_file_loads_empty(self, claude_home):
        assert load_host_settings().data == {}

    def test_malformed_file_degrades_to_empty(self, claude_home):
        path = get_host_settings_path()
        path.parent.mkdir(parents=True)
        path.write_text("{oops")
        assert load_host_settings().data == {}

    def test_unknown_keys_survive_save(self, claude_home):
        original = {"model": "opus", "permissions": {"allow": ["Bash(ls)"]}, "env": {"A": "1"}}
        write_json(get_host_settings_path(), original)

        settings = load_host_settings()
        register_hooks(settings, HookMode.STANDARD)
        settings.save()

        saved = read_json(get_host_settings_path())
        for key, value in original.items():
            assert saved[key] == value

    def test_save_leaves_no_temp_files(self, claude_home):
        document = JsonDocument(get_host_settings_path(), {"a": 1})
        document.save()
        assert [p.name for p in get_host_settings_path().parent.iterdir()] == ["settings.json"]


class TestHookRegistration:
    def test_standard_commands_point_at_handlers(self):
        commands = get_hook_commands(HookMode.STANDARD)
        assert "working.py" in commands[HookEvent.PRE_TOOL_USE]
        assert commands[HookEvent.NOTIFICATION].endswith("--notify")
        assert "stop.py" in commands[HookEvent.STOP]
        assert commands[HookEvent.STOP].endswith("--chat")

    def test_tts_commands_use_summary_handler(self):
        commands = get_hook_commands(HookMode.TTS)
        assert commands[HookEvent.NOTIFICATION].endswith('tts_summary.py" notification')
        assert commands[HookEvent.STOP].endswith('tts_summary.py" stop')

    @pytest.mark.parametrize("first,second", [
        (HookMode.STANDARD, HookMode.STANDARD),
        (HookMode.STANDARD, HookMode.TTS),
        (HookMode.TTS, HookMode.TTS),
    ])
    def test_registering_twice_keeps_one_entry_per_hook(self, first, second):
        settings = JsonDocument(path=None)
        register_hooks(settings, first)
        register_hooks(settings, second)

        for hook_event, command in get_hook_commands(second).items():
            own = _own_entries(settings, hook_event)
            assert len(own) == 1
            assert own[0]["hooks"][0]["command"] == command
        assert settings.get_hook_entries(HookEvent.SUBAGENT_STOP) == [{"matcher": "", "hooks": []}]

    def test_user_hooks_are_kept(self):
        user_entry = {"matcher": "Bash", "hooks": [{"type": "command", "command": "lint.sh"}]}
        settings = JsonDocument(path=None, data={"hooks": {"PreToolUse": [user_entry]}})

        register_hooks(settings, HookMode.STANDARD)
        entries = settings.get_hook_entries(HookEvent.PRE_TOOL_USE)
        assert entries[0] == user_entry
        assert len(entries) == 2

        unregister_hooks(settings)
        assert settings.get_hook_entries(HookEvent.PRE_TOOL_USE) == [user_entry]

    def test_existing_subagent_stop_is_not_replaced(self):
        user_entry = {"matcher": "", "hooks": [{"type": "command", "command": "say done"}]}
        settings = JsonDocument(path=None, data={"hooks": {"SubagentStop": [user_entry]}})

        register_hooks(settings, HookMode.STANDARD)
        unregister_hooks(settings)

        assert settings.get_hook_entries(HookEvent.SUBAGENT_STOP) == [user_entry]

    def test_unregister_restores_untouched_document(self):
        original = {"model": "sonnet", "statusLine": {"type": "command", "command": "x"}}
        settings = JsonDocument(path=None, data={k: v for k, v in original.items()})

        created = register_hooks(settings, HookMode.TTS)
        removed = unregister_hooks(settings, remove_empty_section=created)

        assert created is True
        assert removed == 4
        assert settings.data == original

    def test_preexisting_empty_hooks_object_survives(self):
        settings = JsonDocument(path=None, data={"model": "sonnet", "hooks": {}})

        created = register_hooks(settings, HookMode.STANDARD)
        unregister_hooks(settings, remove_empty_section=created)

        assert created is False
        assert settings.data == {"model": "sonnet", "hooks": {}}

    def test_empty_hooks_object_kept_by_default(self):
        settings = JsonDocument(path=None)
        register_hooks(settings, HookMode.STANDARD)
        unregister_hooks(settings)
        assert settings.data == {"hooks": {}}

    def test_find_own_command(self):
        settings = JsonDocument(path=None)
        register_hooks(settings, HookMode.STANDARD)
        assert "notification.py" in find_own_command(settings, HookEvent.NOTIFICATION)

    @pytest.mark.parametrize(
        "command,own",
        [
            ('"/usr/bin/python3" "/site-packages/audio_hooks/handlers/stop.py" --chat', True),
            ("python3 ~/scripts/stop.py", False),
            ("echo audio_hooks", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_own_hook_command(self, command, own):
        assert is_own_hook_command(command) is own


# ── MCP server registration ──────────────────────────────────────────────────


class TestIntegrationServer:
    def test_configure_adds_server_and_keeps_others(self, claude_home):
        write_json(
            get_integration_config_path(),
            {"numStartups": 4, "mcpServers": {"github": {"command": "gh-mcp", "args": []}}},
        )

        configure_integration_server("sk_1234567890abcdef")

        data = read_json(get_integration_config_path())
        assert data["numStartups"] == 4
        assert data["mcpServers"]["github"] == {"command": "gh-mcp", "args": []}
        server = data["mcpServers"]["elevenlabs"]
        assert server["command"] == "uvx"
        assert server["args"] == ["elevenlabs-mcp"]
        assert server["env"] == {"ELEVENLABS_API_KEY": "sk_1234567890abcdef"}

    def test_remove_only_drops_elevenlabs(self, claude_home):
        configure_integration_server("sk_1234567890abcdef")
        document = load_integration_config()
        document.set_mcp_server("github", {"command": "gh-mcp"})
        document.save()

        assert remove_integration_server() is True
        assert read_json(get_integration_config_path())["mcpServers"] == {
            "github": {"command": "gh-mcp"}
        }

    def test_remove_without_server_is_noop(self, claude_home):
        assert remove_integration_server() is False
        assert not get_integration_config_path().exists()
