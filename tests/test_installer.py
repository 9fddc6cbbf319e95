"""Tests for the interactive installer dialogues."""

import click
import pytest

from audio_hooks.config_store import (
    SoundSelection,
    create_default_config,
    save_config,
)
from audio_hooks.installer import Installer, _api_key_value, choose
from audio_hooks.utils.constants import HookMode, SoundFiles

API_KEY = "sk_1234567890abcdef"

# Positions in the sound menu built from the bundled catalog
ATTENTION, COMPLETE, CHIME, BELL, CUSTOM, SILENT, PREVIEW = range(1, 8)


@pytest.fixture
def bundled_sounds(tmp_path, monkeypatch):
    directory = tmp_path / "bundled"
    directory.mkdir()
    for name in (SoundFiles.ATTENTION, SoundFiles.COMPLETE):
        (directory / name).write_bytes(b"ID3")
    monkeypatch.setattr(
        "audio_hooks.utils.sound_manager.get_bundled_sound_dir", lambda: directory
    )
    return directory


def test_choose_returns_value(scripted_prompts, capsys):
    scripted_prompts([2])
    assert choose("Pick one:", [("First", "a"), ("Second", "b")]) == "b"
    out = capsys.readouterr().out
    assert "1) First" in out and "2) Second" in out


class TestApiKeyValidation:
    def test_valid_key_is_stripped(self):
        assert _api_key_value(f"  {API_KEY}  ") == API_KEY

    @pytest.mark.parametrize("value,message", [("", "cannot be empty"), ("abc", "Invalid")])
    def test_invalid_keys_are_rejected(self, value, message):
        with pytest.raises(click.BadParameter, match=message):
            _api_key_value(value)


class TestGuidedInstallation:
    def test_standard(self, claude_home, scripted_prompts):
        scripted_prompts([1, ATTENTION, COMPLETE], [True])
        config = Installer().run_guided_installation()
        assert config.mode is HookMode.STANDARD
        assert config.api_key is None
        assert config.sound_selection == SoundSelection("attention", "complete")

    def test_tts_asks_for_key(self, claude_home, scripted_prompts):
        prompts, _ = scripted_prompts([2, API_KEY, BELL, SILENT], [True])
        config = Installer().run_guided_installation()
        assert prompts == []
        assert config.mode is HookMode.TTS
        assert config.api_key == API_KEY
        assert config.sound_selection == SoundSelection("bell", "silent")

    def test_invalid_key_propagates_bad_parameter(self, claude_home, scripted_prompts):
        scripted_prompts(["short"])
        with pytest.raises(click.BadParameter):
            Installer().prompt_for_api_key()

    def test_declined_returns_none(self, claude_home, scripted_prompts):
        scripted_prompts([1, ATTENTION, COMPLETE], [False])
        assert Installer().run_guided_installation() is None

    def test_existing_install_not_reconfigured(self, claude_home, scripted_prompts, capsys):
        save_config(create_default_config(HookMode.TTS, API_KEY))
        scripted_prompts([], [False])
        assert Installer().run_guided_installation() is None
        assert "Current mode: tts" in capsys.readouterr().out

    def test_abort_is_cancellation(self, claude_home, monkeypatch, capsys):
        def abort(*args, **kwargs):
            raise click.Abort()

        monkeypatch.setattr(click, "prompt", abort)
        assert Installer().run_guided_installation() is None
        assert "Installation cancelled." in capsys.readouterr().out


class TestSoundSelection:
    def test_preview_then_pick(self, claude_home, commands, bundled_sounds, scripted_prompts):
        scripted_prompts([PREVIEW, 1, CHIME, COMPLETE])

        selection = Installer().select_sounds()

        assert selection == SoundSelection("chime", "complete")
        assert commands.ran == [
            ["mpg123", "-q", "--gain", "50", str(bundled_sounds / SoundFiles.ATTENTION)]
        ]

    def test_custom_shows_instructions(self, claude_home, scripted_prompts, capsys):
        scripted_prompts([CUSTOM, COMPLETE])
        selection = Installer().select_sounds()
        assert selection.notification == "custom"
        out = capsys.readouterr().out
        assert "notification-custom.mp3" in out
        assert "Custom sound file not found" in out

    def test_preview_silent(self, claude_home, commands, capsys):
        Installer().preview_sound("silent")
        assert "Silent" in capsys.readouterr().out
        assert commands.commands == []

    def test_preview_missing_custom(self, claude_home, commands, capsys):
        Installer().preview_sound("custom", "completion")
        assert "cannot preview" in capsys.readouterr().out
        assert commands.commands == []


class TestSwitchAndReconfigure:
    def test_switch_requires_installation(self, claude_home):
        assert Installer().switch_mode() is None

    def test_switch_to_tts_prompts_for_missing_key(self, claude_home, scripted_prompts):
        save_config(create_default_config(HookMode.STANDARD, sound_selection=SoundSelection("bell")))
        scripted_prompts([API_KEY], [True])

        config = Installer().switch_mode()
        assert config.mode is HookMode.TTS
        assert config.api_key == API_KEY
        assert config.sound_selection.notification == "bell"

    def test_switch_to_standard_keeps_key(self, claude_home, scripted_prompts):
        save_config(create_default_config(HookMode.TTS, API_KEY))
        scripted_prompts([], [True])
        config = Installer().switch_mode()
        assert config.mode is HookMode.STANDARD
        assert config.api_key == API_KEY

    def test_reconfigure_mode_delegates_to_switch(self, claude_home, scripted_prompts):
        save_config(create_default_config(HookMode.TTS, API_KEY))
        scripted_prompts([1], [True])
        assert Installer().reconfigure().mode is HookMode.STANDARD

    def test_api_key_only_for_tts(self, claude_home, scripted_prompts, capsys):
        save_config(create_default_config(HookMode.STANDARD))
        scripted_prompts([2])
        assert Installer().reconfigure() is None
        assert "only used in TTS mode" in capsys.readouterr().out
