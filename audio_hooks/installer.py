# Interactive installer for Claude audio hooks
# Asks questions and returns a configuration; persisting it is up to the caller

from dataclasses import replace
from typing import List, Optional, Tuple

import click

from audio_hooks.config import Config
from audio_hooks.config_store import (
    AudioHooksConfig,
    SoundSelection,
    create_default_config,
    read_config,
    validate_api_key,
)
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import HookMode
from audio_hooks.utils.sound_manager import CUSTOM_SOUND_ID, SoundFileNotFoundError, SoundManager
from audio_hooks.utils.sound_player import play_sound_file

logger = setup_logger(__name__)

PREVIEW_CHOICE = "preview"


def choose(message: str, choices: List[Tuple[str, str]], default: int = 1) -> str:
    """
    Numbered single-choice menu.

    Args:
        message: Question shown above the menu
        choices: (label, value) pairs
        default: 1-based index chosen on empty input

    Returns:
        str: The value of the chosen entry
    """
    print(message)
    for index, (label, _) in enumerate(choices, start=1):
        print(f"  {index}) {label}")
    picked = click.prompt(
        "Choose",
        type=click.IntRange(1, len(choices)),
        default=default,
        show_default=True,
    )
    return choices[picked - 1][1]


def _api_key_value(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise click.BadParameter("API key cannot be empty")
    if not validate_api_key(value):
        raise click.BadParameter("Invalid API key format")
    return value


class Installer:
    """Question-and-answer flows for install, reconfigure and switch-mode."""

    def __init__(self, sound_manager: Optional[SoundManager] = None):
        self._sound_manager = sound_manager

    @property
    def sound_manager(self) -> SoundManager:
        if self._sound_manager is None:
            self._sound_manager = SoundManager()
        return self._sound_manager

    def prompt_for_mode(self) -> HookMode:
        print("\n🎵 Claude Audio Hooks Installation\n")
        value = choose(
            "Choose your installation mode:",
            [
                ("📢 Standard Mode - Audio notifications and completion sounds", "standard"),
                (
                    "🗣️ TTS Summary Mode - Audio notifications + AI-generated voice "
                    "summaries (Requires ElevenLabs API key)",
                    "tts",
                ),
            ],
        )
        return HookMode(value)

    def prompt_for_api_key(self) -> str:
        print("\n🔑 ElevenLabs API Key Setup\n")
        print("To use TTS summaries, you need an ElevenLabs API key.")
        print("You can get one at: https://elevenlabs.io/app/speech-synthesis")
        print("💡 Free tier includes 10k characters per month\n")

        # value_proc raising BadParameter makes click ask again
        return click.prompt(
            "Enter your ElevenLabs API key",
            hide_input=True,
            value_proc=_api_key_value,
        )

    def preview_sound(self, sound_id: str, event_type: Optional[str] = None) -> None:
        sound = self.sound_manager.get_sound_by_id(sound_id)
        if sound is None:
            print(f"❌ Sound not found: {sound_id}")
            return
        if sound.is_silent:
            print("🔇 Silent - no sound to preview")
            return

        print(f"🎵 Playing: {sound.name}")
        if sound.id == CUSTOM_SOUND_ID and event_type and not self.sound_manager.custom_sound_exists(
            event_type
        ):
            print("❌ Custom sound file not found - cannot preview")
            return

        try:
            sound_path = self.sound_manager.resolve_for_event(event_type or "notification", sound.id)
        except SoundFileNotFoundError as e:
            print(f"❌ Error playing sound: {e}")
            return
        if sound_path and not play_sound_file(sound_path, Config.from_env().volume, wait=True):
            print("❌ Error playing sound")

    def select_sounds(self) -> SoundSelection:
        """Pick one sound per event type, with a preview detour."""
        selection = SoundSelection()
        sounds = self.sound_manager.get_available_sounds()

        print("\n🎵 Sound Selection\n")
        for event_type in self.sound_manager.get_event_types():
            choices = [
                (f"{'🔇' if s.is_silent else '🎵'} {s.name} - {s.description}", s.id)
                for s in sounds
            ]
            choices.append(("🎧 Preview sounds", PREVIEW_CHOICE))
            default_id = selection.get(event_type.key)
            default_index = next(
                (i for i, (_, value) in enumerate(choices, start=1) if value == default_id), 1
            )

            selected = None
            while selected is None:
                choice = choose(
                    f"Select sound for {event_type.name}:", choices, default=default_index
                )
                if choice == PREVIEW_CHOICE:
                    to_preview = choose(
                        "Which sound would you like to preview?",
                        [(s.name, s.id) for s in self.sound_manager.get_playable_sounds()],
                    )
                    self.preview_sound(to_preview, event_type.key)
                    print("")
                    continue

                selected = choice
                if choice == CUSTOM_SOUND_ID:
                    print("")
                    for line in self.sound_manager.describe_custom_sound(event_type.key):
                        print(line)
                    print("")

            setattr(selection, event_type.key, selected)
            sound = self.sound_manager.get_sound_by_id(selected)
            print(f"✅ Selected: {sound.name if sound else selected}\n")

        return selection

    def confirm_installation(self, mode: HookMode, has_api_key: bool) -> bool:
        print("\n📋 Installation Summary\n")
        print(f"Mode: {mode.label}")

        if mode is HookMode.TTS:
            print(f"ElevenLabs API: {'✅ Configured' if has_api_key else '❌ Not configured'}")
            print("Features:")
            print("  • 🔔 Audio notifications for attention needed")
            print("  • ✅ Audio notifications for task completion")
            print("  • 🗣️ AI-generated voice summaries of actions")
        else:
            print("Features:")
            print("  • 🔔 Audio notifications for attention needed")
            print("  • ✅ Audio notifications for task completion")
            print("  • 📝 Activity logging")

        print("\nThis will:")
        print("  • Install hooks to ~/.claude/settings.json")
        if mode is HookMode.TTS:
            print("  • Configure ElevenLabs MCP server in ~/.claude.json")
        print("  • Create logs directory at ~/.claude/logs/")
        print("  • Save configuration to ~/.claude/audio-hooks-config.json\n")

        return click.confirm("Proceed with installation?", default=True)

    def run_guided_installation(self) -> Optional[AudioHooksConfig]:
        """
        Full install dialogue.

        Returns:
            AudioHooksConfig or None: None when the user cancels
        """
        try:
            existing = read_config()
            if existing:
                print("⚠️  Audio hooks are already installed.")
                print(f"Current mode: {existing.mode}")
                if not click.confirm("Would you like to reconfigure?", default=False):
                    print("Installation cancelled.")
                    return None

            mode = self.prompt_for_mode()
            api_key = self.prompt_for_api_key() if mode is HookMode.TTS else None
            sound_selection = self.select_sounds()

            if not self.confirm_installation(mode, bool(api_key)):
                print("Installation cancelled.")
                return None

            return create_default_config(mode, api_key, sound_selection)

        except (click.Abort, EOFError):
            print("\nInstallation cancelled.")
            return None

    def switch_mode(self) -> Optional[AudioHooksConfig]:
        """Flip standard/tts, keeping a stored API key."""
        try:
            current = read_config()
            if not current:
                print("❌ No existing installation found. Run install first.")
                return None

            print(f"\n🔄 Current mode: {current.mode}")
            new_mode = current.mode.toggled()
            if not click.confirm(f"Switch to {new_mode} mode?", default=True):
                print("Mode switch cancelled.")
                return None

            api_key = current.api_key
            if new_mode is HookMode.TTS and not api_key:
                api_key = self.prompt_for_api_key()

            return replace(current, mode=new_mode, api_key=api_key)

        except (click.Abort, EOFError):
            print("\nMode switch cancelled.")
            return None

    def reconfigure(self) -> Optional[AudioHooksConfig]:
        """Short menu: change mode, update the API key, or cancel."""
        try:
            current = read_config()
            if not current:
                print("❌ No existing installation found. Run install first.")
                return None

            print("\n⚙️  Reconfigure Audio Hooks\n")
            print(f"Current mode: {current.mode}")
            if current.api_key:
                print("ElevenLabs API key: ✅ Configured")

            choice = choose(
                "What would you like to reconfigure?",
                [
                    ("Change installation mode", "mode"),
                    ("Update ElevenLabs API key", "apikey"),
                    ("Cancel", "cancel"),
                ],
            )

            if choice == "mode":
                return self.switch_mode()

            if choice == "apikey":
                if current.mode is not HookMode.TTS:
                    print("❌ ElevenLabs API key is only used in TTS mode.")
                    return None
                return replace(current, api_key=self.prompt_for_api_key())

            print("Reconfiguration cancelled.")
            return None

        except (click.Abort, EOFError):
            print("\nReconfiguration cancelled.")
            return None
