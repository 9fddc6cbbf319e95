"""
Cross-Platform Sound Effect Player for Claude audio hooks.

Sounds are played with the platform's own command line player (afplay on
macOS, the PowerShell SoundPlayer on Windows, mpg123/paplay/play on Linux and
WSL). Players are launched detached so the hook can exit immediately, except
on Windows where the scripted player blocks. pygame is used when a Linux box
has none of the command line players installed.
"""

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import MacSystemSounds, TTSConstants
from audio_hooks.utils.platform_utils import get_platform, is_macos, is_windows_like
from audio_hooks.utils.sound_manager import SoundFileNotFoundError, SoundManager

logger = setup_logger(__name__)

# pygame prints a banner to stdout on import; hook stdout belongs to Claude Code
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

try:
    import pygame

    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False
    pygame = None

# Built-in sound for each event type on macOS
MAC_FALLBACK_SOUNDS = {
    "notification": MacSystemSounds.NOTIFICATION,
    "completion": MacSystemSounds.COMPLETION,
}

WSL_NOTIFY_SEND = Path("~/.local/bin/wsl-notify-send.exe")


def _linux_play_command(sound_path: str, volume: float) -> Optional[List[str]]:
    """First available Linux player, or None."""
    if shutil.which("mpg123"):
        return ["mpg123", "-q", "--gain", str(int(volume * 100)), sound_path]
    if shutil.which("paplay"):
        return ["paplay", f"--volume={int(volume * 65535)}", sound_path]
    if shutil.which("play"):
        return ["play", "-q", "-v", str(volume), sound_path]
    return None


def build_play_command(
    sound_path: Path, volume: float = 0.5, platform_name: Optional[str] = None
) -> Optional[List[str]]:
    """
    Build the argument list that plays a file on the given platform.

    Args:
        sound_path: File to play
        volume: Volume level 0.0-1.0
        platform_name: Override for get_platform()

    Returns:
        list or None: Command arguments, None when no player is installed
    """
    platform_name = platform_name or get_platform()
    path = str(sound_path)

    if platform_name == "darwin":
        return ["afplay", "-v", str(volume), path]
    if platform_name == "win32":
        return [
            "powershell",
            "-c",
            f"(New-Object Media.SoundPlayer '{path}').PlaySync()",
        ]
    return _linux_play_command(path, volume)


def spawn_detached(command: List[str]) -> bool:
    """
    Launch a command without waiting for it.

    Returns:
        bool: True if the process was started
    """
    try:
        kwargs = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }
        if os.name == "posix":
            kwargs["start_new_session"] = True
        subprocess.Popen(command, **kwargs)
        logger.debug(f"Spawned: {command[0]}")
        return True
    except OSError as e:
        logger.error(f"Could not start {command[0]}: {e}")
        return False


def run_blocking(command: List[str], timeout: Optional[float] = None) -> bool:
    """Run a command to completion; True on exit status 0."""
    try:
        result = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.error(f"Error running {command[0]}: {e}")
        return False
    if result.returncode != 0:
        logger.error(f"{command[0]} exited with status {result.returncode}")
        return False
    return True


def play_with_pygame(sound_path: Path, volume: float = 0.5) -> bool:
    """
    Play a sound effect using pygame (blocking).

    Returns:
        bool: True if sound played successfully, False otherwise
    """
    if not PYGAME_AVAILABLE:
        logger.error("No audio player found - install mpg123 or pygame")
        return False

    try:
        pygame.mixer.init()
        pygame.mixer.music.load(str(sound_path))
        pygame.mixer.music.set_volume(volume)
        pygame.mixer.music.play()

        while pygame.mixer.music.get_busy():
            pygame.time.wait(100)
        return True
    except Exception as e:
        logger.error(f"Pygame audio error: {e}")
        return False
    finally:
        if pygame.mixer.get_init():
            pygame.mixer.quit()


def play_sound_file(sound_path: Path, volume: float = 0.5, wait: bool = False) -> bool:
    """
    Play an audio file with the platform player.

    Args:
        sound_path: File to play
        volume: Volume level 0.0-1.0
        wait: Block until playback finishes (always true on Windows)

    Returns:
        bool: True if playback was dispatched (or completed when blocking)
    """
    command = build_play_command(sound_path, volume)
    if command is None:
        return play_with_pygame(sound_path, volume)

    if wait or get_platform() == "win32":
        return run_blocking(command)
    return spawn_detached(command)


def resolve_event_sound(
    event_type: str, sound_id: Optional[str], sound_manager: Optional[SoundManager] = None
) -> Optional[Path]:
    """
    Resolve the file to play for an event, with the macOS system sound fallback.

    Returns:
        Path or None: File to play, None for a silent selection

    Raises:
        SoundFileNotFoundError: On platforms without a system default sound
    """
    manager = sound_manager or SoundManager()
    try:
        return manager.resolve_for_event(event_type, sound_id)
    except SoundFileNotFoundError:
        if is_macos() and event_type in MAC_FALLBACK_SOUNDS:
            logger.debug(f"Using macOS system sound for {event_type}")
            return Path(MAC_FALLBACK_SOUNDS[event_type])
        raise


def play_event_sound(
    event_type: str, sound_id: Optional[str], volume: float = 0.5
) -> bool:
    """
    Resolve and play the selected sound for an event.

    Returns:
        bool: True if playback was dispatched or the selection is silent

    Raises:
        SoundFileNotFoundError: When no file exists and the platform has no default
    """
    sound_path = resolve_event_sound(event_type, sound_id)
    if sound_path is None:
        logger.debug(f"Silent sound selected for {event_type}")
        return True
    return play_sound_file(sound_path, volume)


def speak_text(
    text: str,
    voice: Optional[str] = None,
    rate: Optional[str] = None,
    wait: bool = False,
) -> bool:
    """
    Speak text with the macOS `say` command.

    Returns:
        bool: False on other platforms or when `say` cannot be started
    """
    if not is_macos():
        return False
    command = ["say"]
    if voice:
        command += ["-v", voice]
    if rate:
        command += ["-r", rate]
    command.append(text)
    return run_blocking(command) if wait else spawn_detached(command)


def speak_fallback_summary(text: str) -> bool:
    """Speak a summary with the local macOS voice used for TTS fallbacks."""
    return speak_text(
        text, voice=TTSConstants.SAY_VOICE, rate=TTSConstants.SAY_RATE, wait=True
    )


def send_toast(title: str, message: str) -> bool:
    """
    Show a Windows toast notification through wsl-notify-send.

    Returns:
        bool: False when not on Windows/WSL or the helper cannot be started
    """
    if not is_windows_like():
        return False
    notifier = WSL_NOTIFY_SEND.expanduser()
    return spawn_detached([str(notifier), "--category", "Claude", f"{title}: {message}"])


def main():
    """
    Command-line interface for sound player.

    Usage:
    - python -m audio_hooks.utils.sound_player notification          # Play selected sound
    - python -m audio_hooks.utils.sound_player completion --sound bell
    """
    import argparse

    parser = argparse.ArgumentParser(description="Cross-Platform Sound Effect Player")
    parser.add_argument("event_type", choices=sorted(MAC_FALLBACK_SOUNDS))
    parser.add_argument("--sound", "-s", default=None, help="Sound id from the catalog")
    parser.add_argument(
        "--volume",
        "-v",
        type=float,
        default=0.5,
        help="Volume level 0.0-1.0 (default: 0.5)",
    )
    args = parser.parse_args()

    try:
        sound_path = resolve_event_sound(args.event_type, args.sound)
    except SoundFileNotFoundError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if sound_path is None:
        print("🔇 Silent - nothing to play")
        return

    print(f"🎵 Playing: {sound_path}")
    if not play_sound_file(sound_path, args.volume, wait=True):
        print("❌ Error: Could not play sound file")
        sys.exit(1)


if __name__ == "__main__":
    main()
