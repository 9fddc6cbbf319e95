# Command line interface for Claude audio hooks
# install / uninstall / status / configure / switch-mode / help

import sys
from typing import Callable, Dict, List, Optional

from audio_hooks.config_store import (
    AudioHooksConfig,
    configure_integration_server,
    find_own_command,
    first_hook_command,
    is_integration_server_configured,
    load_host_settings,
    read_config,
    register_hooks,
    remove_config,
    remove_integration_server,
    save_config,
    save_host_settings,
    unregister_hooks,
)
from audio_hooks.installer import Installer
from audio_hooks.utils.colored_logger import configure_root_logging, setup_logger
from audio_hooks.utils.constants import ExitCode, HookMode
from audio_hooks.utils.event_logger import ensure_logs_dir
from audio_hooks.utils.hooks_constants import COMMAND_HOOK_EVENTS, HookEvent

logger = setup_logger(__name__)

PROGRAM = "claude-audio-hooks"

USAGE = f"""
🎵 Claude Audio Hooks CLI

Usage: {PROGRAM} <command>

Commands:
  install       Guided installation with mode selection
  uninstall     Remove all hooks and configuration
  status        Show current installation status
  configure     Change settings (API keys, etc.)
  switch-mode   Toggle between Standard and TTS modes
  help          Show this help message

Installation Modes:
  📢 Standard   - Audio notifications and completion sounds
  🗣️ TTS       - AI-generated voice summaries (requires ElevenLabs API key)

Examples:
  {PROGRAM} install      # Interactive installation
  {PROGRAM} status       # Check current setup
  {PROGRAM} switch-mode  # Toggle between modes
  {PROGRAM} uninstall    # Remove everything
"""

HOOK_DESCRIPTIONS = {
    HookEvent.PRE_TOOL_USE: ("Tool usage logging", "Tool usage logging"),
    HookEvent.NOTIFICATION: ("Sound notifications", "TTS summaries"),
    HookEvent.STOP: ("Sound completion", "TTS summaries"),
}


def apply_hooks(mode: HookMode) -> bool:
    """
    Register this mode's hook commands in Claude's settings.

    Returns:
        bool: True if settings.json had no "hooks" object before
    """
    settings = load_host_settings()
    created = register_hooks(settings, mode)
    save_host_settings(settings)
    return created


def sync_integration_server(config: AudioHooksConfig) -> None:
    """Register or drop the ElevenLabs MCP server to match the config's mode."""
    if config.mode is HookMode.TTS and config.api_key:
        configure_integration_server(config.api_key)
        print("✅ ElevenLabs MCP server configured")
    elif config.mode is HookMode.STANDARD:
        remove_integration_server()


def install_hooks(installer: Optional[Installer] = None) -> int:
    config = (installer or Installer()).run_guided_installation()
    if not config:
        print("Installation cancelled.")
        return ExitCode.SUCCESS

    previous = read_config()
    sync_integration_server(config)
    ensure_logs_dir()
    created = apply_hooks(config.mode)
    config.created_hooks_section = created or bool(previous and previous.created_hooks_section)
    save_config(config)

    print("\n✅ Claude Code hooks installed successfully!")
    print(f"\nInstalled in {config.mode} mode:")
    print("  ⚡ PreToolUse - Logs tool usage activity")
    if config.mode is HookMode.TTS:
        print("  🗣️ Notification - AI-generated TTS summaries")
        print("  🗣️ Stop - AI-generated TTS summaries")
        print("  🎙️ ElevenLabs TTS - Powered by ElevenLabs API")
    else:
        print("  🔔 Notification - System notifications with sound")
        print("  ✅ Stop - Task completion with sound")

    print("\n📝 Configuration saved to ~/.claude/audio-hooks-config.json")
    if config.mode is HookMode.TTS:
        print("🔧 ElevenLabs MCP configured in ~/.claude.json")
        print("\n💡 Restart Claude Code to activate the TTS features")
    return ExitCode.SUCCESS


def uninstall_hooks() -> int:
    print("Uninstalling Claude Code hooks...")

    config = read_config()
    if not config:
        print("No hooks installation found.")
        return ExitCode.SUCCESS

    settings = load_host_settings()
    if unregister_hooks(settings, remove_empty_section=config.created_hooks_section):
        save_host_settings(settings)
    else:
        print("No hooks found to uninstall.")

    # Also covers a server left behind by an earlier tts install
    if remove_integration_server():
        print("✅ ElevenLabs MCP server configuration removed")

    remove_config()
    print("✅ Claude Code hooks uninstalled successfully!")
    return ExitCode.SUCCESS


def show_status() -> int:
    config = read_config()

    print("🎵 Claude Audio Hooks Status\n")
    if not config:
        print("❌ No audio hooks installation found")
        print(f"\nRun `{PROGRAM} install` to set up audio hooks")
        return ExitCode.SUCCESS

    print("📋 Installation Details:")
    print(f"   Mode: {config.mode.label}")
    print(f"   Installed: {config.installed_date()}")
    print(f"   Version: {config.version}")

    if config.mode is HookMode.TTS:
        print(f"   ElevenLabs API: {'✅ Configured' if config.api_key else '❌ Not configured'}")
        if is_integration_server_configured():
            print("   MCP Server: ✅ Configured")
        else:
            print("   MCP Server: ❌ Not configured")

    print("\n🔧 Hook Status:")
    settings = load_host_settings()
    if not settings.get_hooks():
        print("❌ No hooks configuration found in Claude settings")
        return ExitCode.SUCCESS

    tts = config.mode is HookMode.TTS
    for hook_event in COMMAND_HOOK_EVENTS:
        description = HOOK_DESCRIPTIONS[hook_event][1 if tts else 0]
        if find_own_command(settings, hook_event):
            print(f"   ✅ {hook_event}: {description}")
        elif first_hook_command(settings, hook_event):
            print(f"   ⚠️ {hook_event}: {description} (another command is registered)")
        else:
            print(f"   ❌ {hook_event}: Not configured")

    print("\n💡 Commands:")
    print(f"   {PROGRAM} configure     - Change settings")
    print(f"   {PROGRAM} switch-mode   - Toggle between modes")
    print(f"   {PROGRAM} uninstall     - Remove hooks")
    return ExitCode.SUCCESS


def _apply_updated_config(config: AudioHooksConfig) -> None:
    sync_integration_server(config)
    if apply_hooks(config.mode):
        config.created_hooks_section = True
    save_config(config)


def configure_hooks(installer: Optional[Installer] = None) -> int:
    config = (installer or Installer()).reconfigure()
    if not config:
        return ExitCode.SUCCESS

    _apply_updated_config(config)
    print(f"\n✅ Configuration updated to {config.mode} mode!")
    if config.mode is HookMode.TTS:
        print("💡 Restart Claude Code to activate TTS features")
    return ExitCode.SUCCESS


def switch_mode(installer: Optional[Installer] = None) -> int:
    config = (installer or Installer()).switch_mode()
    if not config:
        return ExitCode.SUCCESS

    _apply_updated_config(config)
    print(f"\n✅ Switched to {config.mode} mode!")
    if config.mode is HookMode.TTS:
        print("💡 Restart Claude Code to activate TTS features")
    return ExitCode.SUCCESS


def show_help() -> int:
    print(USAGE)
    return ExitCode.SUCCESS


# command -> (handler, verb used in failure messages)
COMMANDS: Dict[str, tuple] = {
    "install": (install_hooks, "install hooks"),
    "uninstall": (uninstall_hooks, "uninstall hooks"),
    "status": (show_status, "check status"),
    "configure": (configure_hooks, "configure hooks"),
    "switch-mode": (switch_mode, "switch mode"),
    "help": (show_help, "show help"),
    "--help": (show_help, "show help"),
    "-h": (show_help, "show help"),
}


def run_command(command: str) -> int:
    """Run one subcommand, reporting unexpected errors as exit status 1."""
    handler: Callable[[], int]
    handler, action = COMMANDS[command]
    try:
        return handler()
    except KeyboardInterrupt:
        print("\nCancelled.")
        return ExitCode.FAILURE
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ Failed to {action}: {e}", file=sys.stderr)
        return ExitCode.FAILURE


def main(argv: Optional[List[str]] = None) -> int:
    configure_root_logging()
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else None

    if command is None:
        show_help()
        return ExitCode.FAILURE

    if command not in COMMANDS:
        print(f"❌ Unknown command: {command}", file=sys.stderr)
        print(f"\nRun `{PROGRAM} help` to see available commands.\n")
        print(USAGE)
        return ExitCode.FAILURE

    return run_command(command)


def entry_point() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
