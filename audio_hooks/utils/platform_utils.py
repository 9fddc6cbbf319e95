"""Platform detection used to pick sound players and notification commands."""

import os
import platform
import sys


def get_platform() -> str:
    """
    Return the operating system family.

    Returns:
        str: "darwin", "win32" or "linux" (other Unix systems map to "linux")
    """
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("win"):
        return "win32"
    return "linux"


def is_wsl() -> bool:
    """Check if running inside Windows Subsystem for Linux."""
    if os.getenv("WSL_DISTRO_NAME"):
        return True
    if get_platform() != "linux":
        return False
    return "microsoft" in platform.uname().release.lower()


def is_macos() -> bool:
    return get_platform() == "darwin"


def is_windows_like() -> bool:
    """Windows proper or WSL, where toast notifications are available."""
    return get_platform() == "win32" or is_wsl()
