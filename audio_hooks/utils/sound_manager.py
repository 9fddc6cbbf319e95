"""
Sound catalog and sound file resolution.

The catalog ships with the package (sounds/sound-config.json) and lists the
selectable sounds plus the event types a sound can be chosen for. A sound
file is looked up in the user's ~/.claude directory first, so dropping a file
with the same name there overrides the bundled one.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from audio_hooks.config import PACKAGE_DIR, get_claude_dir
from audio_hooks.utils.colored_logger import setup_logger
from audio_hooks.utils.constants import FileNames

logger = setup_logger(__name__)

CATALOG_PATH = PACKAGE_DIR / "sounds" / FileNames.SOUND_CATALOG
CUSTOM_SOUND_ID = "custom"
SUPPORTED_EXTENSIONS = (".mp3", ".wav", ".aiff")

# Sound used for each event type when the stored selection is unknown
DEFAULT_SELECTION = {
    "notification": "attention",
    "completion": "complete",
}


class SoundFileNotFoundError(FileNotFoundError):
    """Raised when neither a user nor a bundled file exists for a sound."""

    def __init__(self, sound_file: str, searched: List[Path]):
        self.sound_file = sound_file
        self.searched = searched
        locations = ", ".join(str(p) for p in searched)
        super().__init__(f"Sound file not found: {sound_file} (searched {locations})")


@dataclass
class SoundOption:
    """One selectable sound. file=None means silence."""

    id: str
    name: str
    description: str
    file: Optional[str]

    @property
    def is_silent(self) -> bool:
        return self.file is None


@dataclass
class EventType:
    """An event a sound can be selected for (notification, completion)."""

    key: str
    name: str
    description: str


def get_bundled_sound_dir() -> Path:
    """Directory of sounds shipped with the package."""
    return PACKAGE_DIR / "sounds"


def get_user_sound_path(sound_file: str) -> Path:
    """Override location for a sound file: ~/.claude/<file>"""
    return get_claude_dir() / sound_file


def resolve_sound_path(sound_file: str) -> Path:
    """
    Locate a playable file, user override first, then the bundled copy.

    Args:
        sound_file: File name such as "on-agent-complete.mp3"

    Returns:
        Path: Existing file path

    Raises:
        SoundFileNotFoundError: If neither location has the file
    """
    candidates = [get_user_sound_path(sound_file), get_bundled_sound_dir() / sound_file]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise SoundFileNotFoundError(sound_file, candidates)


class SoundManager:
    """Catalog of selectable sounds loaded from the bundled descriptor."""

    def __init__(self, catalog_path: Optional[Path] = None):
        self.catalog_path = catalog_path or CATALOG_PATH
        catalog = self._load_catalog()
        self.sounds = [SoundOption(**s) for s in catalog.get("availableSounds", [])]
        self.event_types = [EventType(**e) for e in catalog.get("eventTypes", [])]

    def _load_catalog(self) -> Dict[str, Any]:
        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Sound catalog not found: {self.catalog_path}")
        with open(self.catalog_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def get_available_sounds(self) -> List[SoundOption]:
        return list(self.sounds)

    def get_playable_sounds(self) -> List[SoundOption]:
        """Sounds that have something to play (used for previews)."""
        return [s for s in self.sounds if not s.is_silent]

    def get_event_types(self) -> List[EventType]:
        return list(self.event_types)

    def get_sound_by_id(self, sound_id: str) -> Optional[SoundOption]:
        return next((s for s in self.sounds if s.id == sound_id), None)

    def get_custom_sound_path(self, event_type: str) -> Path:
        """Per-event custom file: ~/.claude/<event>-custom.mp3"""
        return get_claude_dir() / f"{event_type}-custom.mp3"

    def custom_sound_exists(self, event_type: str) -> bool:
        return self.get_custom_sound_path(event_type).exists()

    def resolve_for_event(self, event_type: str, sound_id: Optional[str]) -> Optional[Path]:
        """
        Resolve the file to play for an event's selected sound.

        Unknown ids fall back to the event's default sound.

        Returns:
            Path or None: File to play, None when the selection is silent

        Raises:
            SoundFileNotFoundError: If the selected sound has no file on disk
        """
        sound = self.get_sound_by_id(sound_id) if sound_id else None
        if sound is None:
            default_id = DEFAULT_SELECTION.get(event_type, "attention")
            if sound_id:
                logger.warning(f"Unknown sound '{sound_id}', using '{default_id}'")
            sound = self.get_sound_by_id(default_id)
        if sound is None or sound.is_silent:
            return None

        if sound.id == CUSTOM_SOUND_ID:
            custom_path = self.get_custom_sound_path(event_type)
            if custom_path.is_file():
                return custom_path
            logger.info(f"No custom sound at {custom_path}, using the default sound")
            fallback = self.get_sound_by_id(DEFAULT_SELECTION.get(event_type, "attention"))
            if fallback is None or fallback.is_silent:
                raise SoundFileNotFoundError(custom_path.name, [custom_path])
            return resolve_sound_path(fallback.file)

        return resolve_sound_path(sound.file)

    def describe_custom_sound(self, event_type: str) -> List[str]:
        """Setup instructions shown when the custom sound is selected."""
        custom_path = self.get_custom_sound_path(event_type)
        lines = [
            "📁 Custom Sound Setup Instructions:",
            f"   Place your custom sound file at: {custom_path}",
        ]
        if self.custom_sound_exists(event_type):
            lines.append("   ✅ Custom sound file found")
        else:
            lines.append(
                "   ⚠️  Custom sound file not found - will use fallback sound until you add it"
            )
        lines.append(f"   💡 Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}")
        return lines
