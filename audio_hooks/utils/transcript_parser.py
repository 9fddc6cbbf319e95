"""
Transcript parser for Claude Code JSONL conversation files.

The stop handler copies a session transcript into the consolidated chat log;
malformed lines are skipped rather than failing the whole transcript.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from audio_hooks.utils.colored_logger import setup_logger

logger = setup_logger(__name__)


def parse_jsonl(content: str) -> List[Dict[str, Any]]:
    """
    Parse newline-delimited JSON, skipping blank and malformed lines.

    Args:
        content: Raw transcript text

    Returns:
        list: Parsed records in file order
    """
    entries = []
    skipped = 0
    for line_number, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            skipped += 1
            logger.debug(f"Skipping malformed transcript line {line_number}")

    if skipped:
        logger.info(f"Skipped {skipped} malformed transcript line(s)")
    return entries


def read_transcript(transcript_path: str) -> Optional[List[Dict[str, Any]]]:
    """
    Read a transcript file.

    Args:
        transcript_path: Path from the hook payload (may start with ~)

    Returns:
        list or None: Parsed records, None if the file is missing or unreadable
    """
    path = Path(transcript_path).expanduser()
    if not path.exists():
        logger.warning(f"Transcript file not found: {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_jsonl(f.read())
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading transcript {path}: {e}")
        return None
