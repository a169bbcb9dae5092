import re
from typing import List

FALLBACK_PLAYLIST_NAME = "Your Mood Playlist"

# A hyphen, an en-dash, or "by" anywhere in the line (so "Lullaby" counts too).
SONG_LINE = re.compile(r"[-–]|by", re.IGNORECASE)


def parse_candidates(raw_text: str, limit: int) -> List[str]:
    """Pick the lines of a generated playlist that look like song entries."""
    lines = [line for line in raw_text.split("\n") if SONG_LINE.search(line)]
    return lines[: max(limit, 0)]


def playlist_name(raw_text: str) -> str:
    return raw_text.split("\n")[0] or FALLBACK_PLAYLIST_NAME
