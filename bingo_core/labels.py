from __future__ import annotations

import os
import re

SEPARATOR = " - "

_WS = re.compile(r"\s+")


def song_title(label: str) -> str:
    """Reduces an "Artist - Title" label to its title, collapsing whitespace.

    Labels with several separators keep only the text after the last one, so
    applying this twice gives the same result as applying it once.
    """
    raw = _WS.sub(" ", label or "").strip()
    _, sep, tail = raw.rpartition(SEPARATOR)
    return tail.strip() if sep else raw


def label_from_filename(name: str) -> str:
    """Builds a song label from an audio file name ("Toto - Africa.mp3" -> "Africa")."""
    base = os.path.basename(name)
    stem, _ = os.path.splitext(base)
    return song_title(stem)


def same_song(a: str, b: str) -> bool:
    return song_title(a) == song_title(b)
