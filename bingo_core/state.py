from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .labels import song_title

DEFAULT_PATTERN = "regular"


@dataclass(frozen=True)
class GameSnapshot:
    """One read of the shared `games` row. Read-only to players and the TV."""
    code: str
    songs: Tuple[str, ...]
    current_index: int = 0
    revealed: bool = False
    pattern: str = DEFAULT_PATTERN

    @property
    def last_played_index(self) -> int:
        """Index of the newest song that counts as played, or -1 for none."""
        last = self.current_index if self.revealed else self.current_index - 1
        return min(last, len(self.songs) - 1)

    @property
    def current_song(self) -> Optional[str]:
        if not self.revealed:
            return None
        if self.current_index < 0 or self.current_index >= len(self.songs):
            return None
        return song_title(self.songs[self.current_index])

    def with_position(self, current_index: int, revealed: bool) -> 'GameSnapshot':
        return GameSnapshot(self.code, self.songs, current_index, revealed, self.pattern)

    def to_row(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "songs": list(self.songs),
            "current_index": int(self.current_index),
            "revealed": bool(self.revealed),
            "pattern": self.pattern,
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'GameSnapshot':
        return cls(
            code=str(row.get("code", "")),
            songs=tuple(str(s) for s in (row.get("songs") or [])),
            current_index=int(row.get("current_index") or 0),
            revealed=bool(row.get("revealed", False)),
            pattern=str(row.get("pattern") or DEFAULT_PATTERN),
        )
