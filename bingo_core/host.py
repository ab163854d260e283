from __future__ import annotations

import logging
import os
import random
from typing import List, Optional, Sequence

from .codes import make_code
from .errors import BingoError, StoreError
from .labels import label_from_filename
from .patterns import check_pattern
from .state import DEFAULT_PATTERN, GameSnapshot
from .store import GameStore

log = logging.getLogger(__name__)

AUDIO_EXTENSIONS = (".mp3", ".m4a", ".aac", ".wav", ".flac", ".ogg", ".opus")


def load_songs_from_dir(path: str) -> List[str]:
    """Song labels from the audio file names in a directory, sorted by name."""
    names = sorted(
        n for n in os.listdir(path)
        if os.path.isfile(os.path.join(path, n)) and n.lower().endswith(AUDIO_EXTENSIONS)
    )
    return [label_from_filename(n) for n in names]


class HostController:
    """The host's side of a game: owns the play order and pushes its position.

    The host is the only writer of the shared row, so updates are plain
    overwrites. A failed push is logged and returned; the next change
    overwrites the row again.
    """

    def __init__(self, store: GameStore, songs: Sequence[str], pattern: str = DEFAULT_PATTERN,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.base_songs = [s for s in songs if s]
        self.pattern = check_pattern(pattern)
        self.rng = rng or random.Random()
        self.code = ""
        self.songs: List[str] = list(self.base_songs)
        self.current_index = 0
        self.revealed = False

    @property
    def started(self) -> bool:
        return bool(self.code)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(self.code, tuple(self.songs), self.current_index, self.revealed, self.pattern)

    def start_game(self, code: Optional[str] = None) -> GameSnapshot:
        """Shuffles the play order, picks a code and saves the new row."""
        if not self.base_songs:
            raise BingoError("Add songs before starting a game.")
        order = list(self.base_songs)
        self.rng.shuffle(order)
        self.code = code or make_code(rng=self.rng)
        self.songs = order
        self.current_index = 0
        self.revealed = False
        self.store.upsert_game(self.code, self.songs, 0, False, self.pattern)
        log.info("started game %s with %d songs", self.code, len(self.songs))
        return self.snapshot()

    def _push(self) -> Optional[StoreError]:
        if not self.started:
            return None
        try:
            self.store.update_game_state(self.code, self.current_index, self.revealed)
        except StoreError as e:
            log.error("update of game %s failed: %s", self.code, e)
            return e
        return None

    def _move(self, index: int) -> Optional[StoreError]:
        self.revealed = False
        self.current_index = max(0, min(index, len(self.songs) - 1))
        return self._push()

    def next_song(self) -> Optional[StoreError]:
        return self._move(self.current_index + 1)

    def prev_song(self) -> Optional[StoreError]:
        return self._move(self.current_index - 1)

    def reveal(self) -> Optional[StoreError]:
        self.revealed = True
        return self._push()

    def hide(self) -> Optional[StoreError]:
        self.revealed = False
        return self._push()

    def toggle_reveal(self) -> Optional[StoreError]:
        return self.hide() if self.revealed else self.reveal()

    @property
    def now_playing(self) -> Optional[str]:
        if 0 <= self.current_index < len(self.songs):
            return self.songs[self.current_index]
        return None
