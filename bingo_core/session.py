from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from .card import CELL_COUNT, FREE_INDEX, Card, generate_card
from .errors import NotYetPlayedError
from .patterns import check_pattern, evaluate_win

log = logging.getLogger(__name__)


def initial_marks() -> List[bool]:
    marks = [False] * CELL_COUNT
    marks[FREE_INDEX] = True
    return marks


class PlayerSession:
    """A player's card, marks and bingo latch for one game code.

    Nothing here is written back to the store; the session belongs to the
    player's client alone.
    """

    def __init__(self, card: Card, pattern: str = "regular", code: str = "",
                 marks: Optional[Iterable[bool]] = None, has_bingo: bool = False):
        self.card = card
        self.pattern = check_pattern(pattern)
        self.code = code
        self.marks = list(marks) if marks is not None else initial_marks()
        if len(self.marks) != CELL_COUNT:
            raise ValueError(f"expected {CELL_COUNT} marks, got {len(self.marks)}")
        self.marks[FREE_INDEX] = True
        self.has_bingo = bool(has_bingo)
        self._lock = threading.Lock()

    @classmethod
    def for_game(cls, code: str, songs: Iterable[str], pattern: str = "regular",
                 seed: Optional[int] = None) -> 'PlayerSession':
        return cls(generate_card(songs, seed=seed), pattern=pattern, code=code)

    def toggle(self, index: int, played: Iterable[str]) -> bool:
        """Flips the mark on a cell whose song has been played; returns has_bingo.

        Raises NotYetPlayedError without touching the marks when the cell's
        title is not in `played`. The free cell ignores clicks.
        """
        if index < 0 or index >= CELL_COUNT:
            raise IndexError(f"cell index out of range: {index}")
        with self._lock:
            cell = self.card[index]
            if cell.is_free:
                return self.has_bingo
            if cell.label not in played:
                raise NotYetPlayedError(cell.label)
            self.marks[index] = not self.marks[index]
            if not self.has_bingo and evaluate_win(self.marks, self.pattern):
                # Latched: unmarking later never clears it.
                self.has_bingo = True
                log.info("bingo on game %s with pattern %s", self.code or "?", self.pattern)
        return self.has_bingo

    def bind(self, code: str, songs: Iterable[str], pattern: str, seed: Optional[int] = None) -> bool:
        """Re-targets the session; a different code deals a new card. Returns True on reset."""
        if code == self.code:
            return False
        self.card = generate_card(songs, seed=seed)
        self.pattern = check_pattern(pattern)
        self.code = code
        self.marks = initial_marks()
        self.has_bingo = False
        return True

    def marked_count(self) -> int:
        return sum(1 for m in self.marks if m)
