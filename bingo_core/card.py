from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .labels import song_title

SIZE = 5
CELL_COUNT = SIZE * SIZE
FREE_INDEX = 12
FREE_LABEL = "FREE"
PLACEHOLDER = "—"  # em-dash, fills a card when the pool is short
PICKS_NEEDED = CELL_COUNT - 1


@dataclass(frozen=True)
class Cell:
    label: str
    is_free: bool = False


@dataclass(frozen=True)
class Card:
    """A player's 5x5 card, row-major; cell 12 is the free square."""
    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"card needs {CELL_COUNT} cells, got {len(self.cells)}")
        if not self.cells[FREE_INDEX].is_free:
            raise ValueError("cell 12 must be the free cell")

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __len__(self) -> int:
        return CELL_COUNT

    def labels(self) -> List[str]:
        return [c.label for c in self.cells]

    def titles(self) -> List[str]:
        """Song titles on the card, free cell and placeholders excluded."""
        return [c.label for c in self.cells if not c.is_free and c.label != PLACEHOLDER]

    def pretty(self, marks: Optional[Sequence[bool]] = None, width: int = 14) -> str:
        """Generates a text rendering of the card; marked cells are bracketed."""
        lines: List[str] = []
        for r in range(SIZE):
            row: List[str] = []
            for c in range(SIZE):
                i = r * SIZE + c
                text = self.cells[i].label
                if len(text) > width - 2:
                    text = text[: width - 3] + "…"
                if marks is not None and marks[i] and not self.cells[i].is_free:
                    text = f"[{text}]"
                row.append(text.center(width))
            lines.append("|".join(row))
        return "\n".join(lines)

    def to_json(self) -> List[Dict[str, Any]]:
        return [{"label": c.label, "isFree": c.is_free} for c in self.cells]

    @classmethod
    def from_json(cls, obj: Iterable[Any]) -> "Card":
        """Accepts the to_json() shape or a plain list of 25 labels."""
        cells: List[Cell] = []
        for i, item in enumerate(obj):
            if isinstance(item, dict):
                cells.append(Cell(label=str(item.get("label", "")), is_free=bool(item.get("isFree", False))))
            else:
                cells.append(Cell(label=str(item), is_free=(i == FREE_INDEX)))
        return cls(cells=tuple(cells))


def unique_titles(song_pool: Iterable[str]) -> List[str]:
    """Normalized, non-empty titles in first-seen order."""
    seen = set()
    out: List[str] = []
    for label in song_pool:
        title = song_title(label)
        if not title or title in seen:
            continue
        seen.add(title)
        out.append(title)
    return out


def generate_card(song_pool: Iterable[str], seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Card:
    """Creates a shuffled card from the song pool.

    Titles are deduplicated before shuffling; a pool with fewer than 24 titles is
    padded with PLACEHOLDER. Randomized, so generate once per game and keep it.
    """
    rng = rng or random.Random(seed)
    pool = unique_titles(song_pool)
    rng.shuffle(pool)
    picked = pool[:PICKS_NEEDED]
    while len(picked) < PICKS_NEEDED:
        picked.append(PLACEHOLDER)

    cells: List[Cell] = []
    it = iter(picked)
    for i in range(CELL_COUNT):
        if i == FREE_INDEX:
            cells.append(Cell(label=FREE_LABEL, is_free=True))
        else:
            cells.append(Cell(label=next(it)))
    return Card(cells=tuple(cells))
