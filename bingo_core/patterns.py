from __future__ import annotations

from typing import Dict, FrozenSet, List, Sequence, Tuple

from .card import CELL_COUNT, SIZE
from .errors import UnknownPatternError

CellSet = FrozenSet[int]


def row(r: int) -> CellSet:
    return frozenset(r * SIZE + c for c in range(SIZE))


def col(c: int) -> CellSet:
    return frozenset(r * SIZE + c for r in range(SIZE))


MAIN_DIAGONAL: CellSet = frozenset(i * SIZE + i for i in range(SIZE))          # 0,6,12,18,24
ANTI_DIAGONAL: CellSet = frozenset(i * SIZE + (SIZE - 1 - i) for i in range(SIZE))  # 4,8,12,16,20
CORNERS: CellSet = frozenset({0, 4, 20, 24})
BORDER: CellSet = row(0) | row(4) | col(0) | col(4)
DIAMOND: CellSet = frozenset({2, 6, 8, 10, 14, 16, 18, 22})
ALL_CELLS: CellSet = frozenset(range(CELL_COUNT))

LINES: Tuple[CellSet, ...] = (
    tuple(row(r) for r in range(SIZE))
    + tuple(col(c) for c in range(SIZE))
    + (MAIN_DIAGONAL, ANTI_DIAGONAL)
)

# Each pattern wins when any one of its cell sets is fully marked.
PATTERNS: Dict[str, Tuple[CellSet, ...]] = {
    "regular": LINES,
    "l": (
        col(0) | row(4),
        col(0) | row(0),
        col(4) | row(4),
        col(4) | row(0),
    ),
    "t": (row(0) | col(2), row(4) | col(2)),
    "corners": (CORNERS,),
    "x": (MAIN_DIAGONAL | ANTI_DIAGONAL,),
    "z": (row(0) | ANTI_DIAGONAL | row(4),),
    "n": (col(0) | MAIN_DIAGONAL | col(4),),
    "outside": (BORDER,),
    "plus": (row(2) | col(2),),
    "diamond": (DIAMOND,),
    "full": (ALL_CELLS,),
}

PATTERN_LABELS: Dict[str, str] = {
    "regular": "Regular (any line)",
    "l": "L",
    "t": "T",
    "corners": "4 Corners",
    "x": "X",
    "z": "Z",
    "n": "N",
    "outside": "Outside Edge",
    "plus": "Plus (+)",
    "diamond": "Diamond",
    "full": "Full Card",
}


def pattern_ids() -> List[str]:
    return list(PATTERNS)


def check_pattern(pattern: str) -> str:
    if pattern not in PATTERNS:
        raise UnknownPatternError(f"unknown win pattern: {pattern!r}")
    return pattern


def evaluate_win(marks: Sequence[bool], pattern: str) -> bool:
    """True when every cell of at least one of the pattern's shapes is marked."""
    if len(marks) != CELL_COUNT:
        raise ValueError(f"expected {CELL_COUNT} marks, got {len(marks)}")
    shapes = PATTERNS[check_pattern(pattern)]
    return any(all(marks[i] for i in shape) for shape in shapes)


def winning_cells(marks: Sequence[bool], pattern: str) -> CellSet:
    """Union of the fully marked shapes of a pattern (empty when no win)."""
    shapes = PATTERNS[check_pattern(pattern)]
    hit: CellSet = frozenset()
    for shape in shapes:
        if all(marks[i] for i in shape):
            hit = hit | shape
    return hit
