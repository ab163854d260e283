from __future__ import annotations

from typing import FrozenSet, List

from .labels import song_title
from .state import GameSnapshot


def played_list(snapshot: GameSnapshot) -> List[str]:
    """Titles played so far, in play order (TV history)."""
    last = snapshot.last_played_index
    if last < 0:
        return []
    return [song_title(s) for s in snapshot.songs[: last + 1]]


def resolve_played(snapshot: GameSnapshot) -> FrozenSet[str]:
    """Set of titles a player may mark right now.

    Derived fresh from the snapshot each call: `revealed` can flip without the
    index moving, which changes membership of the boundary song.
    """
    return frozenset(played_list(snapshot))
