from __future__ import annotations

# Facade module that re-exports the music bingo core.
# The Flask app, the CLI and the tests import from here; single-responsibility
# modules live under bingo_core/*.

from bingo_core.card import (  # noqa: F401
    CELL_COUNT,
    FREE_INDEX,
    FREE_LABEL,
    PLACEHOLDER,
    Card,
    Cell,
    generate_card,
    unique_titles,
)
from bingo_core.codes import make_code, normalize_code  # noqa: F401
from bingo_core.errors import (  # noqa: F401
    BingoError,
    NotYetPlayedError,
    StoreError,
    UnknownPatternError,
)
from bingo_core.host import HostController, load_songs_from_dir  # noqa: F401
from bingo_core.labels import label_from_filename, same_song, song_title  # noqa: F401
from bingo_core.patterns import (  # noqa: F401
    PATTERN_LABELS,
    PATTERNS,
    evaluate_win,
    pattern_ids,
    winning_cells,
)
from bingo_core.played import played_list, resolve_played  # noqa: F401
from bingo_core.poller import SnapshotPoller  # noqa: F401
from bingo_core.session import PlayerSession, initial_marks  # noqa: F401
from bingo_core.state import DEFAULT_PATTERN, GameSnapshot  # noqa: F401
from bingo_core.store import GameStore  # noqa: F401
from bingo_core.themes import THEMES, parse_song_lines, theme_list, theme_songs  # noqa: F401
