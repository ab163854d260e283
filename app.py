from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from bingo_core.config import load_settings
from bingo_core.logger import setup_logging
from game import (
    PATTERN_LABELS,
    BingoError,
    Card,
    GameSnapshot,
    GameStore,
    HostController,
    NotYetPlayedError,
    PlayerSession,
    StoreError,
    UnknownPatternError,
    generate_card,
    initial_marks,
    normalize_code,
    parse_song_lines,
    pattern_ids,
    played_list,
    resolve_played,
    theme_list,
    theme_songs,
    winning_cells,
)

log = logging.getLogger(__name__)

settings = load_settings()
app = Flask(__name__)

NOT_FOUND_MSG = "Game not found. Check the code."
LOAD_FAILED_MSG = "Failed to load game."

# Built on first use so tests can swap in a fake before any request.
store: Optional[GameStore] = None

# Host controllers by game code, oldest first; one host process drives each game.
MAX_HOSTS = 32
HOSTS: "OrderedDict[str, HostController]" = OrderedDict()


def register_host(host: HostController) -> None:
    HOSTS[host.code] = host
    HOSTS.move_to_end(host.code)
    while len(HOSTS) > MAX_HOSTS:
        old_code, _ = HOSTS.popitem(last=False)
        log.info("dropped host controller for game %s", old_code)


def get_store() -> GameStore:
    global store
    if store is None:
        if not settings.store_url:
            raise StoreError("Game store is not configured (set BINGO_STORE_URL).")
        store = GameStore(settings.store_url, settings.store_key, timeout=settings.http_timeout)
    return store


def snapshot_to_json(s: GameSnapshot) -> Dict[str, Any]:
    return {
        "code": s.code,
        "songs": list(s.songs),
        "currentIndex": int(s.current_index),
        "revealed": bool(s.revealed),
        "pattern": s.pattern,
    }


def _error(msg: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": msg}), status


def _load_game(code: str) -> Tuple[Optional[GameSnapshot], Optional[Tuple[Any, int]]]:
    try:
        snap = get_store().fetch_game_by_code(code)
    except StoreError as e:
        log.warning("fetch of game %s failed: %s", code, e)
        return None, _error(LOAD_FAILED_MSG, 502)
    if snap is None:
        return None, _error(NOT_FOUND_MSG, 404)
    return snap, None


def _host_pin_ok() -> bool:
    # No PIN configured means open access.
    if not settings.host_pin:
        return True
    given = request.headers.get("X-Host-Pin", "")
    return given.strip() == settings.host_pin.strip()


# ---------- Catalog ----------

@app.get("/api/patterns")
def api_patterns() -> Any:
    return jsonify({"ok": True, "patterns": [{"id": p, "label": PATTERN_LABELS[p]} for p in pattern_ids()]})


@app.get("/api/themes")
def api_themes() -> Any:
    return jsonify({"ok": True, "themes": theme_list()})


# ---------- Host ----------

@app.post("/api/host/start")
def api_host_start() -> Any:
    if not _host_pin_ok():
        return _error("Wrong PIN", 403)
    body = request.get_json(force=True, silent=True) or {}
    songs = body.get("songs")
    theme = body.get("theme")
    songs_text = body.get("songsText")
    try:
        if songs is None and isinstance(songs_text, str):
            songs = parse_song_lines(songs_text)
        elif songs is None and theme:
            songs = theme_songs(str(theme))
        if not isinstance(songs, list):
            return _error("songs (list), songsText or theme required", 400)
        host = HostController(get_store(), [str(s) for s in songs], pattern=str(body.get("pattern", "regular")))
        snap = host.start_game()
    except KeyError:
        return _error(f"unknown theme: {theme}", 400)
    except UnknownPatternError as e:
        return _error(str(e), 400)
    except StoreError as e:
        return _error(f"Failed to save game: {e}", 502)
    except BingoError as e:
        return _error(str(e), 400)
    register_host(host)
    return jsonify({"ok": True, "code": snap.code, "state": snapshot_to_json(snap)})


@app.post("/api/host/<code>/<action>")
def api_host_action(code: str, action: str) -> Any:
    if not _host_pin_ok():
        return _error("Wrong PIN", 403)
    host = HOSTS.get(normalize_code(code))
    if host is None:
        return _error(NOT_FOUND_MSG, 404)
    HOSTS.move_to_end(host.code)
    handlers = {
        "next": host.next_song,
        "prev": host.prev_song,
        "reveal": host.reveal,
        "hide": host.hide,
    }
    handler = handlers.get(action)
    if handler is None:
        return _error(f"unknown action: {action}", 400)
    err = handler()
    payload: Dict[str, Any] = {"ok": err is None, "state": snapshot_to_json(host.snapshot())}
    if err is not None:
        payload["error"] = str(err)
        return jsonify(payload), 502
    return jsonify(payload)


@app.get("/api/games")
def api_games() -> Any:
    try:
        limit = int(request.args.get("limit", 10))
    except ValueError:
        return _error("limit must be an integer", 400)
    try:
        games = get_store().list_games(limit=max(1, limit))
    except StoreError as e:
        return _error(str(e), 502)
    return jsonify({"ok": True, "games": [snapshot_to_json(g) for g in games]})


# ---------- TV + players ----------

@app.get("/api/game/<code>")
def api_game(code: str) -> Any:
    snap, err = _load_game(normalize_code(code))
    if err:
        return err
    return jsonify({
        "ok": True,
        "state": snapshot_to_json(snap),
        "currentSong": snap.current_song,
        "played": played_list(snap),
    })


@app.post("/api/game/<code>/card")
def api_card(code: str) -> Any:
    snap, err = _load_game(normalize_code(code))
    if err:
        return err
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed")
    card = generate_card(snap.songs, seed=int(seed) if isinstance(seed, int) else None)
    return jsonify({
        "ok": True,
        "code": snap.code,
        "pattern": snap.pattern,
        "card": card.to_json(),
        "marks": initial_marks(),
    })


@app.post("/api/game/<code>/toggle")
def api_toggle(code: str) -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        card = Card.from_json(body["card"])
        index = int(body["index"])
        marks = body.get("marks")
        session_marks = [bool(m) for m in marks] if isinstance(marks, list) else None
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad request: {e}", 400)

    snap, err = _load_game(normalize_code(code))
    if err:
        return err
    try:
        session = PlayerSession(card, pattern=snap.pattern, code=snap.code,
                                marks=session_marks, has_bingo=bool(body.get("hasBingo", False)))
        has_bingo = session.toggle(index, resolve_played(snap))
    except NotYetPlayedError as e:
        return jsonify({"ok": False, "error": str(e), "notPlayed": e.title}), 409
    except (IndexError, ValueError) as e:
        return _error(f"bad request: {e}", 400)
    return jsonify({
        "ok": True,
        "marks": session.marks,
        "hasBingo": has_bingo,
        "winningCells": sorted(winning_cells(session.marks, session.pattern)),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    setup_logging()
    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)
