from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .card import generate_card
from .codes import normalize_code
from .config import load_settings
from .errors import BingoError, NotYetPlayedError, StoreError
from .host import HostController, load_songs_from_dir
from .logger import setup_logging
from .patterns import PATTERN_LABELS, pattern_ids
from .played import played_list, resolve_played
from .poller import SnapshotPoller
from .session import PlayerSession
from .state import GameSnapshot
from .store import GameStore
from .themes import THEMES, parse_song_lines, theme_songs


def _make_store(args: argparse.Namespace) -> GameStore:
    settings = load_settings({"store_url": args.store_url, "store_key": args.store_key})
    if not settings.store_url:
        raise SystemExit("error: set BINGO_STORE_URL or pass --store-url")
    return GameStore(settings.store_url, settings.store_key, timeout=settings.http_timeout)


def _songs_from_args(args: argparse.Namespace) -> List[str]:
    if args.songs_dir:
        return load_songs_from_dir(args.songs_dir)
    if args.songs_file:
        with open(args.songs_file, "r", encoding="utf-8") as f:
            return parse_song_lines(f.read())
    return theme_songs(args.theme)


def cmd_card(args: argparse.Namespace) -> int:
    card = generate_card(_songs_from_args(args), seed=args.seed)
    print(card.pretty())
    return 0


def cmd_host(args: argparse.Namespace) -> int:
    host = HostController(_make_store(args), _songs_from_args(args), pattern=args.pattern)
    snap = host.start_game()
    print(f"Game code: {snap.code}  ({len(snap.songs)} songs, pattern: {PATTERN_LABELS[snap.pattern]})")
    while True:
        state = "revealed" if host.revealed else "hidden"
        print(f"[{host.current_index + 1}/{len(host.songs)}] {host.now_playing} ({state})")
        text = input("n)ext p)rev r)eveal h)ide q)uit: ").strip().lower()
        if text == "q":
            return 0
        action = {"n": host.next_song, "p": host.prev_song, "r": host.reveal, "h": host.hide}.get(text)
        if action is None:
            print("Unknown command. Try again.")
            continue
        err = action()
        if err is not None:
            print(f"warning: game store update failed: {err}")


def _watch(args: argparse.Namespace, on_snapshot) -> int:
    store = _make_store(args)
    code = normalize_code(args.code)
    settings = load_settings()

    poller = SnapshotPoller(
        fetch=lambda: store.fetch_game_by_code(code),
        on_snapshot=on_snapshot,
        on_not_found=lambda: print("Game not found. Check the code."),
        on_error=lambda e: print(f"Failed to load game. ({e})"),
        interval=args.interval or settings.poll_interval,
    )
    poller.start()
    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop(timeout=2.0)
    return 0


def cmd_tv(args: argparse.Namespace) -> int:
    last = {"key": None}

    def show(snap: GameSnapshot) -> None:
        key = (snap.current_index, snap.revealed)
        if key == last["key"]:
            return
        last["key"] = key
        print(f"\n=== {snap.code} ===")
        print(f"Now playing: {snap.current_song or 'Song is hidden…'}")
        history = played_list(snap)
        if not history:
            print("No songs played yet.")
        for i, title in enumerate(history, 1):
            print(f"{i:>3}. {title}")

    return _watch(args, show)


def cmd_play(args: argparse.Namespace) -> int:
    store = _make_store(args)
    code = normalize_code(args.code)
    snap = store.fetch_game_by_code(code)
    if snap is None:
        print("Game not found. Check the code.")
        return 1
    session = PlayerSession.for_game(code, snap.songs, pattern=snap.pattern, seed=args.seed)
    print(session.card.pretty(session.marks))
    while True:
        text = input("cell 0-24 to mark, q to quit: ").strip().lower()
        if text == "q":
            return 0
        try:
            index = int(text)
        except ValueError:
            print("Could not parse. Try again.")
            continue
        try:
            snap = store.fetch_game_by_code(code) or snap
        except StoreError as e:
            print(f"Failed to load game. ({e})")
        try:
            bingo = session.toggle(index, resolve_played(snap))
        except NotYetPlayedError as e:
            print(e)
            continue
        except IndexError:
            print("Cell must be 0-24.")
            continue
        print(session.card.pretty(session.marks))
        if bingo:
            print("B I N G O !")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Music bingo host, TV and player tools')
    parser.add_argument('--store-url', default=None, help='Game store base URL (default: $BINGO_STORE_URL)')
    parser.add_argument('--store-key', default=None, help='Game store API key (default: $BINGO_STORE_KEY)')
    parser.add_argument('--log-level', default='', help='Logging level (default: $LOGLEVEL or INFO)')
    sub = parser.add_subparsers(dest='command', required=True)

    def add_songs(p: argparse.ArgumentParser) -> None:
        p.add_argument('--theme', choices=sorted(THEMES), default='80s', help='Song list theme')
        p.add_argument('--songs-dir', default=None, help='Directory of audio files named "Artist - Title"')
        p.add_argument('--songs-file', default=None, help='Text file with one "Artist - Title" label per line')

    p_host = sub.add_parser('host', help='Start a game and control playback position')
    add_songs(p_host)
    p_host.add_argument('--pattern', choices=pattern_ids(), default='regular', help='Win pattern')
    p_host.set_defaults(func=cmd_host)

    p_tv = sub.add_parser('tv', help='Show the current song and history for a game')
    p_tv.add_argument('code')
    p_tv.add_argument('--interval', type=float, default=None, help='Poll interval in seconds')
    p_tv.set_defaults(func=cmd_tv)

    p_play = sub.add_parser('play', help='Play a card for a game')
    p_play.add_argument('code')
    p_play.add_argument('--seed', type=int, default=None, help='RNG seed for the card')
    p_play.set_defaults(func=cmd_play)

    p_card = sub.add_parser('card', help='Print a sample card')
    add_songs(p_card)
    p_card.add_argument('--seed', type=int, default=None, help='RNG seed for the card')
    p_card.set_defaults(func=cmd_card)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except (BingoError, KeyError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
