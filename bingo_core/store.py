from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from .errors import StoreError
from .state import DEFAULT_PATTERN, GameSnapshot

log = logging.getLogger(__name__)

TABLE = "games"
COLUMNS = "code,songs,current_index,revealed,pattern"


class GameStore:
    """Client for the hosted `games` table behind a PostgREST-style REST API.

    Only three writes/reads matter to the game: fetch a row by code, upsert a
    new game, and patch the host's position. Failures raise StoreError; a code
    with no row is not an error and comes back as None.
    """

    def __init__(self, base_url: str, api_key: str, session: Optional[requests.Session] = None,
                 timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.rest_url = f"{self.base_url}/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        })

    def _request(self, method: str, params: Optional[Dict[str, str]] = None,
                 json: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.rest_url}/{TABLE}"
        try:
            r = self.session.request(method, url, params=params, json=json, headers=headers,
                                     timeout=self.timeout)
        except requests.RequestException as e:
            raise StoreError(f"{method} {TABLE} failed: {e}") from e
        if not r.ok:
            msg = (r.text or "").strip() or r.reason or f"HTTP {r.status_code}"
            raise StoreError(msg, status=r.status_code)
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise StoreError("Invalid JSON from game store", status=r.status_code) from e

    def fetch_game_by_code(self, code: str) -> Optional[GameSnapshot]:
        params = {"code": f"eq.{code}", "select": COLUMNS, "limit": "1"}
        rows = self._request("GET", params=params)
        if not rows:
            return None
        try:
            return GameSnapshot.from_row(rows[0])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreError(f"Invalid row from game store: {e}") from e

    def upsert_game(self, code: str, songs: Sequence[str], current_index: int = 0,
                    revealed: bool = False, pattern: str = DEFAULT_PATTERN) -> None:
        row = GameSnapshot(code, tuple(songs), current_index, revealed, pattern).to_row()
        self._request(
            "POST",
            json=row,
            headers={"Content-Type": "application/json", "Prefer": "resolution=merge-duplicates"},
        )
        log.info("saved game %s (%d songs, pattern %s)", code, len(songs), pattern)

    def update_game_state(self, code: str, current_index: int, revealed: bool) -> None:
        self._request(
            "PATCH",
            params={"code": f"eq.{code}"},
            json={"current_index": int(current_index), "revealed": bool(revealed)},
            headers={"Content-Type": "application/json"},
        )
        log.debug("game %s -> index=%d revealed=%s", code, current_index, revealed)

    def list_games(self, limit: int = 10) -> List[GameSnapshot]:
        params = {"select": COLUMNS, "order": "created_at.desc", "limit": str(int(limit))}
        rows = self._request("GET", params=params) or []
        try:
            return [GameSnapshot.from_row(r) for r in rows]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreError(f"Invalid row from game store: {e}") from e
