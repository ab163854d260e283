from game import GameSnapshot, StoreError


class FakeStore:
    """In-memory stand-in for GameStore used by the host and API tests."""

    def __init__(self):
        self.rows = {}
        self.fail = False
        self.calls = []

    def _check(self):
        if self.fail:
            raise StoreError("store unavailable")

    def fetch_game_by_code(self, code):
        self.calls.append(("fetch", code))
        self._check()
        row = self.rows.get(code)
        return GameSnapshot.from_row(row) if row else None

    def upsert_game(self, code, songs, current_index=0, revealed=False, pattern="regular"):
        self.calls.append(("upsert", code))
        self._check()
        self.rows[code] = GameSnapshot(code, tuple(songs), current_index, revealed, pattern).to_row()

    def update_game_state(self, code, current_index, revealed):
        self.calls.append(("update", code, current_index, revealed))
        self._check()
        self.rows[code].update({"current_index": current_index, "revealed": revealed})

    def list_games(self, limit=10):
        self._check()
        return [GameSnapshot.from_row(r) for r in list(self.rows.values())[:limit]]
