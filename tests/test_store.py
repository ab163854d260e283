import unittest
from unittest.mock import MagicMock

import requests

from game import GameSnapshot, GameStore, StoreError


def _response(status=200, payload=None, text=None, content=b"x", reason="OK"):
    r = MagicMock()
    r.status_code = status
    r.ok = 200 <= status < 300
    r.reason = reason
    r.text = text if text is not None else ""
    r.content = content
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    return r


class TestGameStore(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.store = GameStore("https://db.example.com/", "anon-key", session=self.session, timeout=3)

    def test_given_key_when_built_then_auth_headers_set(self):
        self.assertEqual(self.session.headers["apikey"], "anon-key")
        self.assertEqual(self.session.headers["Authorization"], "Bearer anon-key")
        self.assertEqual(self.store.rest_url, "https://db.example.com/rest/v1")

    def test_given_existing_code_when_fetched_then_snapshot(self):
        row = {"code": "ABCD", "songs": ["A - One"], "current_index": 0, "revealed": False, "pattern": "plus"}
        self.session.request.return_value = _response(payload=[row])
        snap = self.store.fetch_game_by_code("ABCD")
        self.assertIsInstance(snap, GameSnapshot)
        self.assertEqual(snap.pattern, "plus")
        method, url = self.session.request.call_args[0]
        kwargs = self.session.request.call_args[1]
        self.assertEqual(method, "GET")
        self.assertEqual(url, "https://db.example.com/rest/v1/games")
        self.assertEqual(kwargs["params"]["code"], "eq.ABCD")
        self.assertEqual(kwargs["params"]["limit"], "1")
        self.assertEqual(kwargs["timeout"], 3)

    def test_given_missing_code_when_fetched_then_none(self):
        self.session.request.return_value = _response(payload=[])
        self.assertIsNone(self.store.fetch_game_by_code("ZZZZ"))

    def test_given_upsert_then_merge_duplicates_post(self):
        self.session.request.return_value = _response(content=b"")
        self.store.upsert_game("ABCD", ["A - One", "B - Two"], pattern="x")
        method = self.session.request.call_args[0][0]
        kwargs = self.session.request.call_args[1]
        self.assertEqual(method, "POST")
        self.assertEqual(kwargs["headers"]["Prefer"], "resolution=merge-duplicates")
        self.assertEqual(kwargs["json"], {
            "code": "ABCD", "songs": ["A - One", "B - Two"], "current_index": 0, "revealed": False, "pattern": "x",
        })

    def test_given_update_then_patch_by_code(self):
        self.session.request.return_value = _response(content=b"")
        self.store.update_game_state("ABCD", 3, True)
        method = self.session.request.call_args[0][0]
        kwargs = self.session.request.call_args[1]
        self.assertEqual(method, "PATCH")
        self.assertEqual(kwargs["params"], {"code": "eq.ABCD"})
        self.assertEqual(kwargs["json"], {"current_index": 3, "revealed": True})

    def test_given_http_error_then_store_error_with_body(self):
        self.session.request.return_value = _response(status=401, text="JWT expired", reason="Unauthorized")
        with self.assertRaises(StoreError) as ctx:
            self.store.fetch_game_by_code("ABCD")
        self.assertEqual(ctx.exception.status, 401)
        self.assertIn("JWT expired", str(ctx.exception))

    def test_given_http_error_without_body_then_reason(self):
        self.session.request.return_value = _response(status=503, text="", reason="Service Unavailable")
        with self.assertRaises(StoreError) as ctx:
            self.store.update_game_state("ABCD", 0, False)
        self.assertEqual(str(ctx.exception), "Service Unavailable")

    def test_given_transport_failure_then_store_error(self):
        self.session.request.side_effect = requests.ConnectionError("boom")
        with self.assertRaises(StoreError):
            self.store.fetch_game_by_code("ABCD")

    def test_given_invalid_json_then_store_error(self):
        self.session.request.return_value = _response(payload=ValueError("bad json"))
        with self.assertRaises(StoreError) as ctx:
            self.store.fetch_game_by_code("ABCD")
        self.assertIn("Invalid JSON", str(ctx.exception))

    def test_given_malformed_row_when_fetched_then_store_error(self):
        row = {"code": "ABCD", "songs": ["A - One"], "current_index": "two", "revealed": False}
        self.session.request.return_value = _response(payload=[row])
        with self.assertRaises(StoreError) as ctx:
            self.store.fetch_game_by_code("ABCD")
        self.assertIn("Invalid row", str(ctx.exception))

    def test_given_object_body_or_non_row_items_then_store_error(self):
        self.session.request.return_value = _response(payload={"code": "ABCD"})
        with self.assertRaises(StoreError):
            self.store.fetch_game_by_code("ABCD")
        self.session.request.return_value = _response(payload=["not a row"])
        with self.assertRaises(StoreError):
            self.store.list_games()

    def test_given_list_games_then_newest_first_query(self):
        rows = [{"code": "BBBB", "songs": [], "current_index": 0, "revealed": False}]
        self.session.request.return_value = _response(payload=rows)
        games = self.store.list_games(limit=5)
        self.assertEqual([g.code for g in games], ["BBBB"])
        kwargs = self.session.request.call_args[1]
        self.assertEqual(kwargs["params"]["order"], "created_at.desc")
        self.assertEqual(kwargs["params"]["limit"], "5")


if __name__ == "__main__":
    unittest.main(verbosity=2)
