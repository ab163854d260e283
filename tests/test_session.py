import threading
import unittest

from game import (
    FREE_INDEX,
    Card,
    Cell,
    NotYetPlayedError,
    PlayerSession,
    UnknownPatternError,
    evaluate_win,
)


def make_card():
    cells = []
    for i in range(25):
        if i == FREE_INDEX:
            cells.append(Cell(label="FREE", is_free=True))
        else:
            cells.append(Cell(label=f"T{i}"))
    return Card(cells=tuple(cells))


ALL_TITLES = {f"T{i}" for i in range(25)}


class TestPlayerSession(unittest.TestCase):
    def test_given_new_session_then_only_free_marked(self):
        s = PlayerSession(make_card())
        self.assertEqual(s.marks.count(True), 1)
        self.assertTrue(s.marks[FREE_INDEX])
        self.assertFalse(s.has_bingo)

    def test_given_unplayed_title_when_toggled_then_rejected_without_mutation(self):
        s = PlayerSession(make_card())
        before = list(s.marks)
        with self.assertRaises(NotYetPlayedError) as ctx:
            s.toggle(3, {"T1", "T2"})
        self.assertEqual(ctx.exception.title, "T3")
        self.assertEqual(str(ctx.exception), "That song has not been played yet!")
        self.assertEqual(s.marks, before)

    def test_given_free_cell_when_clicked_then_noop(self):
        s = PlayerSession(make_card())
        s.toggle(FREE_INDEX, set())
        self.assertTrue(s.marks[FREE_INDEX])

    def test_given_played_title_when_toggled_twice_then_marks_restored(self):
        s = PlayerSession(make_card())
        before = list(s.marks)
        s.toggle(7, ALL_TITLES)
        self.assertTrue(s.marks[7])
        s.toggle(7, ALL_TITLES)
        self.assertEqual(s.marks, before)
        self.assertFalse(s.has_bingo)

    def test_given_completed_row_then_bingo_latched_after_unmark(self):
        s = PlayerSession(make_card(), pattern="regular", code="ABCD")
        for i in (0, 1, 2, 3):
            self.assertFalse(s.toggle(i, ALL_TITLES))
        self.assertTrue(s.toggle(4, ALL_TITLES))
        self.assertTrue(s.toggle(4, ALL_TITLES))  # unmark keeps the latch
        self.assertFalse(s.marks[4])
        self.assertFalse(evaluate_win(s.marks, "regular"))
        self.assertTrue(s.has_bingo)

    def test_given_column_through_free_then_four_clicks_win(self):
        s = PlayerSession(make_card())
        for i in (2, 7, 17):
            s.toggle(i, ALL_TITLES)
        self.assertTrue(s.toggle(22, ALL_TITLES))

    def test_given_lock_held_when_clicked_then_click_waits_for_release(self):
        s = PlayerSession(make_card())
        done = threading.Event()

        def click():
            s.toggle(7, ALL_TITLES)
            done.set()

        s._lock.acquire()
        worker = threading.Thread(target=click)
        worker.start()
        try:
            self.assertFalse(done.wait(0.1))
            self.assertFalse(s.marks[7])
        finally:
            s._lock.release()
        worker.join(2.0)
        self.assertTrue(done.is_set())
        self.assertTrue(s.marks[7])

    def test_given_lock_held_when_unplayed_cell_clicked_then_rejection_also_waits(self):
        s = PlayerSession(make_card())
        outcome = []

        def click():
            try:
                s.toggle(3, set())
            except NotYetPlayedError as e:
                outcome.append(e.title)

        s._lock.acquire()
        worker = threading.Thread(target=click)
        worker.start()
        try:
            worker.join(0.1)
            self.assertEqual(outcome, [])
        finally:
            s._lock.release()
        worker.join(2.0)
        self.assertEqual(outcome, ["T3"])

    def test_given_bad_index_then_index_error(self):
        s = PlayerSession(make_card())
        with self.assertRaises(IndexError):
            s.toggle(25, ALL_TITLES)
        with self.assertRaises(IndexError):
            s.toggle(-1, ALL_TITLES)

    def test_given_bad_pattern_or_marks_then_rejected(self):
        with self.assertRaises(UnknownPatternError):
            PlayerSession(make_card(), pattern="nope")
        with self.assertRaises(ValueError):
            PlayerSession(make_card(), marks=[False] * 10)

    def test_given_incoming_marks_then_free_forced_true(self):
        s = PlayerSession(make_card(), marks=[False] * 25)
        self.assertTrue(s.marks[FREE_INDEX])

    def test_given_same_code_when_bound_then_card_kept_and_new_code_resets(self):
        songs = [f"A - S{i}" for i in range(30)]
        s = PlayerSession.for_game("ABCD", songs, seed=1)
        card = s.card
        s.marks[0] = True
        self.assertFalse(s.bind("ABCD", songs, "regular"))
        self.assertIs(s.card, card)
        self.assertTrue(s.bind("EFGH", songs, "x", seed=2))
        self.assertEqual(s.code, "EFGH")
        self.assertEqual(s.pattern, "x")
        self.assertEqual(s.marked_count(), 1)
        self.assertFalse(s.has_bingo)


if __name__ == "__main__":
    unittest.main(verbosity=2)
