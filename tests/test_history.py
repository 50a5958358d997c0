"""Tests for history module."""

from vaultterm.history import HistoryNavigator


def _navigator(*lines):
    history = HistoryNavigator()
    for line in lines:
        history.record(line)
    return history


class TestHistoryNavigator:
    """Test cursor-based recall."""

    def test_empty_history(self):
        history = HistoryNavigator()

        assert history.previous() is None
        assert history.next() is None
        assert history.cursor is None

    def test_previous_walks_back_and_clamps(self):
        history = _navigator("a", "b", "c")

        assert [history.previous() for _ in range(3)] == ["c", "b", "a"]
        assert history.previous() == "a"
        assert history.cursor == 0

    def test_next_past_end_clears_selection(self):
        history = _navigator("a", "b", "c")
        for _ in range(4):
            history.previous()

        assert [history.next() for _ in range(3)] == ["b", "c", ""]
        assert history.cursor is None
        assert history.next() is None

    def test_next_without_selection(self):
        history = _navigator("a")

        assert history.next() is None

    def test_record_resets_cursor(self):
        history = _navigator("a", "b")
        history.previous()

        history.record("c")

        assert history.cursor is None
        assert history.previous() == "c"

    def test_recall_does_not_mutate_entries(self):
        history = _navigator("a", "b")
        history.previous()
        history.previous()
        history.next()

        assert history.entries == ("a", "b")

    def test_reset_cursor(self):
        history = _navigator("a")
        history.previous()
        history.reset_cursor()

        assert history.cursor is None
