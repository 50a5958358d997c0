"""Command history with cursor-based recall."""


class HistoryNavigator:
    """Past command lines, oldest first, plus a transient recall cursor."""

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor: int | None = None

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def record(self, line: str) -> None:
        """Append an executed line and drop any recall selection."""
        self._entries.append(line)
        self._cursor = None

    def reset_cursor(self) -> None:
        self._cursor = None

    def previous(self) -> str | None:
        """Step back one entry; clamps at the oldest.

        Returns the text for the input buffer, or None if history is empty.
        """
        if not self._entries:
            return None

        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(0, self._cursor - 1)
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step forward one entry.

        Moving past the newest entry clears the selection and returns "" so
        the caller empties the buffer. Returns None when nothing is selected.
        """
        if self._cursor is None:
            return None

        new_cursor = self._cursor + 1
        if new_cursor >= len(self._entries):
            self._cursor = None
            return ""

        self._cursor = new_cursor
        return self._entries[new_cursor]
