"""Append-only result log: the interpreter's only output channel."""

from collections.abc import Iterable, Iterator

from vaultterm.models import ResultEntry


class ResultLog:
    """Ordered sequence of result entries in display order."""

    def __init__(self) -> None:
        self._entries: list[ResultEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResultEntry]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> ResultEntry:
        return self._entries[index]

    @property
    def entries(self) -> tuple[ResultEntry, ...]:
        """Snapshot of all entries."""
        return tuple(self._entries)

    @property
    def last(self) -> ResultEntry | None:
        return self._entries[-1] if self._entries else None

    def append(self, entry: ResultEntry) -> None:
        self._entries.append(entry)

    def extend(self, entries: Iterable[ResultEntry]) -> None:
        for entry in entries:
            self.append(entry)

    def since(self, index: int) -> tuple[ResultEntry, ...]:
        """Entries appended at or after `index`, for incremental rendering."""
        return tuple(self._entries[index:])

    def clear(self) -> None:
        """Empty the log (the `clear` command)."""
        self._entries = []
