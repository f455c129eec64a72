"""Cursor-based directory history with branch truncation.

The store is a single ordered list of visited locations plus a cursor.
Appending after moving back discards the abandoned "future" entries, the
same way a browser forgets forward history after a new visit.
Every mutation is written through to the history document.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .config import DEFAULT_MAX_ENTRIES
from .errors import MissingDocument, OutOfRangeIndex, PersistenceReadError, PersistenceWriteError
from .persistence import HistoryDocument, clamp_index, read_document, write_document

logger = logging.getLogger(__name__)


class HistoryStore:
    """Bounded visit history with a cursor.

    Adjacent duplicate locations are suppressed. After any append the cursor
    sits on the newest entry.
    """

    def __init__(
        self,
        path: Path,
        entries: list[str] | None = None,
        cursor: int = -1,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        """Create a store persisted at ``path``; ``entries``/``cursor`` seed in-memory state."""
        self.path = path
        self.max_entries = max(1, max_entries)
        self._entries: list[str] = list(entries or [])
        self._cursor = clamp_index(cursor, len(self._entries))

    @classmethod
    def load(cls, path: Path, max_entries: int = DEFAULT_MAX_ENTRIES) -> HistoryStore:
        """Load the store from ``path``, falling back to an empty store.

        Never raises: a missing document is the normal first-run state and is
        only logged at debug level; an unreadable or malformed one is reported
        as a warning.
        """
        try:
            document = read_document(path, max_entries=max(1, max_entries))
        except MissingDocument:
            logger.debug("no history document at %s; starting empty", path)
            return cls(path, max_entries=max_entries)
        except PersistenceReadError as exc:
            logger.warning("discarding directory history: %s", exc)
            return cls(path, max_entries=max_entries)
        return cls(path, document.history, document.index, max_entries=max_entries)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> str | None:
        """Location under the cursor, or ``None`` when history is empty."""
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, index: int) -> str:
        """Return the location at ``index``; raise ``OutOfRangeIndex`` outside the history."""
        if not 0 <= index < len(self._entries):
            raise OutOfRangeIndex(index, len(self._entries))
        return self._entries[index]

    def append(self, location: str) -> bool:
        """Record a visit to ``location``.

        Returns ``False`` without touching state when ``location`` is already
        the current entry. Otherwise truncates entries after the cursor,
        appends, trims the oldest entries past ``max_entries``, and saves.
        """
        if self._entries and self._entries[self._cursor] == location:
            logger.debug("already at %s; not recording", location)
            return False

        del self._entries[self._cursor + 1 :]
        self._entries.append(location)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
        self._cursor = len(self._entries) - 1
        self.save()
        return True

    def move_to(self, index: int) -> str:
        """Move the cursor to ``index`` and save; entries are unchanged."""
        location = self.get(index)
        self._cursor = index
        self.save()
        return location

    def snapshot(self) -> HistoryDocument:
        return HistoryDocument(history=list(self._entries), index=self._cursor)

    def save(self) -> bool:
        """Write the current state to ``path``.

        Persistence is advisory: failures are logged and in-memory state is
        kept, so the next successful save reconciles the document.
        """
        try:
            write_document(self.path, self.snapshot())
        except PersistenceWriteError as exc:
            logger.warning("directory history not saved: %s", exc)
            return False
        return True
