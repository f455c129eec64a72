"""Post-command location tracking.

The host shell fires ``CommandCompletionHook`` once after every command with
the resulting working directory. ``LocationChangeObserver`` records the
directory when it differs from the history's current entry.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from .history import HistoryStore
from .persistence import is_valid_location

logger = logging.getLogger(__name__)


class CommandCompletionHook:
    """Single-subscriber event fired synchronously after each command."""

    def __init__(self) -> None:
        self._callback: Callable[[str], None] | None = None

    def subscribe(self, callback: Callable[[str], None]) -> None:
        """Attach ``callback``, replacing any previous subscriber."""
        self._callback = callback

    def unsubscribe(self) -> None:
        self._callback = None

    def fire(self, cwd: str) -> None:
        if self._callback is not None:
            self._callback(cwd)


def normalize_location(location: str) -> str | None:
    """Return an absolute, normalized form of ``location``, or ``None`` if unusable."""
    if not is_valid_location(location):
        return None
    return os.path.normpath(location)


class LocationChangeObserver:
    """Append the working directory to history when it changes."""

    def __init__(self, store_provider: Callable[[], HistoryStore]) -> None:
        """``store_provider`` returns the session store, loading it on first use."""
        self._store_provider = store_provider
        self._expected: str | None = None

    def expect(self, location: str) -> None:
        """Mark ``location`` as a relocation the controller already recorded.

        The next notification for exactly this location is ignored. The mark
        is consumed by the next notification either way.
        """
        self._expected = normalize_location(location) or location

    def forget(self) -> None:
        """Drop a pending relocation mark, e.g. after the relocation failed."""
        self._expected = None

    def notify(self, cwd: str) -> bool:
        """Handle one command-completion event; return whether history changed."""
        expected = self._expected
        self._expected = None

        location = normalize_location(cwd)
        if location is None:
            logger.debug("ignoring non-absolute location %r", cwd)
            return False
        if location == expected:
            return False

        store = self._store_provider()
        if location == store.current:
            return False
        return store.append(location)
