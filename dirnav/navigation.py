"""Step and random-access navigation over a ``HistoryStore``.

Operations never raise. Each returns a ``NavigationOutcome`` describing
whether the cursor moved, and why not when it did not. The host's
relocation primitive runs before the cursor moves, so a failed ``cd``
leaves history consistent with the actual working directory.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import InvalidArgument, OutOfRangeIndex, RelocationFailure
from .history import HistoryStore

logger = logging.getLogger(__name__)

Relocator = Callable[[str], None]

CURRENT_MARKER = "*"


class NavigationStatus(Enum):
    MOVED = "moved"
    AT_NEWEST = "at_newest"
    AT_OLDEST = "at_oldest"
    EMPTY = "empty"
    OUT_OF_RANGE = "out_of_range"
    INVALID_ARGUMENT = "invalid_argument"
    RELOCATION_FAILED = "relocation_failed"


@dataclass(frozen=True)
class NavigationOutcome:
    """Result of one navigation request."""

    status: NavigationStatus
    location: str | None = None
    message: str = ""

    @property
    def moved(self) -> bool:
        return self.status is NavigationStatus.MOVED

    @property
    def is_usage_error(self) -> bool:
        return self.status is NavigationStatus.INVALID_ARGUMENT


@dataclass(frozen=True)
class HistoryListing:
    """One row of ``NavigationController.list``."""

    index: int
    location: str
    is_current: bool

    def format(self, width: int = 1) -> str:
        marker = CURRENT_MARKER if self.is_current else " "
        return f"{marker} {self.index:>{width}}  {self.location}"


def change_directory(location: str) -> None:
    """Relocate the current process with ``os.chdir``."""
    try:
        os.chdir(location)
    except (OSError, ValueError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise RelocationFailure(location, reason) from exc


def validate_directory(location: str) -> None:
    """Check that ``location`` is a directory the shell wrapper can ``cd`` into."""
    path = Path(location)
    if not path.exists():
        raise RelocationFailure(location, "no such directory")
    if not path.is_dir():
        raise RelocationFailure(location, "not a directory")
    if not os.access(path, os.X_OK):
        raise RelocationFailure(location, "permission denied")


def parse_target(target: int | str) -> int:
    """Parse a goto argument into an integer.

    Accepts ints and decimal strings with an optional sign. Booleans and
    anything else raise ``InvalidArgument``.
    """
    if isinstance(target, bool):
        raise InvalidArgument(f"invalid history index: {target!r}")
    if isinstance(target, int):
        return target
    if isinstance(target, str):
        text = target.strip()
        digits = text[1:] if text[:1] in {"+", "-"} else text
        if digits.isdigit() and digits.isascii():
            return int(text)
    raise InvalidArgument(f"invalid history index: {target!r}")


class NavigationController:
    """Next/previous/goto/list on top of a history store."""

    def __init__(
        self,
        store: HistoryStore,
        relocate: Relocator = change_directory,
        before_relocate: Callable[[str], None] | None = None,
        relocation_failed: Callable[[], None] | None = None,
    ) -> None:
        """Bind the controller to ``store`` and the host's relocation primitive.

        ``before_relocate`` is told the destination before ``relocate`` runs;
        the session uses it to keep the location observer from re-recording
        the jump. ``relocation_failed`` is called when ``relocate`` raises, so
        that mark can be dropped again.
        """
        self.store = store
        self.relocate = relocate
        self.before_relocate = before_relocate
        self.relocation_failed = relocation_failed

    def _jump(self, index: int) -> NavigationOutcome:
        location = self.store.get(index)
        if self.before_relocate is not None:
            self.before_relocate(location)
        try:
            self.relocate(location)
        except RelocationFailure as exc:
            failure = exc
        except OSError as exc:
            failure = RelocationFailure(location, exc.strerror or str(exc))
        except Exception as exc:
            failure = RelocationFailure(location, str(exc) or type(exc).__name__)
        else:
            self.store.move_to(index)
            return NavigationOutcome(NavigationStatus.MOVED, location)

        logger.debug("relocation to %s failed: %s", location, failure.reason)
        if self.relocation_failed is not None:
            self.relocation_failed()
        return NavigationOutcome(NavigationStatus.RELOCATION_FAILED, location, str(failure))

    def next(self) -> NavigationOutcome:
        """Step toward the newest entry."""
        store = self.store
        if store.is_empty:
            return NavigationOutcome(NavigationStatus.EMPTY, message="directory history is empty")
        if store.cursor >= len(store) - 1:
            return NavigationOutcome(
                NavigationStatus.AT_NEWEST,
                store.current,
                "already at the most recent directory",
            )
        return self._jump(store.cursor + 1)

    def previous(self) -> NavigationOutcome:
        """Step toward the oldest entry."""
        store = self.store
        if store.is_empty:
            return NavigationOutcome(NavigationStatus.EMPTY, message="directory history is empty")
        if store.cursor <= 0:
            return NavigationOutcome(
                NavigationStatus.AT_OLDEST,
                store.current,
                "already at the oldest directory",
            )
        return self._jump(store.cursor - 1)

    def goto(self, target: int | str) -> NavigationOutcome:
        """Jump to an absolute index, or back by ``-target`` entries when negative."""
        try:
            offset = parse_target(target)
        except InvalidArgument as exc:
            return NavigationOutcome(NavigationStatus.INVALID_ARGUMENT, message=str(exc))

        index = self.store.cursor + offset if offset < 0 else offset
        try:
            return self._jump(index)
        except OutOfRangeIndex as exc:
            return NavigationOutcome(NavigationStatus.OUT_OF_RANGE, message=str(exc))

    def list(self) -> list[HistoryListing]:
        """Return every entry in visit order, flagging the one under the cursor."""
        cursor = self.store.cursor
        return [
            HistoryListing(index=index, location=location, is_current=index == cursor)
            for index, location in enumerate(self.store)
        ]

    def format_list(self) -> list[str]:
        rows = self.list()
        width = len(str(len(rows) - 1)) if rows else 1
        return [row.format(width) for row in rows]
