"""On-disk history document: defensive decoding and safe-replace writes.

The document is a small JSON object::

    {"Version": 1, "History": ["/abs/path", ...], "Index": 0}

Reads never trust the file. Writes go to a sibling temporary file that is
renamed over the target, so an interrupted save leaves the previous document
intact.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import MissingDocument, PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1
HISTORY_KEY = "History"
INDEX_KEY = "Index"
VERSION_KEY = "Version"


@dataclass
class HistoryDocument:
    """Decoded ``(sequence, cursor)`` pair."""

    history: list[str] = field(default_factory=list)
    index: int = -1

    def to_json(self) -> dict[str, object]:
        return {
            VERSION_KEY: DOCUMENT_VERSION,
            HISTORY_KEY: list(self.history),
            INDEX_KEY: self.index,
        }


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_location(entry: object) -> bool:
    """Return whether ``entry`` is an absolute path string the OS and terminal can take."""
    if not isinstance(entry, str) or not entry or "\0" in entry:
        return False
    if not os.path.isabs(entry):
        return False
    try:
        entry.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return False
    return True


def _collapse_adjacent(history: list[str], index: int) -> tuple[list[str], int]:
    """Drop adjacent duplicates, keeping ``index`` on the run it pointed into."""
    collapsed: list[str] = []
    new_index = index
    for position, entry in enumerate(history):
        if collapsed and collapsed[-1] == entry:
            if position <= index:
                new_index -= 1
            continue
        collapsed.append(entry)
    return collapsed, new_index


def clamp_index(index: int, length: int) -> int:
    """Clamp a stored cursor into ``[0, length - 1]``, or ``-1`` for empty history."""
    if length == 0:
        return -1
    return max(0, min(index, length - 1))


def decode_document(raw: object, max_entries: int | None = None) -> HistoryDocument:
    """Validate a decoded JSON value and normalize it into a ``HistoryDocument``.

    Missing ``History`` reads as ``[]`` and missing ``Index`` as ``-1``.
    Out-of-range indexes are clamped. When ``max_entries`` is given, the
    oldest entries beyond the bound are dropped.

    Raises ``PersistenceReadError`` for structurally invalid values.
    """
    if not isinstance(raw, dict):
        raise PersistenceReadError("top level is not an object")

    version = raw.get(VERSION_KEY, DOCUMENT_VERSION)
    if not _is_int(version):
        raise PersistenceReadError(f"{VERSION_KEY} is not an integer")
    if version > DOCUMENT_VERSION:
        logger.warning(
            "history document version %d is newer than supported version %d; reading known fields only",
            version,
            DOCUMENT_VERSION,
        )

    history = raw.get(HISTORY_KEY, [])
    if not isinstance(history, list):
        raise PersistenceReadError(f"{HISTORY_KEY} is not a list")
    for entry in history:
        if not is_valid_location(entry):
            raise PersistenceReadError(f"{HISTORY_KEY} contains a non-path entry: {entry!r}")

    index = raw.get(INDEX_KEY, -1)
    if not _is_int(index):
        raise PersistenceReadError(f"{INDEX_KEY} is not an integer")

    history, index = _collapse_adjacent(list(history), index)
    clamped = clamp_index(index, len(history))
    if clamped != index and history and INDEX_KEY in raw:
        logger.warning("stored index %d is out of range; clamped to %d", index, clamped)
    index = clamped

    if max_entries is not None and len(history) > max_entries:
        overflow = len(history) - max_entries
        del history[:overflow]
        index = max(0, index - overflow)

    return HistoryDocument(history=history, index=index)


def read_document(path: Path, max_entries: int | None = None) -> HistoryDocument:
    """Read and decode the history document at ``path``.

    Raises ``PersistenceReadError`` when the file is missing, unreadable, or
    malformed; callers decide how loudly to report it.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingDocument(f"{path} does not exist") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceReadError(f"cannot read {path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise PersistenceReadError(f"{path} is not valid JSON: {exc}") from exc

    try:
        return decode_document(raw, max_entries=max_entries)
    except PersistenceReadError as exc:
        raise PersistenceReadError(f"{path}: {exc}") from exc


def write_document(path: Path, document: HistoryDocument) -> None:
    """Atomically replace ``path`` with ``document``.

    Raises ``PersistenceWriteError`` on any filesystem failure; the previous
    document, if any, is left untouched.
    """
    payload = json.dumps(document.to_json(), indent=2) + "\n"
    temp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_path, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except OSError as exc:
        try:
            temp_path.unlink()
        except OSError:
            pass
        raise PersistenceWriteError(f"cannot write {path}: {exc}") from exc
