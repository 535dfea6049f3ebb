"""Append-only audit sink owned by a single ItemStore."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from pathlib import Path

from .conf import TIMESTAMP_FORMAT


class AuditEvent(StrEnum):
    CREATED = "created"
    ADDED = "added"
    REMOVED = "removed"
    SAVED = "saved"
    LOADED = "loaded"
    DISPOSED = "disposed"


class AuditLog:
    """Line-oriented audit file, flushed after every write.

    Opening happens in the constructor; an unwritable path raises ``OSError``
    straight to the caller.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = open(self.path, "a", encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def write(self, event: AuditEvent | str, detail: str = "") -> None:
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        line = f"[{timestamp}] {event}"
        if detail:
            line = f"{line}: {detail}"
        self._fh.write(line + "\n")
        self._fh.flush()

    def close(self) -> None:
        """Flush and close. Safe to call more than once."""
        if self._fh.closed:
            return
        try:
            self._fh.flush()
        finally:
            self._fh.close()
