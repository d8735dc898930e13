"""
Khata Undo — Single-Slot Undo Buffer
======================================
Holds the most recent deletion for a short window.

Rules:
- One slot. A new deletion replaces whatever was there.
- The slot expires undo_window_seconds after the deletion.
- undo() hands the entry to the restorer and clears the slot once the
  restore goes through. A refused restore leaves the slot in place
  until it expires or is replaced.
- Empty or expired slot → undo() returns None and changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from core.time import Clock, SystemClock, is_expired, seconds_until_expiry

logger = logging.getLogger("khata.undo")


@dataclass(frozen=True)
class UndoEntry:
    """
    Everything needed to put a deleted record back.

    Fields:
        kind:                  Collection the record was removed from.
        restore_command_type:  Command that re-inserts it.
        record:                Record in wire form.
        index:                 Position it held before deletion.
        effects:               Balance effects that cancel the deletion.
        deleted_at:            When the deletion was applied.
    """

    kind: str
    restore_command_type: str
    record: dict
    index: int
    deleted_at: datetime
    effects: dict = field(default_factory=dict)

    def __post_init__(self):
        if not self.kind:
            raise ValueError("kind must be non-empty.")
        if not self.restore_command_type.endswith(".restore.request"):
            raise ValueError(
                f"restore_command_type '{self.restore_command_type}' "
                f"must end with '.restore.request'."
            )
        if not isinstance(self.record, dict) or not self.record.get("id"):
            raise ValueError("record must be a dict with an id.")
        if self.index < 0:
            raise ValueError("index must be >= 0.")

    @property
    def record_id(self) -> str:
        return self.record["id"]


Restorer = Callable[[UndoEntry], Any]


class UndoBuffer:
    """
    Usage:
        buffer = UndoBuffer(clock=clock, window_seconds=5.0)
        buffer.set_restorer(book.restore)
        buffer.push(entry)
        buffer.undo()      # → restorer(entry), or None
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        window_seconds: float = 5.0,
        restorer: Restorer | None = None,
    ):
        if window_seconds < 0:
            raise ValueError("window_seconds must be >= 0.")
        self._clock = clock or SystemClock()
        self._window_seconds = window_seconds
        self._restorer = restorer
        self._entry: Optional[UndoEntry] = None

    def set_restorer(self, restorer: Restorer) -> None:
        if not callable(restorer):
            raise TypeError("restorer must be callable.")
        self._restorer = restorer

    def push(self, entry: UndoEntry) -> None:
        if self._entry is not None:
            logger.debug(
                f"Undo slot replaced: {self._entry.kind}/{self._entry.record_id} "
                f"→ {entry.kind}/{entry.record_id}"
            )
        self._entry = entry

    def peek(self) -> Optional[UndoEntry]:
        """The pending entry, or None when empty or expired."""
        entry = self._entry
        if entry is None:
            return None
        if is_expired(entry.deleted_at, self._window_seconds, self._clock.now_utc()):
            logger.debug(f"Undo slot expired: {entry.kind}/{entry.record_id}")
            self._entry = None
            return None
        return entry

    @property
    def is_available(self) -> bool:
        return self.peek() is not None

    def seconds_remaining(self) -> float:
        entry = self.peek()
        if entry is None:
            return 0.0
        return seconds_until_expiry(
            entry.deleted_at, self._window_seconds, self._clock.now_utc(),
        )

    def clear(self) -> None:
        self._entry = None

    def undo(self) -> Any:
        entry = self.peek()
        if entry is None:
            return None
        if self._restorer is None:
            raise RuntimeError("UndoBuffer has no restorer.")

        logger.info(f"Undoing deletion of {entry.kind}/{entry.record_id}")
        result = self._restorer(entry)
        if getattr(result, "is_rejected", False):
            logger.info(
                f"Restore of {entry.kind}/{entry.record_id} refused; "
                f"undo slot kept"
            )
            return result
        if self._entry is entry:
            self._entry = None
        return result
