"""
Khata Undo — Restore Request
==============================
Re-inserting a deleted record is an ordinary command, so it passes
the same policies and produces a *.restored.v1 event like any other
change.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.commands.base import Command, derive_source_engine
from core.undo.buffer import UndoEntry


@dataclass(frozen=True)
class RestoreRequest:
    """Request to put a deleted record back at its old position."""
    command_type: str
    record: dict
    index: int = 0
    effects: Optional[dict] = field(default=None)

    def __post_init__(self):
        if not self.command_type.endswith(".restore.request"):
            raise ValueError(
                f"command_type '{self.command_type}' is not a restore request."
            )
        if not isinstance(self.record, dict) or not self.record.get("id"):
            raise ValueError("record must be a dict with an id.")
        if not isinstance(self.index, int) or self.index < 0:
            raise ValueError("index must be a non-negative integer.")

    @classmethod
    def from_entry(cls, entry: UndoEntry) -> "RestoreRequest":
        return cls(
            command_type=entry.restore_command_type,
            record=dict(entry.record),
            index=entry.index,
            effects=entry.effects or None,
        )

    def to_command(
        self,
        *,
        store_id: str,
        actor_type: str,
        actor_id: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return Command(
            command_id=command_id,
            command_type=self.command_type,
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            payload={
                "record": dict(self.record),
                "index": self.index,
                "effects": self.effects,
            },
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine=derive_source_engine(self.command_type),
        )
