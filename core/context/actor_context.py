"""
Khata Context - ActorContext
============================
Who is issuing commands. Authentication happens elsewhere; the
ledger only receives the resulting identity.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.commands.base import VALID_ACTOR_TYPES


@dataclass(frozen=True)
class ActorContext:
    """Canonical actor identity attached to every command."""

    actor_type: str
    actor_id: str

    def __post_init__(self):
        if self.actor_type not in VALID_ACTOR_TYPES:
            raise ValueError(
                f"actor_type '{self.actor_type}' not valid. "
                f"Must be one of: {sorted(VALID_ACTOR_TYPES)}"
            )

        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")


SYSTEM_ACTOR = ActorContext(actor_type="SYSTEM", actor_id="khata")
