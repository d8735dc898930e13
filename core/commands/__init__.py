"""
Khata Command Layer
=====================
Every change begins as a Command.
Every Command produces exactly one Outcome.
"""

from core.commands.base import (
    Command,
    VALID_ACTOR_TYPES,
    derive_source_engine,
    make_command,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)
from core.commands.dispatcher import (
    CommandDispatcher,
    PolicyEvaluator,
    store_scope_guard,
)
from core.commands.bus import (
    CommandBus,
    CommandBusError,
    CommandResult,
    DuplicateHandlerError,
    NoHandlerRegistered,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    "VALID_ACTOR_TYPES",
    "derive_source_engine",
    "make_command",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Dispatcher ────────────────────────────────────────────
    "CommandDispatcher",
    "PolicyEvaluator",
    "store_scope_guard",
    # ── Bus ────────────────────────────────────────────────────
    "CommandBus",
    "CommandBusError",
    "CommandResult",
    "DuplicateHandlerError",
    "NoHandlerRegistered",
]
