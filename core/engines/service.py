"""
Khata Engine Services — Ledger Service Base
=============================================
Orchestrates engine commands → events → ledger projection → listeners.

Every engine service follows the same steps:
1. Command → event type resolution
2. Payload building (against the current document)
3. Projection update
4. Undo slot for deletions
5. Event dispatch to subscribers (e.g. the sync scheduler)

Engines subclass LedgerEngineService and declare their command
types, payload builders and event type resolver.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Optional

from core.commands.base import Command
from core.context import LedgerContext
from core.events import SubscriberRegistry, dispatch
from core.time import Clock, SystemClock
from core.undo import UndoBuffer, UndoEntry
from projections.ledger import invert_effects, route_event

logger = logging.getLogger("khata.engines")


PayloadBuilder = Callable[[Command, LedgerContext], dict]


# ══════════════════════════════════════════════════════════════
# EVENT ENVELOPE
# ══════════════════════════════════════════════════════════════

def base_payload(command: Command) -> dict:
    return {
        "store_id": command.store_id,
        "actor_id": command.actor_id,
        "actor_type": command.actor_type,
        "correlation_id": command.correlation_id,
        "command_id": command.command_id,
    }


def make_event_data(
    *, command: Command, event_type: str, payload: dict, clock: Clock,
) -> dict:
    return {
        "event_id": uuid.uuid4(),
        "event_type": event_type,
        "store_id": command.store_id,
        "source_engine": command.source_engine,
        "correlation_id": command.correlation_id,
        "causation_id": command.command_id,
        "actor_id": command.actor_id,
        "occurred_at": clock.now_utc(),
        "payload": payload,
    }


# ══════════════════════════════════════════════════════════════
# EXECUTION RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerExecutionResult:
    event_type: str
    event_data: dict
    projection_applied: bool
    dispatch_result: Optional[dict] = None

    @property
    def record(self) -> Optional[dict]:
        return self.event_data["payload"].get("record")


# ══════════════════════════════════════════════════════════════
# COMMAND HANDLER
# ══════════════════════════════════════════════════════════════

class _LedgerCommandHandler:
    def __init__(self, service: "LedgerEngineService"):
        self._service = service

    def execute(self, command: Command) -> LedgerExecutionResult:
        return self._service._execute_command(command)


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class LedgerEngineService:
    """Base for every engine service that writes the ledger."""

    engine_name: str = ""
    command_types: FrozenSet[str] = frozenset()
    payload_builders: Dict[str, PayloadBuilder] = {}
    restore_command_types: Dict[str, str] = {}

    def __init__(
        self,
        *,
        ledger_context: LedgerContext,
        command_bus,
        event_type_registry,
        subscriber_registry: SubscriberRegistry | None = None,
        undo_buffer: UndoBuffer | None = None,
        clock: Clock | None = None,
    ):
        self._ledger_context = ledger_context
        self._command_bus = command_bus
        self._event_type_registry = event_type_registry
        self._subscriber_registry = subscriber_registry
        self._undo_buffer = undo_buffer
        self._clock = clock or SystemClock()

        self.register_event_types(self._event_type_registry)
        self._register_handlers()

    # ── Engine declarations ───────────────────────────────────

    def resolve_event_type(self, command_type: str) -> Optional[str]:
        raise NotImplementedError

    def register_event_types(self, event_type_registry) -> None:
        raise NotImplementedError

    # ── Wiring ────────────────────────────────────────────────

    def _register_handlers(self) -> None:
        handler = _LedgerCommandHandler(self)
        for command_type in sorted(self.command_types):
            self._command_bus.register_handler(command_type, handler)

    # ── Execution ─────────────────────────────────────────────

    def _execute_command(self, command: Command) -> LedgerExecutionResult:
        event_type = self.resolve_event_type(command.command_type)
        if event_type is None:
            raise ValueError(
                f"Unsupported {self.engine_name} command type: "
                f"{command.command_type}"
            )

        builder = self.payload_builders.get(command.command_type)
        if builder is None:
            raise ValueError(
                f"No payload builder for: {command.command_type}"
            )

        payload = base_payload(command)
        payload.update(builder(command, self._ledger_context))

        event_data = make_event_data(
            command=command,
            event_type=event_type,
            payload=payload,
            clock=self._clock,
        )

        self._ledger_context.projection.apply(
            event_type=event_type, payload=payload,
        )
        logger.info(
            f"Applied {event_type} for record "
            f"{payload['record'].get('id')} (command {command.command_id})"
        )

        self._remember_deletion(command, event_type, event_data)

        dispatch_result = None
        if self._subscriber_registry is not None:
            dispatch_result = dispatch(event_data, self._subscriber_registry)

        return LedgerExecutionResult(
            event_type=event_type,
            event_data=event_data,
            projection_applied=True,
            dispatch_result=dispatch_result,
        )

    def _remember_deletion(
        self, command: Command, event_type: str, event_data: dict,
    ) -> None:
        if self._undo_buffer is None:
            return
        restore_type = self.restore_command_types.get(command.command_type)
        if restore_type is None:
            return

        route = route_event(event_type)
        payload = event_data["payload"]
        self._undo_buffer.push(UndoEntry(
            kind=route[0] if route else self.engine_name,
            restore_command_type=restore_type,
            record=dict(payload["record"]),
            index=payload.get("index", 0),
            effects=invert_effects(payload.get("effects")),
            deleted_at=event_data["occurred_at"],
        ))

    @property
    def ledger_context(self) -> LedgerContext:
        return self._ledger_context

    @property
    def projection_store(self):
        return self._ledger_context.projection
