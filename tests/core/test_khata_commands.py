"""
Khata Command Layer — Tests
=============================
Command structure, policy evaluation and bus orchestration.

Scenarios:
1. Valid command → ACCEPTED and executed
2. Invalid structure → ValueError on construction
3. Policy failure → REJECTED outcome, handler never called
4. Store scope guard
5. Bus wiring errors
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import pytest

from core.commands import (
    Command,
    CommandBus,
    CommandDispatcher,
    CommandStatus,
    DuplicateHandlerError,
    NoHandlerRegistered,
    ReasonCode,
    RejectionReason,
    derive_source_engine,
    make_command,
    store_scope_guard,
)
from core.time import FixedClock

STORE = "shared_khata_v1"
NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def kw(**overrides):
    base = dict(
        store_id=STORE,
        actor_type="HUMAN",
        actor_id="owner-1",
        command_id=uuid.uuid4(),
        correlation_id=uuid.uuid4(),
        issued_at=NOW,
    )
    base.update(overrides)
    return base


# ══════════════════════════════════════════════════════════════
# TEST INFRASTRUCTURE — STUBS
# ══════════════════════════════════════════════════════════════

class StubContext:
    def __init__(self, store_id: str = STORE):
        self.store_id = store_id


class RecordingHandler:
    def __init__(self):
        self.calls = []

    def execute(self, command):
        self.calls.append(command)
        return {"handled": command.command_type}


def reject_everything(command, context) -> Optional[RejectionReason]:
    return RejectionReason(
        code=ReasonCode.POLICY_VIOLATION,
        message="Nothing is allowed.",
        policy_name="reject_everything",
    )


def _bus(*policies, context=None):
    dispatcher = CommandDispatcher(context=context or StubContext(), clock=FixedClock(NOW))
    dispatcher.register_policies(policies)
    return CommandBus(dispatcher=dispatcher)


# ══════════════════════════════════════════════════════════════
# COMMAND STRUCTURE
# ══════════════════════════════════════════════════════════════

class TestCommandStructure:
    def test_make_command_derives_source_engine(self):
        cmd = make_command("sales.sale.record.request", {"sale_id": "s1"}, **kw())
        assert cmd.source_engine == "sales"
        assert cmd.payload == {"sale_id": "s1"}

    def test_derive_source_engine(self):
        assert derive_source_engine("payment.collection.delete.request") == "payment"

    def test_type_must_end_with_request(self):
        with pytest.raises(ValueError, match="must end with"):
            make_command("sales.sale.record", {}, **kw())

    def test_type_needs_four_segments(self):
        with pytest.raises(ValueError, match="4 segments"):
            make_command("sales.record.request", {}, **kw())

    def test_unknown_actor_type_rejected(self):
        with pytest.raises(ValueError, match="actor_type"):
            make_command("sales.sale.record.request", {}, **kw(actor_type="AI"))

    def test_empty_store_rejected(self):
        with pytest.raises(ValueError, match="store_id"):
            make_command("sales.sale.record.request", {}, **kw(store_id=""))

    def test_namespace_must_match_source_engine(self):
        with pytest.raises(ValueError, match="namespace"):
            Command(
                command_id=uuid.uuid4(),
                command_type="sales.sale.record.request",
                store_id=STORE,
                actor_type="HUMAN",
                actor_id="owner-1",
                payload={},
                issued_at=NOW,
                correlation_id=uuid.uuid4(),
                source_engine="purchase",
            )

    def test_command_is_frozen(self):
        cmd = make_command("sales.sale.record.request", {}, **kw())
        with pytest.raises(Exception):
            cmd.store_id = "other"


# ══════════════════════════════════════════════════════════════
# DISPATCH / BUS
# ══════════════════════════════════════════════════════════════

class TestCommandBus:
    def test_accepted_command_reaches_handler(self):
        bus = _bus(store_scope_guard)
        handler = RecordingHandler()
        bus.register_handler("sales.sale.record.request", handler)

        result = bus.handle(make_command("sales.sale.record.request", {}, **kw()))

        assert result.is_accepted
        assert result.outcome.status == CommandStatus.ACCEPTED
        assert result.outcome.occurred_at == NOW
        assert result.execution_result == {"handled": "sales.sale.record.request"}
        assert len(handler.calls) == 1

    def test_rejected_command_never_reaches_handler(self):
        bus = _bus(reject_everything)
        handler = RecordingHandler()
        bus.register_handler("sales.sale.record.request", handler)

        result = bus.handle(make_command("sales.sale.record.request", {}, **kw()))

        assert result.is_rejected
        assert result.reason.code == ReasonCode.POLICY_VIOLATION
        assert result.reason.policy_name == "reject_everything"
        assert result.execution_result is None
        assert handler.calls == []

    def test_store_scope_guard_rejects_foreign_store(self):
        bus = _bus(store_scope_guard)
        bus.register_handler("sales.sale.record.request", RecordingHandler())

        result = bus.handle(
            make_command("sales.sale.record.request", {}, **kw(store_id="other_row"))
        )

        assert result.is_rejected
        assert result.reason.code == ReasonCode.STORE_MISMATCH

    def test_first_rejecting_policy_wins(self):
        def reject_stock(command, context):
            return RejectionReason(
                code=ReasonCode.INSUFFICIENT_STOCK,
                message="No stock.",
                policy_name="reject_stock",
            )

        bus = _bus(reject_stock, reject_everything)
        bus.register_handler("sales.sale.record.request", RecordingHandler())

        result = bus.handle(make_command("sales.sale.record.request", {}, **kw()))
        assert result.reason.code == ReasonCode.INSUFFICIENT_STOCK

    def test_policy_must_return_rejection_or_none(self):
        bus = _bus(lambda command, context: "nope")
        bus.register_handler("sales.sale.record.request", RecordingHandler())

        with pytest.raises(TypeError, match="RejectionReason or None"):
            bus.handle(make_command("sales.sale.record.request", {}, **kw()))

    def test_missing_handler_raises(self):
        bus = _bus()
        with pytest.raises(NoHandlerRegistered):
            bus.handle(make_command("sales.sale.record.request", {}, **kw()))

    def test_duplicate_handler_raises(self):
        bus = _bus()
        bus.register_handler("sales.sale.record.request", RecordingHandler())
        with pytest.raises(DuplicateHandlerError):
            bus.register_handler("sales.sale.record.request", RecordingHandler())

    def test_handler_type_must_end_with_request(self):
        bus = _bus()
        with pytest.raises(ValueError):
            bus.register_handler("sales.sale.record", RecordingHandler())

    def test_rejection_reason_requires_fields(self):
        with pytest.raises(ValueError):
            RejectionReason(code="", message="x", policy_name="p")
