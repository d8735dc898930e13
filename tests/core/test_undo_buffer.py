"""Khata undo buffer tests."""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from core.time import FixedClock
from core.undo import RestoreRequest, UndoBuffer, UndoEntry

NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def entry(record_id="s1", **overrides):
    base = dict(
        kind="stock_out_logs",
        restore_command_type="sales.sale.restore.request",
        record={"id": record_id},
        index=0,
        deleted_at=NOW,
    )
    base.update(overrides)
    return UndoEntry(**base)


def _buffer(window=5.0):
    clock = FixedClock(NOW)
    restored = []
    buffer = UndoBuffer(clock=clock, window_seconds=window, restorer=restored.append)
    return buffer, clock, restored


class TestUndoEntry:
    def test_restore_command_type_checked(self):
        with pytest.raises(ValueError):
            entry(restore_command_type="sales.sale.delete.request")

    def test_record_needs_id(self):
        with pytest.raises(ValueError):
            entry(record={})

    def test_negative_index(self):
        with pytest.raises(ValueError):
            entry(index=-1)


class TestUndoBuffer:
    def test_undo_within_window(self):
        buffer, clock, restored = _buffer()
        buffer.push(entry())
        clock.advance(5)

        assert buffer.is_available
        buffer.undo()
        assert [e.record_id for e in restored] == ["s1"]
        assert not buffer.is_available

    def test_undo_runs_once(self):
        buffer, _, restored = _buffer()
        buffer.push(entry())
        buffer.undo()
        assert buffer.undo() is None
        assert len(restored) == 1

    def test_refused_restore_keeps_slot(self):
        clock = FixedClock(NOW)
        attempts = []

        def refuse(e):
            attempts.append(e)
            return SimpleNamespace(is_rejected=True)

        buffer = UndoBuffer(clock=clock, restorer=refuse)
        buffer.push(entry())

        assert buffer.undo().is_rejected
        assert buffer.is_available
        buffer.undo()
        assert len(attempts) == 2

        clock.advance(6)
        assert buffer.undo() is None

    def test_expired_slot(self):
        buffer, clock, restored = _buffer()
        buffer.push(entry())
        clock.advance(6)

        assert not buffer.is_available
        assert buffer.undo() is None
        assert restored == []

    def test_new_deletion_replaces_slot(self):
        buffer, _, restored = _buffer()
        buffer.push(entry("s1"))
        buffer.push(entry("s2"))
        buffer.undo()
        assert [e.record_id for e in restored] == ["s2"]

    def test_seconds_remaining(self):
        buffer, clock, _ = _buffer()
        assert buffer.seconds_remaining() == 0.0
        buffer.push(entry())
        clock.advance(2)
        assert buffer.seconds_remaining() == 3.0

    def test_clear(self):
        buffer, _, _ = _buffer()
        buffer.push(entry())
        buffer.clear()
        assert buffer.peek() is None

    def test_undo_without_restorer(self):
        buffer = UndoBuffer(clock=FixedClock(NOW))
        buffer.push(entry())
        with pytest.raises(RuntimeError):
            buffer.undo()

    def test_restorer_must_be_callable(self):
        with pytest.raises(TypeError):
            UndoBuffer().set_restorer("nope")


class TestRestoreRequest:
    def test_from_entry(self):
        effects = {"stock": [{"product_id": "1", "delta": 2}], "due": [], "cost": []}
        request = RestoreRequest.from_entry(entry(index=3, effects=effects))
        assert request.command_type == "sales.sale.restore.request"
        assert request.index == 3
        assert request.effects == effects

    def test_to_command_payload(self):
        command = RestoreRequest(
            command_type="sales.sale.restore.request", record={"id": "s1"}, index=2,
        ).to_command(
            store_id="shared_khata_v1",
            actor_type="HUMAN",
            actor_id="owner-1",
            command_id=uuid.uuid4(),
            correlation_id=uuid.uuid4(),
            issued_at=NOW,
        )
        assert command.source_engine == "sales"
        assert command.payload == {"record": {"id": "s1"}, "index": 2, "effects": None}

    def test_rejects_non_restore_type(self):
        with pytest.raises(ValueError):
            RestoreRequest(command_type="sales.sale.delete.request", record={"id": "s1"})
