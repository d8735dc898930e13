"""
Khata Engine Payloads — Shared Shapes
=======================================
Payload pieces common to every ledger engine.

    added / recorded → {"record"}
    updated          → {"previous", "record"}
    deleted          → {"record", "index"}
    restored         → {"record", "index", "effects"}

Transaction engines add "effects" to recorded, updated and deleted
payloads.
"""

from __future__ import annotations

from typing import Any

from core.commands.base import Command


def updated_payload(context: Any, collection: str, record: Any) -> dict:
    previous = context.data.get(collection, record.id)
    return {
        "previous": previous.to_dict() if previous is not None else None,
        "record": record.to_dict(),
    }


def deleted_payload(context: Any, collection: str, record_id: str) -> dict:
    data = context.data
    record = data.get(collection, record_id)
    if record is None:
        raise ValueError(f"No record '{record_id}' in {collection}.")
    return {
        "record": record.to_dict(),
        "index": data.index_of(collection, record_id),
    }


def build_restored_payload(command: Command, context: Any) -> dict:
    return {
        "record": dict(command.payload["record"]),
        "index": command.payload.get("index", 0),
        "effects": command.payload.get("effects"),
    }
