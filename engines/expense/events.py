"""
Khata Expense Engine — Events
===============================
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import (
    build_restored_payload,
    deleted_payload,
    updated_payload,
)
from core.primitives import LEDGER_ENTRIES, LedgerEntry


EXPENSE_ENTRY_ADDED_V1 = "expense.entry.added.v1"
EXPENSE_ENTRY_UPDATED_V1 = "expense.entry.updated.v1"
EXPENSE_ENTRY_DELETED_V1 = "expense.entry.deleted.v1"
EXPENSE_ENTRY_RESTORED_V1 = "expense.entry.restored.v1"

EXPENSE_EVENT_TYPES = (
    EXPENSE_ENTRY_ADDED_V1,
    EXPENSE_ENTRY_UPDATED_V1,
    EXPENSE_ENTRY_DELETED_V1,
    EXPENSE_ENTRY_RESTORED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "expense.entry.add.request": EXPENSE_ENTRY_ADDED_V1,
    "expense.entry.update.request": EXPENSE_ENTRY_UPDATED_V1,
    "expense.entry.delete.request": EXPENSE_ENTRY_DELETED_V1,
    "expense.entry.restore.request": EXPENSE_ENTRY_RESTORED_V1,
}


def resolve_expense_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_expense_event_types(event_type_registry) -> None:
    for event_type in sorted(EXPENSE_EVENT_TYPES):
        event_type_registry.register(event_type)


def _entry_from(command: Command) -> LedgerEntry:
    p = command.payload
    return LedgerEntry(
        id=p["entry_id"],
        date=p["date"],
        description=p.get("description", ""),
        name=p.get("name", ""),
        amount=p["amount"],
    )


def build_entry_added_payload(command: Command, context: LedgerContext) -> dict:
    return {"record": _entry_from(command).to_dict()}


def build_entry_updated_payload(command: Command, context: LedgerContext) -> dict:
    return updated_payload(context, LEDGER_ENTRIES, _entry_from(command))


def build_entry_deleted_payload(command: Command, context: LedgerContext) -> dict:
    return deleted_payload(context, LEDGER_ENTRIES, command.payload["entry_id"])


build_entry_restored_payload = build_restored_payload
