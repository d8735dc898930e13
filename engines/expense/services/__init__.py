"""
Khata Expense Engine — Service
================================
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.expense.commands import (
    EXPENSE_COMMAND_TYPES,
    EXPENSE_ENTRY_DELETE_REQUEST,
    EXPENSE_ENTRY_RESTORE_REQUEST,
)
from engines.expense.events import (
    build_entry_added_payload,
    build_entry_deleted_payload,
    build_entry_restored_payload,
    build_entry_updated_payload,
    register_expense_event_types,
    resolve_expense_event_type,
)


PAYLOAD_BUILDERS = {
    "expense.entry.add.request": build_entry_added_payload,
    "expense.entry.update.request": build_entry_updated_payload,
    "expense.entry.delete.request": build_entry_deleted_payload,
    "expense.entry.restore.request": build_entry_restored_payload,
}


class ExpenseService(LedgerEngineService):
    engine_name = "expense"
    command_types = EXPENSE_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        EXPENSE_ENTRY_DELETE_REQUEST: EXPENSE_ENTRY_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_expense_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_expense_event_types(event_type_registry)
