"""
Khata Expense Engine — Policies
=================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason
from core.engines.policies import duplicate_record, missing_record
from core.primitives import LEDGER_ENTRIES


def expense_entry_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    entry_id = command.payload.get("entry_id")

    if command.command_type == "expense.entry.add.request":
        return duplicate_record(
            context, LEDGER_ENTRIES, entry_id,
            label="Expense entry", policy_name="expense_entry_policy",
        )

    if command.command_type in (
        "expense.entry.update.request",
        "expense.entry.delete.request",
    ):
        return missing_record(
            context, LEDGER_ENTRIES, entry_id,
            label="Expense entry", policy_name="expense_entry_policy",
        )

    return None


EXPENSE_POLICIES = (
    expense_entry_policy,
)
