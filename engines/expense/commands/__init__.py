"""
Khata Expense Engine — Commands
=================================
Miscellaneous expense ledger. Entries carry no derived balances.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.commands.base import Command, make_command
from core.primitives import ZERO, coerce_amounts, new_record_id
from core.time import iso_date


EXPENSE_ENTRY_ADD_REQUEST = "expense.entry.add.request"
EXPENSE_ENTRY_UPDATE_REQUEST = "expense.entry.update.request"
EXPENSE_ENTRY_DELETE_REQUEST = "expense.entry.delete.request"
EXPENSE_ENTRY_RESTORE_REQUEST = "expense.entry.restore.request"

EXPENSE_COMMAND_TYPES = frozenset({
    EXPENSE_ENTRY_ADD_REQUEST,
    EXPENSE_ENTRY_UPDATE_REQUEST,
    EXPENSE_ENTRY_DELETE_REQUEST,
    EXPENSE_ENTRY_RESTORE_REQUEST,
})


def _check_entry(request) -> None:
    coerce_amounts(request, "amount")
    if request.amount < ZERO:
        raise ValueError("amount must be >= 0.")
    if not (request.description or "").strip() and not (request.name or "").strip():
        raise ValueError("description or name must be non-empty.")
    if request.date is not None:
        object.__setattr__(request, "date", iso_date(request.date))


def _entry_payload(request, issued_at: datetime) -> dict:
    return {
        "entry_id": request.entry_id,
        "date": request.date or iso_date(issued_at),
        "description": request.description.strip(),
        "name": request.name.strip(),
        "amount": request.amount,
    }


@dataclass(frozen=True)
class ExpenseAddRequest:
    amount: Decimal
    description: str = ""
    name: str = ""
    date: Optional[str] = None
    entry_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        _check_entry(self)
        if not self.entry_id:
            raise ValueError("entry_id must be non-empty.")

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
        return make_command(
            EXPENSE_ENTRY_ADD_REQUEST,
            _entry_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class ExpenseUpdateRequest:
    entry_id: str
    amount: Decimal
    description: str = ""
    name: str = ""
    date: Optional[str] = None

    def __post_init__(self):
        if not self.entry_id:
            raise ValueError("entry_id must be non-empty.")
        _check_entry(self)

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
        return make_command(
            EXPENSE_ENTRY_UPDATE_REQUEST,
            _entry_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class ExpenseDeleteRequest:
    entry_id: str

    def __post_init__(self):
        if not self.entry_id:
            raise ValueError("entry_id must be non-empty.")

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
        return make_command(
            EXPENSE_ENTRY_DELETE_REQUEST,
            {"entry_id": self.entry_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
