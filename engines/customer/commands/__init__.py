"""
Khata Customer Engine — Commands
==================================
Customer accounts. A positive due_amount is owed by the customer,
a negative one is an advance held for them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from core.commands.base import Command, make_command
from core.primitives import ZERO, coerce_amounts, new_record_id


CUSTOMER_ACCOUNT_ADD_REQUEST = "customer.account.add.request"
CUSTOMER_ACCOUNT_UPDATE_REQUEST = "customer.account.update.request"
CUSTOMER_ACCOUNT_DELETE_REQUEST = "customer.account.delete.request"
CUSTOMER_ACCOUNT_RESTORE_REQUEST = "customer.account.restore.request"

CUSTOMER_COMMAND_TYPES = frozenset({
    CUSTOMER_ACCOUNT_ADD_REQUEST,
    CUSTOMER_ACCOUNT_UPDATE_REQUEST,
    CUSTOMER_ACCOUNT_DELETE_REQUEST,
    CUSTOMER_ACCOUNT_RESTORE_REQUEST,
})


@dataclass(frozen=True)
class CustomerAddRequest:
    """Open a customer account, optionally with an opening balance."""
    name: str
    phone: str = ""
    due_amount: Decimal = ZERO
    customer_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        coerce_amounts(self, "due_amount")
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not self.customer_id:
            raise ValueError("customer_id must be non-empty.")

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
            CUSTOMER_ACCOUNT_ADD_REQUEST,
            {
                "customer_id": self.customer_id,
                "name": self.name.strip(),
                "phone": self.phone.strip(),
                "due_amount": self.due_amount,
            },
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class CustomerUpdateRequest:
    """Replace a customer's details, including a manual balance correction."""
    customer_id: str
    name: str
    phone: str = ""
    due_amount: Decimal = ZERO

    def __post_init__(self):
        coerce_amounts(self, "due_amount")
        if not self.customer_id:
            raise ValueError("customer_id must be non-empty.")
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")

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
            CUSTOMER_ACCOUNT_UPDATE_REQUEST,
            {
                "customer_id": self.customer_id,
                "name": self.name.strip(),
                "phone": self.phone.strip(),
                "due_amount": self.due_amount,
            },
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class CustomerDeleteRequest:
    customer_id: str

    def __post_init__(self):
        if not self.customer_id:
            raise ValueError("customer_id must be non-empty.")

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
            CUSTOMER_ACCOUNT_DELETE_REQUEST,
            {"customer_id": self.customer_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
