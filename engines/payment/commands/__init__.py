"""
Khata Payment Engine — Request Commands
=========================================
Money collected from customers. A payment settles
amount + discount off the customer's due.
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


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PAYMENT_COLLECTION_RECORD_REQUEST = "payment.collection.record.request"
PAYMENT_COLLECTION_UPDATE_REQUEST = "payment.collection.update.request"
PAYMENT_COLLECTION_DELETE_REQUEST = "payment.collection.delete.request"
PAYMENT_COLLECTION_RESTORE_REQUEST = "payment.collection.restore.request"

PAYMENT_COMMAND_TYPES = frozenset({
    PAYMENT_COLLECTION_RECORD_REQUEST,
    PAYMENT_COLLECTION_UPDATE_REQUEST,
    PAYMENT_COLLECTION_DELETE_REQUEST,
    PAYMENT_COLLECTION_RESTORE_REQUEST,
})

DEFAULT_PAYMENT_NOTES = {
    "bn": "টাকা জমা নেওয়া হয়েছে",
    "en": "Payment collected",
}


def _check_payment(request) -> None:
    coerce_amounts(request, "amount", "discount")
    if not request.customer_id:
        raise ValueError("customer_id must be non-empty.")
    if request.amount < ZERO:
        raise ValueError("amount must be >= 0.")
    if request.discount < ZERO:
        raise ValueError("discount must be >= 0.")
    if request.amount + request.discount == ZERO:
        raise ValueError("amount + discount must be positive.")
    if request.date is not None:
        object.__setattr__(request, "date", iso_date(request.date))


def _payment_payload(request, issued_at: datetime) -> dict:
    return {
        "payment_id": request.payment_id,
        "customer_id": request.customer_id,
        "amount": request.amount,
        "discount": request.discount,
        "date": request.date or iso_date(issued_at),
        "note": request.note,
    }


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PaymentRecordRequest:
    """
    Request to record a payment.

    Without a note the ledger language picks a default one.
    """
    customer_id: str
    amount: Decimal
    discount: Decimal = ZERO
    date: Optional[str] = None
    note: Optional[str] = None
    payment_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        _check_payment(self)
        if not self.payment_id:
            raise ValueError("payment_id must be non-empty.")

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
            PAYMENT_COLLECTION_RECORD_REQUEST,
            _payment_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class PaymentUpdateRequest:
    """Request to edit a payment. A missing note keeps the old one."""
    payment_id: str
    customer_id: str
    amount: Decimal
    discount: Decimal = ZERO
    date: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self):
        if not self.payment_id:
            raise ValueError("payment_id must be non-empty.")
        _check_payment(self)

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
            PAYMENT_COLLECTION_UPDATE_REQUEST,
            _payment_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class PaymentDeleteRequest:
    payment_id: str

    def __post_init__(self):
        if not self.payment_id:
            raise ValueError("payment_id must be non-empty.")

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
            PAYMENT_COLLECTION_DELETE_REQUEST,
            {"payment_id": self.payment_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
