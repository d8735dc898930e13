"""
Khata Purchase Engine — Request Commands
==========================================
Stock-in from suppliers. Every purchase raises product stock and
re-averages the product's cost price.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.commands.base import Command, make_command
from core.primitives import ZERO, check_precision, coerce_amounts, new_record_id
from core.time import iso_date


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PURCHASE_STOCK_IN_RECORD_REQUEST = "purchase.stock_in.record.request"
PURCHASE_STOCK_IN_UPDATE_REQUEST = "purchase.stock_in.update.request"
PURCHASE_STOCK_IN_DELETE_REQUEST = "purchase.stock_in.delete.request"
PURCHASE_STOCK_IN_RESTORE_REQUEST = "purchase.stock_in.restore.request"

PURCHASE_COMMAND_TYPES = frozenset({
    PURCHASE_STOCK_IN_RECORD_REQUEST,
    PURCHASE_STOCK_IN_UPDATE_REQUEST,
    PURCHASE_STOCK_IN_DELETE_REQUEST,
    PURCHASE_STOCK_IN_RESTORE_REQUEST,
})


def _check_line(request) -> None:
    coerce_amounts(request, "quantity", "unit_price")
    if not request.product_id:
        raise ValueError("product_id must be non-empty.")
    if not request.supplier_id:
        raise ValueError("supplier_id must be non-empty.")
    if request.quantity <= ZERO:
        raise ValueError("quantity must be positive.")
    if request.unit_price < ZERO:
        raise ValueError("unit_price must be >= 0.")
    check_precision(request.quantity * request.unit_price, "total_price")
    if request.date is not None:
        object.__setattr__(request, "date", iso_date(request.date))


def _line_payload(request, issued_at: datetime) -> dict:
    return {
        "stock_in_id": request.stock_in_id,
        "product_id": request.product_id,
        "supplier_id": request.supplier_id,
        "quantity": request.quantity,
        "unit_price": request.unit_price,
        "date": request.date or iso_date(issued_at),
        "bill_number": request.bill_number,
    }


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PurchaseRecordRequest:
    """Request to record goods received from a supplier."""
    product_id: str
    supplier_id: str
    quantity: Decimal
    unit_price: Decimal
    date: Optional[str] = None
    bill_number: Optional[str] = None
    stock_in_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        _check_line(self)
        if not self.stock_in_id:
            raise ValueError("stock_in_id must be non-empty.")

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price

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
            PURCHASE_STOCK_IN_RECORD_REQUEST,
            _line_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class PurchaseUpdateRequest:
    """
    Request to edit a recorded purchase.

    A missing bill_number keeps the one already on the log.
    """
    stock_in_id: str
    product_id: str
    supplier_id: str
    quantity: Decimal
    unit_price: Decimal
    date: Optional[str] = None
    bill_number: Optional[str] = None

    def __post_init__(self):
        if not self.stock_in_id:
            raise ValueError("stock_in_id must be non-empty.")
        _check_line(self)

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
            PURCHASE_STOCK_IN_UPDATE_REQUEST,
            _line_payload(self, issued_at),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class PurchaseDeleteRequest:
    stock_in_id: str

    def __post_init__(self):
        if not self.stock_in_id:
            raise ValueError("stock_in_id must be non-empty.")

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
            PURCHASE_STOCK_IN_DELETE_REQUEST,
            {"stock_in_id": self.stock_in_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
