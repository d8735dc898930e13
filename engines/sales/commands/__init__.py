"""
Khata Sales Engine — Request Commands
=======================================
Stock-out to customers.

    total_price = quantity × unit_price − discount
    due_added   = total_price − paid_amount

A negative due_added (customer paid more than the bill) becomes an
advance on the customer's account.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.commands.base import Command, make_command
from core.primitives import ZERO, check_precision, coerce_amounts, new_record_id
from core.time import bill_number_at, iso_date


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

SALES_SALE_RECORD_REQUEST = "sales.sale.record.request"
SALES_SALE_UPDATE_REQUEST = "sales.sale.update.request"
SALES_SALE_DELETE_REQUEST = "sales.sale.delete.request"
SALES_SALE_RESTORE_REQUEST = "sales.sale.restore.request"

SALES_COMMAND_TYPES = frozenset({
    SALES_SALE_RECORD_REQUEST,
    SALES_SALE_UPDATE_REQUEST,
    SALES_SALE_DELETE_REQUEST,
    SALES_SALE_RESTORE_REQUEST,
})


def _check_line(request) -> None:
    coerce_amounts(request, "quantity", "unit_price", "paid_amount", "discount")
    if not request.product_id:
        raise ValueError("product_id must be non-empty.")
    if not request.customer_id:
        raise ValueError("customer_id must be non-empty.")
    if request.quantity <= ZERO:
        raise ValueError("quantity must be positive.")
    if request.unit_price < ZERO:
        raise ValueError("unit_price must be >= 0.")
    if request.discount < ZERO:
        raise ValueError("discount must be >= 0.")
    if request.paid_amount < ZERO:
        raise ValueError("paid_amount must be >= 0.")
    total = request.quantity * request.unit_price - request.discount
    check_precision(total, "total_price")
    check_precision(total - request.paid_amount, "due_added")
    if request.date is not None:
        object.__setattr__(request, "date", iso_date(request.date))


def _line_payload(request, issued_at: datetime) -> dict:
    return {
        "sale_id": request.sale_id,
        "product_id": request.product_id,
        "customer_id": request.customer_id,
        "quantity": request.quantity,
        "unit_price": request.unit_price,
        "discount": request.discount,
        "paid_amount": request.paid_amount,
        "total_price": request.total_price,
        "due_added": request.due_added,
        "is_sample": request.is_sample,
        "date": request.date or iso_date(issued_at),
    }


class _SaleTotals:
    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price - self.discount

    @property
    def due_added(self) -> Decimal:
        return self.total_price - self.paid_amount


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleRecordRequest(_SaleTotals):
    """Request to record a sale. Bill number defaults to BILL-xxxxxx."""
    product_id: str
    customer_id: str
    quantity: Decimal
    unit_price: Decimal
    paid_amount: Decimal = ZERO
    discount: Decimal = ZERO
    date: Optional[str] = None
    bill_number: Optional[str] = None
    is_sample: bool = False
    sale_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        _check_line(self)
        if not self.sale_id:
            raise ValueError("sale_id must be non-empty.")

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
        payload = _line_payload(self, issued_at)
        payload["bill_number"] = self.bill_number or bill_number_at(issued_at)
        return make_command(
            SALES_SALE_RECORD_REQUEST,
            payload,
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class SaleUpdateRequest(_SaleTotals):
    """
    Request to edit a recorded sale.

    The old effects are reverted and the new ones applied, so stock
    and due move by the difference only.
    """
    sale_id: str
    product_id: str
    customer_id: str
    quantity: Decimal
    unit_price: Decimal
    paid_amount: Decimal = ZERO
    discount: Decimal = ZERO
    date: Optional[str] = None
    bill_number: Optional[str] = None
    is_sample: bool = False

    def __post_init__(self):
        if not self.sale_id:
            raise ValueError("sale_id must be non-empty.")
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
        payload = _line_payload(self, issued_at)
        payload["bill_number"] = self.bill_number
        return make_command(
            SALES_SALE_UPDATE_REQUEST,
            payload,
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class SaleDeleteRequest:
    sale_id: str

    def __post_init__(self):
        if not self.sale_id:
            raise ValueError("sale_id must be non-empty.")

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
            SALES_SALE_DELETE_REQUEST,
            {"sale_id": self.sale_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
