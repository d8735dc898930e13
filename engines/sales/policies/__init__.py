"""
Khata Sales Engine — Policies
===============================
Engine-specific validation policies for sales.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.engines.policies import missing_record, missing_reference
from core.primitives import CUSTOMERS, PRODUCTS, STOCK_OUT_LOGS, ZERO


def sale_exists_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """Edits and deletions need the sale log to exist."""
    if command.command_type not in (
        "sales.sale.update.request",
        "sales.sale.delete.request",
    ):
        return None

    return missing_record(
        context, STOCK_OUT_LOGS, command.payload.get("sale_id"),
        label="Sale", policy_name="sale_exists_policy",
    )


def sale_reference_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """Product and customer must exist when a sale is written."""
    if command.command_type not in (
        "sales.sale.record.request",
        "sales.sale.update.request",
    ):
        return None

    rejection = missing_reference(
        context, PRODUCTS, command.payload.get("product_id"),
        code=ReasonCode.UNKNOWN_PRODUCT,
        label="Product",
        policy_name="sale_reference_policy",
    )
    if rejection is not None:
        return rejection

    return missing_reference(
        context, CUSTOMERS, command.payload.get("customer_id"),
        code=ReasonCode.UNKNOWN_CUSTOMER,
        label="Customer",
        policy_name="sale_reference_policy",
    )


def insufficient_stock_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """
    Reject sales larger than the stock on hand.

    Only active when the ledger disallows negative stock. On an edit,
    the quantity the old line took from the same product counts as
    available again.
    """
    if context.settings.allow_negative_stock:
        return None

    if command.command_type not in (
        "sales.sale.record.request",
        "sales.sale.update.request",
    ):
        return None

    data = context.data
    product_id = command.payload.get("product_id")
    product = data.get(PRODUCTS, product_id)
    if product is None:
        return None

    available = product.stock
    if command.command_type == "sales.sale.update.request":
        previous = data.get(STOCK_OUT_LOGS, command.payload.get("sale_id"))
        if previous is not None and previous.product_id == product_id:
            available += previous.quantity

    quantity = command.payload.get("quantity", ZERO)
    if quantity > available:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=(
                f"Insufficient stock: {available} {product.unit} available, "
                f"{quantity} requested for product {product_id}."
            ),
            policy_name="insufficient_stock_policy",
        )

    return None


SALES_POLICIES = (
    sale_exists_policy,
    sale_reference_policy,
    insufficient_stock_policy,
)
