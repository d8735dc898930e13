"""
Khata Purchase Engine — Policies
==================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.engines.policies import missing_record, missing_reference
from core.primitives import PRODUCTS, STOCK_IN_LOGS, SUPPLIERS


def stock_in_exists_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """Edits and deletions need the purchase log to exist."""
    if command.command_type not in (
        "purchase.stock_in.update.request",
        "purchase.stock_in.delete.request",
    ):
        return None

    return missing_record(
        context, STOCK_IN_LOGS, command.payload.get("stock_in_id"),
        label="Purchase", policy_name="stock_in_exists_policy",
    )


def purchase_reference_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """Product and supplier must exist when a purchase is written."""
    if command.command_type not in (
        "purchase.stock_in.record.request",
        "purchase.stock_in.update.request",
    ):
        return None

    rejection = missing_reference(
        context, PRODUCTS, command.payload.get("product_id"),
        code=ReasonCode.UNKNOWN_PRODUCT,
        label="Product",
        policy_name="purchase_reference_policy",
    )
    if rejection is not None:
        return rejection

    return missing_reference(
        context, SUPPLIERS, command.payload.get("supplier_id"),
        code=ReasonCode.UNKNOWN_SUPPLIER,
        label="Supplier",
        policy_name="purchase_reference_policy",
    )


PURCHASE_POLICIES = (
    stock_in_exists_policy,
    purchase_reference_policy,
)
