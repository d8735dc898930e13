"""
Khata Payment Engine — Policies
=================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.engines.policies import missing_record, missing_reference
from core.primitives import CUSTOMERS, PAYMENT_LOGS


def payment_exists_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    if command.command_type not in (
        "payment.collection.update.request",
        "payment.collection.delete.request",
    ):
        return None

    return missing_record(
        context, PAYMENT_LOGS, command.payload.get("payment_id"),
        label="Payment", policy_name="payment_exists_policy",
    )


def payment_customer_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """Payments can only be collected from known customers."""
    if command.command_type not in (
        "payment.collection.record.request",
        "payment.collection.update.request",
    ):
        return None

    return missing_reference(
        context, CUSTOMERS, command.payload.get("customer_id"),
        code=ReasonCode.UNKNOWN_CUSTOMER,
        label="Customer",
        policy_name="payment_customer_policy",
    )


PAYMENT_POLICIES = (
    payment_exists_policy,
    payment_customer_policy,
)
