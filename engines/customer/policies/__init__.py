"""
Khata Customer Engine — Policies
==================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason
from core.engines.policies import duplicate_record, missing_record
from core.primitives import CUSTOMERS


def customer_identity_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    customer_id = command.payload.get("customer_id")

    if command.command_type == "customer.account.add.request":
        return duplicate_record(
            context, CUSTOMERS, customer_id,
            label="Customer", policy_name="customer_identity_policy",
        )

    if command.command_type in (
        "customer.account.update.request",
        "customer.account.delete.request",
    ):
        return missing_record(
            context, CUSTOMERS, customer_id,
            label="Customer", policy_name="customer_identity_policy",
        )

    return None


CUSTOMER_POLICIES = (
    customer_identity_policy,
)
