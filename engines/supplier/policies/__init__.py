"""
Khata Supplier Engine — Policies
==================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason
from core.engines.policies import duplicate_record, missing_record
from core.primitives import SUPPLIERS


def supplier_identity_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    supplier_id = command.payload.get("supplier_id")

    if command.command_type == "supplier.account.add.request":
        return duplicate_record(
            context, SUPPLIERS, supplier_id,
            label="Supplier", policy_name="supplier_identity_policy",
        )

    if command.command_type in (
        "supplier.account.update.request",
        "supplier.account.delete.request",
    ):
        return missing_record(
            context, SUPPLIERS, supplier_id,
            label="Supplier", policy_name="supplier_identity_policy",
        )

    return None


SUPPLIER_POLICIES = (
    supplier_identity_policy,
)
