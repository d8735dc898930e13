"""
Khata Inventory Engine — Policies
===================================
Engine-specific validation policies for product and category requests.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import ReasonCode, RejectionReason
from core.engines.policies import duplicate_record, missing_record, missing_reference
from core.primitives import CATEGORIES, PRODUCTS


def product_identity_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """New products need a free id; edits and deletes need an existing one."""
    product_id = command.payload.get("product_id")

    if command.command_type == "inventory.product.add.request":
        return duplicate_record(
            context, PRODUCTS, product_id,
            label="Product", policy_name="product_identity_policy",
        )

    if command.command_type in (
        "inventory.product.update.request",
        "inventory.product.delete.request",
    ):
        return missing_record(
            context, PRODUCTS, product_id,
            label="Product", policy_name="product_identity_policy",
        )

    return None


def product_category_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    """A product may only point at a category that exists."""
    if command.command_type not in (
        "inventory.product.add.request",
        "inventory.product.update.request",
    ):
        return None

    category_id = command.payload.get("category_id")
    if not category_id:
        return None

    return missing_reference(
        context, CATEGORIES, category_id,
        code=ReasonCode.UNKNOWN_CATEGORY,
        label="Category",
        policy_name="product_category_policy",
    )


def category_identity_policy(
    command: Command, context,
) -> Optional[RejectionReason]:
    category_id = command.payload.get("category_id")

    if command.command_type == "inventory.category.add.request":
        return duplicate_record(
            context, CATEGORIES, category_id,
            label="Category", policy_name="category_identity_policy",
        )

    if command.command_type in (
        "inventory.category.update.request",
        "inventory.category.delete.request",
    ):
        return missing_record(
            context, CATEGORIES, category_id,
            label="Category", policy_name="category_identity_policy",
        )

    return None


INVENTORY_POLICIES = (
    product_identity_policy,
    product_category_policy,
    category_identity_policy,
)
