"""
Khata Inventory Engine — Event Types and Payload Builders
===========================================================
Engine: Inventory (products, categories)

Inventory builds payload only. The ledger projection applies it.
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import (
    build_restored_payload,
    deleted_payload,
    updated_payload,
)
from core.primitives import CATEGORIES, PRODUCTS, Category, Product


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

INVENTORY_PRODUCT_ADDED_V1 = "inventory.product.added.v1"
INVENTORY_PRODUCT_UPDATED_V1 = "inventory.product.updated.v1"
INVENTORY_PRODUCT_DELETED_V1 = "inventory.product.deleted.v1"
INVENTORY_PRODUCT_RESTORED_V1 = "inventory.product.restored.v1"
INVENTORY_CATEGORY_ADDED_V1 = "inventory.category.added.v1"
INVENTORY_CATEGORY_UPDATED_V1 = "inventory.category.updated.v1"
INVENTORY_CATEGORY_DELETED_V1 = "inventory.category.deleted.v1"
INVENTORY_CATEGORY_RESTORED_V1 = "inventory.category.restored.v1"

INVENTORY_EVENT_TYPES = (
    INVENTORY_PRODUCT_ADDED_V1,
    INVENTORY_PRODUCT_UPDATED_V1,
    INVENTORY_PRODUCT_DELETED_V1,
    INVENTORY_PRODUCT_RESTORED_V1,
    INVENTORY_CATEGORY_ADDED_V1,
    INVENTORY_CATEGORY_UPDATED_V1,
    INVENTORY_CATEGORY_DELETED_V1,
    INVENTORY_CATEGORY_RESTORED_V1,
)


# ══════════════════════════════════════════════════════════════
# COMMAND → EVENT MAPPING
# ══════════════════════════════════════════════════════════════

COMMAND_TO_EVENT_TYPE = {
    "inventory.product.add.request": INVENTORY_PRODUCT_ADDED_V1,
    "inventory.product.update.request": INVENTORY_PRODUCT_UPDATED_V1,
    "inventory.product.delete.request": INVENTORY_PRODUCT_DELETED_V1,
    "inventory.product.restore.request": INVENTORY_PRODUCT_RESTORED_V1,
    "inventory.category.add.request": INVENTORY_CATEGORY_ADDED_V1,
    "inventory.category.update.request": INVENTORY_CATEGORY_UPDATED_V1,
    "inventory.category.delete.request": INVENTORY_CATEGORY_DELETED_V1,
    "inventory.category.restore.request": INVENTORY_CATEGORY_RESTORED_V1,
}


def resolve_inventory_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_inventory_event_types(event_type_registry) -> None:
    for event_type in sorted(INVENTORY_EVENT_TYPES):
        event_type_registry.register(event_type)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def _product_from(command: Command) -> Product:
    p = command.payload
    return Product(
        id=p["product_id"],
        name=p["name"],
        stock=p["stock"],
        unit=p.get("unit", ""),
        cost_price=p["cost_price"],
        sale_price=p["sale_price"],
        low_stock_threshold=p["low_stock_threshold"],
        category_id=p.get("category_id"),
    )


def build_product_added_payload(command: Command, context: LedgerContext) -> dict:
    return {"record": _product_from(command).to_dict()}


def build_product_updated_payload(command: Command, context: LedgerContext) -> dict:
    return updated_payload(context, PRODUCTS, _product_from(command))


def build_product_deleted_payload(command: Command, context: LedgerContext) -> dict:
    return deleted_payload(context, PRODUCTS, command.payload["product_id"])


def build_category_added_payload(command: Command, context: LedgerContext) -> dict:
    category = Category(
        id=command.payload["category_id"], name=command.payload["name"],
    )
    return {"record": category.to_dict()}


def build_category_updated_payload(command: Command, context: LedgerContext) -> dict:
    category = Category(
        id=command.payload["category_id"], name=command.payload["name"],
    )
    return updated_payload(context, CATEGORIES, category)


def build_category_deleted_payload(command: Command, context: LedgerContext) -> dict:
    return deleted_payload(context, CATEGORIES, command.payload["category_id"])


build_product_restored_payload = build_restored_payload
build_category_restored_payload = build_restored_payload
