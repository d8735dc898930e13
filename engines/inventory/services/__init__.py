"""
Khata Inventory Engine — Application Service
===============================================
Orchestrates product and category commands → events → ledger.
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.inventory.commands import (
    INVENTORY_CATEGORY_DELETE_REQUEST,
    INVENTORY_CATEGORY_RESTORE_REQUEST,
    INVENTORY_COMMAND_TYPES,
    INVENTORY_PRODUCT_DELETE_REQUEST,
    INVENTORY_PRODUCT_RESTORE_REQUEST,
)
from engines.inventory.events import (
    build_category_added_payload,
    build_category_deleted_payload,
    build_category_restored_payload,
    build_category_updated_payload,
    build_product_added_payload,
    build_product_deleted_payload,
    build_product_restored_payload,
    build_product_updated_payload,
    register_inventory_event_types,
    resolve_inventory_event_type,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD DISPATCHER
# ══════════════════════════════════════════════════════════════

PAYLOAD_BUILDERS = {
    "inventory.product.add.request": build_product_added_payload,
    "inventory.product.update.request": build_product_updated_payload,
    "inventory.product.delete.request": build_product_deleted_payload,
    "inventory.product.restore.request": build_product_restored_payload,
    "inventory.category.add.request": build_category_added_payload,
    "inventory.category.update.request": build_category_updated_payload,
    "inventory.category.delete.request": build_category_deleted_payload,
    "inventory.category.restore.request": build_category_restored_payload,
}


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class InventoryService(LedgerEngineService):
    """Inventory Engine application service (products and categories)."""

    engine_name = "inventory"
    command_types = INVENTORY_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        INVENTORY_PRODUCT_DELETE_REQUEST: INVENTORY_PRODUCT_RESTORE_REQUEST,
        INVENTORY_CATEGORY_DELETE_REQUEST: INVENTORY_CATEGORY_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_inventory_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_inventory_event_types(event_type_registry)
