"""
Khata Purchase Engine — Application Service
==============================================
Orchestrates stock-in commands → events → ledger.
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.purchase.commands import (
    PURCHASE_COMMAND_TYPES,
    PURCHASE_STOCK_IN_DELETE_REQUEST,
    PURCHASE_STOCK_IN_RESTORE_REQUEST,
)
from engines.purchase.events import (
    build_stock_in_deleted_payload,
    build_stock_in_recorded_payload,
    build_stock_in_restored_payload,
    build_stock_in_updated_payload,
    register_purchase_event_types,
    resolve_purchase_event_type,
)


PAYLOAD_BUILDERS = {
    "purchase.stock_in.record.request": build_stock_in_recorded_payload,
    "purchase.stock_in.update.request": build_stock_in_updated_payload,
    "purchase.stock_in.delete.request": build_stock_in_deleted_payload,
    "purchase.stock_in.restore.request": build_stock_in_restored_payload,
}


class PurchaseService(LedgerEngineService):
    """Purchase Engine application service."""

    engine_name = "purchase"
    command_types = PURCHASE_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        PURCHASE_STOCK_IN_DELETE_REQUEST: PURCHASE_STOCK_IN_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_purchase_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_purchase_event_types(event_type_registry)
