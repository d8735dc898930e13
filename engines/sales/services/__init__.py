"""
Khata Sales Engine — Application Service
===========================================
Orchestrates sale commands → events → ledger.
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.sales.commands import (
    SALES_COMMAND_TYPES,
    SALES_SALE_DELETE_REQUEST,
    SALES_SALE_RESTORE_REQUEST,
)
from engines.sales.events import (
    build_sale_deleted_payload,
    build_sale_recorded_payload,
    build_sale_restored_payload,
    build_sale_updated_payload,
    register_sales_event_types,
    resolve_sales_event_type,
)


PAYLOAD_BUILDERS = {
    "sales.sale.record.request": build_sale_recorded_payload,
    "sales.sale.update.request": build_sale_updated_payload,
    "sales.sale.delete.request": build_sale_deleted_payload,
    "sales.sale.restore.request": build_sale_restored_payload,
}


class SalesService(LedgerEngineService):
    """Sales Engine application service."""

    engine_name = "sales"
    command_types = SALES_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        SALES_SALE_DELETE_REQUEST: SALES_SALE_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_sales_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_sales_event_types(event_type_registry)
