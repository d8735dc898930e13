"""
Khata Supplier Engine — Service
=================================
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.supplier.commands import (
    SUPPLIER_ACCOUNT_DELETE_REQUEST,
    SUPPLIER_ACCOUNT_RESTORE_REQUEST,
    SUPPLIER_COMMAND_TYPES,
)
from engines.supplier.events import (
    build_supplier_added_payload,
    build_supplier_deleted_payload,
    build_supplier_restored_payload,
    build_supplier_updated_payload,
    register_supplier_event_types,
    resolve_supplier_event_type,
)


PAYLOAD_BUILDERS = {
    "supplier.account.add.request": build_supplier_added_payload,
    "supplier.account.update.request": build_supplier_updated_payload,
    "supplier.account.delete.request": build_supplier_deleted_payload,
    "supplier.account.restore.request": build_supplier_restored_payload,
}


class SupplierService(LedgerEngineService):
    engine_name = "supplier"
    command_types = SUPPLIER_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        SUPPLIER_ACCOUNT_DELETE_REQUEST: SUPPLIER_ACCOUNT_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_supplier_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_supplier_event_types(event_type_registry)
