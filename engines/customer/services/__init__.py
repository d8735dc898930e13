"""
Khata Customer Engine — Service
=================================
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.customer.commands import (
    CUSTOMER_ACCOUNT_DELETE_REQUEST,
    CUSTOMER_ACCOUNT_RESTORE_REQUEST,
    CUSTOMER_COMMAND_TYPES,
)
from engines.customer.events import (
    build_customer_added_payload,
    build_customer_deleted_payload,
    build_customer_restored_payload,
    build_customer_updated_payload,
    register_customer_event_types,
    resolve_customer_event_type,
)


PAYLOAD_BUILDERS = {
    "customer.account.add.request": build_customer_added_payload,
    "customer.account.update.request": build_customer_updated_payload,
    "customer.account.delete.request": build_customer_deleted_payload,
    "customer.account.restore.request": build_customer_restored_payload,
}


class CustomerService(LedgerEngineService):
    engine_name = "customer"
    command_types = CUSTOMER_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        CUSTOMER_ACCOUNT_DELETE_REQUEST: CUSTOMER_ACCOUNT_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_customer_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_customer_event_types(event_type_registry)
