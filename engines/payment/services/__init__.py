"""
Khata Payment Engine — Application Service
=============================================
"""

from __future__ import annotations

from core.engines.service import LedgerEngineService
from engines.payment.commands import (
    PAYMENT_COLLECTION_DELETE_REQUEST,
    PAYMENT_COLLECTION_RESTORE_REQUEST,
    PAYMENT_COMMAND_TYPES,
)
from engines.payment.events import (
    build_payment_deleted_payload,
    build_payment_recorded_payload,
    build_payment_restored_payload,
    build_payment_updated_payload,
    register_payment_event_types,
    resolve_payment_event_type,
)


PAYLOAD_BUILDERS = {
    "payment.collection.record.request": build_payment_recorded_payload,
    "payment.collection.update.request": build_payment_updated_payload,
    "payment.collection.delete.request": build_payment_deleted_payload,
    "payment.collection.restore.request": build_payment_restored_payload,
}


class PaymentService(LedgerEngineService):
    engine_name = "payment"
    command_types = PAYMENT_COMMAND_TYPES
    payload_builders = PAYLOAD_BUILDERS
    restore_command_types = {
        PAYMENT_COLLECTION_DELETE_REQUEST: PAYMENT_COLLECTION_RESTORE_REQUEST,
    }

    def resolve_event_type(self, command_type: str):
        return resolve_payment_event_type(command_type)

    def register_event_types(self, event_type_registry) -> None:
        register_payment_event_types(event_type_registry)
