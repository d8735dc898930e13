"""
Khata Supplier Engine — Events
================================
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import (
    build_restored_payload,
    deleted_payload,
    updated_payload,
)
from core.primitives import SUPPLIERS, Supplier


SUPPLIER_ACCOUNT_ADDED_V1 = "supplier.account.added.v1"
SUPPLIER_ACCOUNT_UPDATED_V1 = "supplier.account.updated.v1"
SUPPLIER_ACCOUNT_DELETED_V1 = "supplier.account.deleted.v1"
SUPPLIER_ACCOUNT_RESTORED_V1 = "supplier.account.restored.v1"

SUPPLIER_EVENT_TYPES = (
    SUPPLIER_ACCOUNT_ADDED_V1,
    SUPPLIER_ACCOUNT_UPDATED_V1,
    SUPPLIER_ACCOUNT_DELETED_V1,
    SUPPLIER_ACCOUNT_RESTORED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "supplier.account.add.request": SUPPLIER_ACCOUNT_ADDED_V1,
    "supplier.account.update.request": SUPPLIER_ACCOUNT_UPDATED_V1,
    "supplier.account.delete.request": SUPPLIER_ACCOUNT_DELETED_V1,
    "supplier.account.restore.request": SUPPLIER_ACCOUNT_RESTORED_V1,
}


def resolve_supplier_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_supplier_event_types(event_type_registry) -> None:
    for event_type in sorted(SUPPLIER_EVENT_TYPES):
        event_type_registry.register(event_type)


def _supplier_from(command: Command) -> Supplier:
    p = command.payload
    return Supplier(id=p["supplier_id"], name=p["name"], phone=p.get("phone", ""))


def build_supplier_added_payload(command: Command, context: LedgerContext) -> dict:
    return {"record": _supplier_from(command).to_dict()}


def build_supplier_updated_payload(command: Command, context: LedgerContext) -> dict:
    return updated_payload(context, SUPPLIERS, _supplier_from(command))


def build_supplier_deleted_payload(command: Command, context: LedgerContext) -> dict:
    return deleted_payload(context, SUPPLIERS, command.payload["supplier_id"])


build_supplier_restored_payload = build_restored_payload
