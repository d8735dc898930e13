"""
Khata Customer Engine — Events
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
from core.primitives import CUSTOMERS, Customer


CUSTOMER_ACCOUNT_ADDED_V1 = "customer.account.added.v1"
CUSTOMER_ACCOUNT_UPDATED_V1 = "customer.account.updated.v1"
CUSTOMER_ACCOUNT_DELETED_V1 = "customer.account.deleted.v1"
CUSTOMER_ACCOUNT_RESTORED_V1 = "customer.account.restored.v1"

CUSTOMER_EVENT_TYPES = (
    CUSTOMER_ACCOUNT_ADDED_V1,
    CUSTOMER_ACCOUNT_UPDATED_V1,
    CUSTOMER_ACCOUNT_DELETED_V1,
    CUSTOMER_ACCOUNT_RESTORED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "customer.account.add.request": CUSTOMER_ACCOUNT_ADDED_V1,
    "customer.account.update.request": CUSTOMER_ACCOUNT_UPDATED_V1,
    "customer.account.delete.request": CUSTOMER_ACCOUNT_DELETED_V1,
    "customer.account.restore.request": CUSTOMER_ACCOUNT_RESTORED_V1,
}


def resolve_customer_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_customer_event_types(event_type_registry) -> None:
    for event_type in sorted(CUSTOMER_EVENT_TYPES):
        event_type_registry.register(event_type)


def _customer_from(command: Command) -> Customer:
    p = command.payload
    return Customer(
        id=p["customer_id"],
        name=p["name"],
        phone=p.get("phone", ""),
        due_amount=p["due_amount"],
    )


def build_customer_added_payload(command: Command, context: LedgerContext) -> dict:
    return {"record": _customer_from(command).to_dict()}


def build_customer_updated_payload(command: Command, context: LedgerContext) -> dict:
    return updated_payload(context, CUSTOMERS, _customer_from(command))


def build_customer_deleted_payload(command: Command, context: LedgerContext) -> dict:
    return deleted_payload(context, CUSTOMERS, command.payload["customer_id"])


build_customer_restored_payload = build_restored_payload
