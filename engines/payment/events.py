"""
Khata Payment Engine — Event Types and Payload Builders
=========================================================
Engine: Payment (customer collections)

recorded: due −= amount + discount, log prepended
updated:  old settlement added back, new one taken off
deleted:  due += amount + discount
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import build_restored_payload, deleted_payload
from core.primitives import PAYMENT_LOGS, PaymentLog
from engines.payment.commands import DEFAULT_PAYMENT_NOTES
from projections.ledger import BalancePlan


PAYMENT_COLLECTION_RECORDED_V1 = "payment.collection.recorded.v1"
PAYMENT_COLLECTION_UPDATED_V1 = "payment.collection.updated.v1"
PAYMENT_COLLECTION_DELETED_V1 = "payment.collection.deleted.v1"
PAYMENT_COLLECTION_RESTORED_V1 = "payment.collection.restored.v1"

PAYMENT_EVENT_TYPES = (
    PAYMENT_COLLECTION_RECORDED_V1,
    PAYMENT_COLLECTION_UPDATED_V1,
    PAYMENT_COLLECTION_DELETED_V1,
    PAYMENT_COLLECTION_RESTORED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "payment.collection.record.request": PAYMENT_COLLECTION_RECORDED_V1,
    "payment.collection.update.request": PAYMENT_COLLECTION_UPDATED_V1,
    "payment.collection.delete.request": PAYMENT_COLLECTION_DELETED_V1,
    "payment.collection.restore.request": PAYMENT_COLLECTION_RESTORED_V1,
}


def resolve_payment_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_payment_event_types(event_type_registry) -> None:
    for event_type in sorted(PAYMENT_EVENT_TYPES):
        event_type_registry.register(event_type)


def default_payment_note(language: str) -> str:
    return DEFAULT_PAYMENT_NOTES.get(language, DEFAULT_PAYMENT_NOTES["en"])


def _plan(context: LedgerContext) -> BalancePlan:
    return BalancePlan(
        context.data, allow_advance=context.settings.allow_advance,
    )


def _payment_from(command: Command, note: str) -> PaymentLog:
    p = command.payload
    return PaymentLog(
        id=p["payment_id"],
        customer_id=p["customer_id"],
        amount=p["amount"],
        discount=p["discount"],
        date=p["date"],
        note=p.get("note") or note,
    )


def build_payment_recorded_payload(command: Command, context: LedgerContext) -> dict:
    record = _payment_from(command, default_payment_note(context.settings.language))
    plan = _plan(context)
    plan.reduce_due(record.customer_id, record.settled)
    return {"record": record.to_dict(), "effects": plan.to_effects()}


def build_payment_updated_payload(command: Command, context: LedgerContext) -> dict:
    previous = context.data.get(PAYMENT_LOGS, command.payload["payment_id"])
    record = _payment_from(command, previous.note)

    plan = _plan(context)
    plan.add_due(previous.customer_id, previous.settled)
    plan.reduce_due(record.customer_id, record.settled)

    return {
        "previous": previous.to_dict(),
        "record": record.to_dict(),
        "effects": plan.to_effects(),
    }


def build_payment_deleted_payload(command: Command, context: LedgerContext) -> dict:
    payload = deleted_payload(context, PAYMENT_LOGS, command.payload["payment_id"])
    log = context.data.get(PAYMENT_LOGS, command.payload["payment_id"])

    plan = _plan(context)
    plan.add_due(log.customer_id, log.settled)
    payload["effects"] = plan.to_effects()
    return payload


build_payment_restored_payload = build_restored_payload
