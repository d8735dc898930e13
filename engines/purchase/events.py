"""
Khata Purchase Engine — Event Types and Payload Builders
==========================================================
Engine: Purchase (stock-in)

recorded: stock += quantity, cost re-averaged, log prepended
updated:  old quantity taken back (bounded at zero, cost kept),
          then the edited line received with a fresh average
deleted:  stock −= quantity (bounded at zero)
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import build_restored_payload, deleted_payload
from core.primitives import PRODUCTS, STOCK_IN_LOGS, StockIn
from projections.ledger import BalancePlan


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PURCHASE_STOCK_IN_RECORDED_V1 = "purchase.stock_in.recorded.v1"
PURCHASE_STOCK_IN_UPDATED_V1 = "purchase.stock_in.updated.v1"
PURCHASE_STOCK_IN_DELETED_V1 = "purchase.stock_in.deleted.v1"
PURCHASE_STOCK_IN_RESTORED_V1 = "purchase.stock_in.restored.v1"

PURCHASE_EVENT_TYPES = (
    PURCHASE_STOCK_IN_RECORDED_V1,
    PURCHASE_STOCK_IN_UPDATED_V1,
    PURCHASE_STOCK_IN_DELETED_V1,
    PURCHASE_STOCK_IN_RESTORED_V1,
)


# ══════════════════════════════════════════════════════════════
# COMMAND → EVENT MAPPING
# ══════════════════════════════════════════════════════════════

COMMAND_TO_EVENT_TYPE = {
    "purchase.stock_in.record.request": PURCHASE_STOCK_IN_RECORDED_V1,
    "purchase.stock_in.update.request": PURCHASE_STOCK_IN_UPDATED_V1,
    "purchase.stock_in.delete.request": PURCHASE_STOCK_IN_DELETED_V1,
    "purchase.stock_in.restore.request": PURCHASE_STOCK_IN_RESTORED_V1,
}


def resolve_purchase_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_purchase_event_types(event_type_registry) -> None:
    for event_type in sorted(PURCHASE_EVENT_TYPES):
        event_type_registry.register(event_type)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def _plan(context: LedgerContext) -> BalancePlan:
    return BalancePlan(
        context.data, allow_advance=context.settings.allow_advance,
    )


def _stock_in_from(command: Command, context: LedgerContext, bill_number=None) -> StockIn:
    p = command.payload
    product = context.data.get(PRODUCTS, p["product_id"])
    return StockIn(
        id=p["stock_in_id"],
        product_id=p["product_id"],
        supplier_id=p["supplier_id"],
        quantity=p["quantity"],
        unit_price=p["unit_price"],
        date=p["date"],
        product_name=product.name if product else "",
        product_unit=product.unit if product else "",
        total_price=p["quantity"] * p["unit_price"],
        bill_number=p.get("bill_number") or bill_number,
    )


def build_stock_in_recorded_payload(command: Command, context: LedgerContext) -> dict:
    record = _stock_in_from(command, context)
    plan = _plan(context)
    plan.receive(record.product_id, record.quantity, record.unit_price)
    return {"record": record.to_dict(), "effects": plan.to_effects()}


def build_stock_in_updated_payload(command: Command, context: LedgerContext) -> dict:
    previous = context.data.get(STOCK_IN_LOGS, command.payload["stock_in_id"])
    record = _stock_in_from(command, context, bill_number=previous.bill_number)

    plan = _plan(context)
    plan.remove_stock(previous.product_id, previous.quantity, floor=True)
    plan.receive(record.product_id, record.quantity, record.unit_price)

    return {
        "previous": previous.to_dict(),
        "record": record.to_dict(),
        "effects": plan.to_effects(),
    }


def build_stock_in_deleted_payload(command: Command, context: LedgerContext) -> dict:
    payload = deleted_payload(context, STOCK_IN_LOGS, command.payload["stock_in_id"])
    log = context.data.get(STOCK_IN_LOGS, command.payload["stock_in_id"])

    plan = _plan(context)
    plan.remove_stock(log.product_id, log.quantity, floor=True)
    payload["effects"] = plan.to_effects()
    return payload


build_stock_in_restored_payload = build_restored_payload
