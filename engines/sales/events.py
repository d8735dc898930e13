"""
Khata Sales Engine — Event Types and Payload Builders
=======================================================
Engine: Sales (stock-out)

recorded: stock −= quantity, due += due_added, log prepended
updated:  old line reverted (stock += old qty, due −= old due_added),
          new line applied
deleted:  stock += quantity, due −= due_added
"""

from __future__ import annotations

from core.commands.base import Command
from core.context import LedgerContext
from core.engines.payloads import build_restored_payload, deleted_payload
from core.primitives import PRODUCTS, STOCK_OUT_LOGS, StockOut, floor_at_zero
from projections.ledger import BalancePlan


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

SALES_SALE_RECORDED_V1 = "sales.sale.recorded.v1"
SALES_SALE_UPDATED_V1 = "sales.sale.updated.v1"
SALES_SALE_DELETED_V1 = "sales.sale.deleted.v1"
SALES_SALE_RESTORED_V1 = "sales.sale.restored.v1"

SALES_EVENT_TYPES = (
    SALES_SALE_RECORDED_V1,
    SALES_SALE_UPDATED_V1,
    SALES_SALE_DELETED_V1,
    SALES_SALE_RESTORED_V1,
)


# ══════════════════════════════════════════════════════════════
# COMMAND → EVENT MAPPING
# ══════════════════════════════════════════════════════════════

COMMAND_TO_EVENT_TYPE = {
    "sales.sale.record.request": SALES_SALE_RECORDED_V1,
    "sales.sale.update.request": SALES_SALE_UPDATED_V1,
    "sales.sale.delete.request": SALES_SALE_DELETED_V1,
    "sales.sale.restore.request": SALES_SALE_RESTORED_V1,
}


def resolve_sales_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)


def register_sales_event_types(event_type_registry) -> None:
    for event_type in sorted(SALES_EVENT_TYPES):
        event_type_registry.register(event_type)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def _plan(context: LedgerContext) -> BalancePlan:
    return BalancePlan(
        context.data, allow_advance=context.settings.allow_advance,
    )


def _sale_from(command: Command, context: LedgerContext, bill_number=None) -> StockOut:
    p = command.payload
    product = context.data.get(PRODUCTS, p["product_id"])
    due_added = p["due_added"]
    if not context.settings.allow_advance:
        due_added = floor_at_zero(due_added)
    return StockOut(
        id=p["sale_id"],
        bill_number=p.get("bill_number") or bill_number or "",
        product_id=p["product_id"],
        customer_id=p["customer_id"],
        quantity=p["quantity"],
        unit_price=p["unit_price"],
        date=p["date"],
        product_name=product.name if product else "",
        product_unit=product.unit if product else "",
        discount=p["discount"],
        total_price=p["total_price"],
        paid_amount=p["paid_amount"],
        due_added=due_added,
        is_sample=bool(p.get("is_sample", False)),
    )


def build_sale_recorded_payload(command: Command, context: LedgerContext) -> dict:
    record = _sale_from(command, context)
    plan = _plan(context)
    plan.remove_stock(record.product_id, record.quantity)
    plan.add_due(record.customer_id, record.due_added)
    return {"record": record.to_dict(), "effects": plan.to_effects()}


def build_sale_updated_payload(command: Command, context: LedgerContext) -> dict:
    previous = context.data.get(STOCK_OUT_LOGS, command.payload["sale_id"])
    record = _sale_from(command, context, bill_number=previous.bill_number)

    plan = _plan(context)
    plan.add_stock(previous.product_id, previous.quantity)
    plan.reduce_due(previous.customer_id, previous.due_added)
    plan.remove_stock(record.product_id, record.quantity)
    plan.add_due(record.customer_id, record.due_added)

    return {
        "previous": previous.to_dict(),
        "record": record.to_dict(),
        "effects": plan.to_effects(),
    }


def build_sale_deleted_payload(command: Command, context: LedgerContext) -> dict:
    payload = deleted_payload(context, STOCK_OUT_LOGS, command.payload["sale_id"])
    log = context.data.get(STOCK_OUT_LOGS, command.payload["sale_id"])

    plan = _plan(context)
    plan.add_stock(log.product_id, log.quantity)
    plan.reduce_due(log.customer_id, log.due_added)
    payload["effects"] = plan.to_effects()
    return payload


build_sale_restored_payload = build_restored_payload
