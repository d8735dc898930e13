"""
Khata Projections — Ledger Document
=====================================
The one read model every engine writes through.

Built from events:
- inventory.product.*.v1, inventory.category.*.v1
- customer.account.*.v1, supplier.account.*.v1
- purchase.stock_in.*.v1, sales.sale.*.v1, payment.collection.*.v1
- expense.entry.*.v1

where * is one of added | recorded | updated | deleted | restored.
Every payload carries the record in its wire form; transaction
events also carry balance effects (see projections.ledger.effects).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from core.primitives import (
    CATEGORIES,
    COLLECTION_TYPES,
    CUSTOMERS,
    LEDGER_ENTRIES,
    PAYMENT_LOGS,
    PRODUCTS,
    STOCK_IN_LOGS,
    STOCK_OUT_LOGS,
    SUPPLIERS,
    KhataData,
)
from projections.ledger.effects import (
    BalancePlan,
    apply_effects,
    invert_effects,
)

logger = logging.getLogger("khata.ledger")


EVENT_COLLECTIONS: Dict[str, str] = {
    "inventory.product": PRODUCTS,
    "inventory.category": CATEGORIES,
    "customer.account": CUSTOMERS,
    "supplier.account": SUPPLIERS,
    "purchase.stock_in": STOCK_IN_LOGS,
    "sales.sale": STOCK_OUT_LOGS,
    "payment.collection": PAYMENT_LOGS,
    "expense.entry": LEDGER_ENTRIES,
}

LEDGER_ACTIONS = frozenset({"added", "recorded", "updated", "deleted", "restored"})


def route_event(event_type: str) -> Optional[Tuple[str, str]]:
    """sales.sale.recorded.v1 → (stock_out_logs, recorded)."""
    parts = event_type.split(".")
    if len(parts) < 3:
        return None
    collection = EVENT_COLLECTIONS.get(".".join(parts[:2]))
    if collection is None or parts[2] not in LEDGER_ACTIONS:
        return None
    return collection, parts[2]


class LedgerProjectionStore:
    """
    In-memory ledger document.

    Transaction logs are kept newest first (recorded → prepend);
    master data and expenses keep insertion order (added → append).
    """

    projection_name = "khata_ledger"

    def __init__(self, data: Optional[KhataData] = None):
        self._data = data if data is not None else KhataData()
        self._applied_count = 0

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        route = route_event(event_type)
        if route is None:
            logger.debug(f"Ledger ignores event type '{event_type}'")
            return

        collection, action = route
        record = COLLECTION_TYPES[collection].from_dict(payload["record"])
        data = self._data

        if action == "added":
            data = data.append(collection, record)
        elif action == "recorded":
            data = data.prepend(collection, record)
        elif action == "updated":
            data = data.replace_record(collection, record)
        elif action == "deleted":
            data = data.remove(collection, record.id)
        elif action == "restored":
            data = data.insert(collection, payload.get("index", 0), record)

        self._data = apply_effects(data, payload.get("effects"))
        self._applied_count += 1

    def hydrate(self, data: KhataData) -> None:
        """Replace the whole document (cloud or cache load)."""
        logger.info(
            f"Ledger hydrated with {data.record_count} records, "
            f"replacing {self._applied_count} applied events"
        )
        self._data = data
        self._applied_count = 0

    @property
    def data(self) -> KhataData:
        return self._data

    @property
    def applied_count(self) -> int:
        """Events applied since construction or the last hydrate()."""
        return self._applied_count


__all__ = [
    "BalancePlan",
    "EVENT_COLLECTIONS",
    "LEDGER_ACTIONS",
    "LedgerProjectionStore",
    "apply_effects",
    "invert_effects",
    "route_event",
]
