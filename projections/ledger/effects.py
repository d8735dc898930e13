"""
Khata Projections — Balance Effects
=====================================
Derived balances (product stock, product cost, customer due) move
only through explicit effects carried in event payloads:

    "effects": {
        "stock": [{"product_id": "1", "delta": Decimal("-2")}],
        "due":   [{"customer_id": "1", "delta": Decimal("250")}],
        "cost":  [{"product_id": "1", "cost_price": Decimal("112.5")}],
    }

Engines plan effects with BalancePlan against the current document;
the ledger projection applies them with apply_effects(). Because the
deltas are the amounts actually applied (after any clamping), the
inverse of a deletion's effects restores the exact balances.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Optional

from core.primitives import (
    CUSTOMERS,
    PRODUCTS,
    ZERO,
    KhataData,
    to_decimal,
    weighted_average_cost,
)


def _bounded(current: Decimal, target: Decimal) -> Decimal:
    """A reduction never takes a balance below zero, or further below it."""
    if target >= ZERO or target >= current:
        return target
    return min(current, ZERO)


class BalancePlan:
    """
    Accumulate balance changes against a document without applying them.

    Later calls see the effect of earlier ones, so "revert old, apply
    new" sequences compute against the intermediate state.
    """

    def __init__(self, data: KhataData, *, allow_advance: bool = True):
        self._data = data
        self._allow_advance = allow_advance
        self._stock: Dict[str, Decimal] = {}
        self._due: Dict[str, Decimal] = {}
        self._cost: Dict[str, Decimal] = {}

    # ── Current (planned) values ──────────────────────────────

    def stock_of(self, product_id: str) -> Optional[Decimal]:
        product = self._data.get(PRODUCTS, product_id)
        if product is None:
            return None
        return product.stock + self._stock.get(product_id, ZERO)

    def cost_of(self, product_id: str) -> Optional[Decimal]:
        product = self._data.get(PRODUCTS, product_id)
        if product is None:
            return None
        return self._cost.get(product_id, product.cost_price)

    def due_of(self, customer_id: str) -> Optional[Decimal]:
        customer = self._data.get(CUSTOMERS, customer_id)
        if customer is None:
            return None
        return customer.due_amount + self._due.get(customer_id, ZERO)

    # ── Stock ─────────────────────────────────────────────────

    def add_stock(self, product_id: str, quantity: Decimal) -> Decimal:
        current = self.stock_of(product_id)
        if current is None:
            return ZERO
        self._stock[product_id] = self._stock.get(product_id, ZERO) + quantity
        return quantity

    def remove_stock(
        self, product_id: str, quantity: Decimal, *, floor: bool = False,
    ) -> Decimal:
        """Take stock out; with ``floor`` the result is bounded at zero."""
        current = self.stock_of(product_id)
        if current is None:
            return ZERO
        target = current - quantity
        if floor:
            target = _bounded(current, target)
        return self.add_stock(product_id, target - current)

    def receive(
        self, product_id: str, quantity: Decimal, unit_price: Decimal,
    ) -> Optional[Decimal]:
        """Add purchased stock and re-average the unit cost."""
        stock = self.stock_of(product_id)
        if stock is None:
            return None
        cost = weighted_average_cost(
            stock, self.cost_of(product_id), quantity, unit_price,
        )
        self._cost[product_id] = cost
        self.add_stock(product_id, quantity)
        return cost

    # ── Due ───────────────────────────────────────────────────

    def add_due(self, customer_id: str, amount: Decimal) -> Decimal:
        current = self.due_of(customer_id)
        if current is None:
            return ZERO
        self._due[customer_id] = self._due.get(customer_id, ZERO) + amount
        return amount

    def reduce_due(self, customer_id: str, amount: Decimal) -> Decimal:
        """
        Take ``amount`` off a customer's due.

        Without advances the due is bounded at zero.
        """
        current = self.due_of(customer_id)
        if current is None:
            return ZERO
        target = current - amount
        if not self._allow_advance:
            target = _bounded(current, target)
        return self.add_due(customer_id, target - current)

    # ── Output ────────────────────────────────────────────────

    def to_effects(self) -> dict:
        return {
            "stock": [
                {"product_id": pid, "delta": delta}
                for pid, delta in self._stock.items()
                if delta != ZERO
            ],
            "due": [
                {"customer_id": cid, "delta": delta}
                for cid, delta in self._due.items()
                if delta != ZERO
            ],
            "cost": [
                {"product_id": pid, "cost_price": cost}
                for pid, cost in self._cost.items()
            ],
        }


# ══════════════════════════════════════════════════════════════
# APPLY / INVERT
# ══════════════════════════════════════════════════════════════

def apply_effects(data: KhataData, effects: Optional[dict]) -> KhataData:
    if not effects:
        return data

    for change in effects.get("stock", ()):
        delta = to_decimal(change["delta"])
        data = data.map_record(
            PRODUCTS, change["product_id"],
            lambda p, delta=delta: replace(p, stock=p.stock + delta),
        )

    for change in effects.get("cost", ()):
        cost = to_decimal(change["cost_price"])
        data = data.map_record(
            PRODUCTS, change["product_id"],
            lambda p, cost=cost: replace(p, cost_price=cost),
        )

    for change in effects.get("due", ()):
        delta = to_decimal(change["delta"])
        data = data.map_record(
            CUSTOMERS, change["customer_id"],
            lambda c, delta=delta: replace(c, due_amount=c.due_amount + delta),
        )

    return data


def invert_effects(effects: Optional[dict]) -> dict:
    """
    Effects that cancel ``effects``.

    Cost changes cannot be inverted; deletions never carry them.
    """
    effects = effects or {}
    if effects.get("cost"):
        raise ValueError("Cost changes cannot be inverted.")
    return {
        "stock": [
            {"product_id": c["product_id"], "delta": -to_decimal(c["delta"])}
            for c in effects.get("stock", ())
        ],
        "due": [
            {"customer_id": c["customer_id"], "delta": -to_decimal(c["delta"])}
            for c in effects.get("due", ())
        ],
        "cost": [],
    }
