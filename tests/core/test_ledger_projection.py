"""
Khata Ledger Projection — Tests
=================================
Event routing, record placement and balance effects.
"""

from decimal import Decimal

import pytest

from core.primitives import (
    CUSTOMERS,
    PRODUCTS,
    STOCK_OUT_LOGS,
    initial_data,
)
from projections.ledger import (
    BalancePlan,
    LedgerProjectionStore,
    apply_effects,
    invert_effects,
    route_event,
)


def sale_record(sale_id="s1", quantity=2):
    return {
        "id": sale_id, "billNumber": "BILL-000001", "productId": "1",
        "customerId": "1", "quantity": quantity, "unitPrice": 125,
        "date": "2026-03-01", "totalPrice": 125 * quantity,
    }


class TestRouting:
    def test_known_event(self):
        assert route_event("sales.sale.recorded.v1") == (STOCK_OUT_LOGS, "recorded")

    def test_unknown_events(self):
        assert route_event("hotel.booking.created.v1") is None
        assert route_event("sales.sale.refunded.v1") is None
        assert route_event("sales") is None


class TestLedgerProjectionStore:
    def test_recorded_prepends(self):
        store = LedgerProjectionStore(initial_data())
        store.apply("sales.sale.recorded.v1", {"record": sale_record("s1")})
        store.apply("sales.sale.recorded.v1", {"record": sale_record("s2")})
        assert [s.id for s in store.data.stock_out_logs] == ["s2", "s1"]

    def test_added_appends(self):
        store = LedgerProjectionStore(initial_data())
        store.apply(
            "inventory.product.added.v1",
            {"record": {"id": "3", "name": "Salt"}},
        )
        assert [p.id for p in store.data.products] == ["1", "2", "3"]

    def test_updated_replaces_in_place(self):
        store = LedgerProjectionStore(initial_data())
        store.apply(
            "customer.account.updated.v1",
            {"record": {"id": "1", "name": "Rahim", "dueAmount": 500}},
        )
        assert store.data.customers[0].name == "Rahim"

    def test_deleted_then_restored_at_index(self):
        store = LedgerProjectionStore(initial_data())
        record = store.data.get(PRODUCTS, "1").to_dict()
        store.apply("inventory.product.deleted.v1", {"record": record})
        assert not store.data.contains(PRODUCTS, "1")

        store.apply("inventory.product.restored.v1", {"record": record, "index": 0})
        assert store.data.index_of(PRODUCTS, "1") == 0

    def test_effects_applied_with_event(self):
        store = LedgerProjectionStore(initial_data())
        store.apply("sales.sale.recorded.v1", {
            "record": sale_record(),
            "effects": {
                "stock": [{"product_id": "1", "delta": Decimal("-2")}],
                "due": [{"customer_id": "1", "delta": Decimal("250")}],
            },
        })
        assert store.data.get(PRODUCTS, "1").stock == Decimal("48")
        assert store.data.get(CUSTOMERS, "1").due_amount == Decimal("750")

    def test_unrouted_event_ignored(self):
        store = LedgerProjectionStore(initial_data())
        store.apply("hotel.booking.created.v1", {"record": {"id": "x"}})
        assert store.applied_count == 0
        assert store.data == initial_data()

    def test_hydrate_replaces_document(self):
        store = LedgerProjectionStore()
        store.hydrate(initial_data())
        assert store.data.record_count == 6

    def test_applied_events_are_counted_not_kept(self):
        store = LedgerProjectionStore(initial_data())
        for n in range(500):
            record = sale_record(f"s{n}")
            store.apply("sales.sale.recorded.v1", {"record": record})
            store.apply("sales.sale.deleted.v1", {"record": record})
        assert store.applied_count == 1000
        assert store.data.stock_out_logs == ()

        store.hydrate(initial_data())
        assert store.applied_count == 0


class TestBalancePlan:
    def test_sequential_changes_see_each_other(self):
        plan = BalancePlan(initial_data())
        plan.add_stock("1", Decimal("5"))
        plan.remove_stock("1", Decimal("2"))
        assert plan.stock_of("1") == Decimal("53")
        assert plan.to_effects()["stock"] == [{"product_id": "1", "delta": Decimal("3")}]

    def test_floored_removal_stops_at_zero(self):
        plan = BalancePlan(initial_data())
        applied = plan.remove_stock("1", Decimal("80"), floor=True)
        assert applied == Decimal("-50")
        assert plan.stock_of("1") == Decimal("0")

    def test_unfloored_removal_goes_negative(self):
        plan = BalancePlan(initial_data())
        plan.remove_stock("1", Decimal("80"))
        assert plan.stock_of("1") == Decimal("-30")

    def test_receive_reaverages_cost(self):
        plan = BalancePlan(initial_data())
        assert plan.receive("1", Decimal("10"), Decimal("140")) == Decimal("115.00")
        assert plan.stock_of("1") == Decimal("60")

    def test_missing_records_are_skipped(self):
        plan = BalancePlan(initial_data())
        assert plan.add_stock("missing", Decimal("1")) == Decimal("0")
        assert plan.reduce_due("missing", Decimal("1")) == Decimal("0")
        assert plan.receive("missing", Decimal("1"), Decimal("1")) is None
        assert plan.to_effects() == {"stock": [], "due": [], "cost": []}

    def test_reduce_due_allows_advance(self):
        plan = BalancePlan(initial_data())
        plan.reduce_due("1", Decimal("700"))
        assert plan.due_of("1") == Decimal("-200")

    def test_reduce_due_floored_without_advance(self):
        plan = BalancePlan(initial_data(), allow_advance=False)
        assert plan.reduce_due("1", Decimal("700")) == Decimal("-500")
        assert plan.due_of("1") == Decimal("0")


class TestEffects:
    def test_invert_cancels(self):
        effects = {
            "stock": [{"product_id": "1", "delta": Decimal("-2")}],
            "due": [{"customer_id": "1", "delta": Decimal("250")}],
            "cost": [],
        }
        data = initial_data()
        round_trip = apply_effects(apply_effects(data, effects), invert_effects(effects))
        assert round_trip == data

    def test_cost_changes_not_invertible(self):
        with pytest.raises(ValueError):
            invert_effects({"cost": [{"product_id": "1", "cost_price": 1}]})

    def test_no_effects_is_identity(self):
        data = initial_data()
        assert apply_effects(data, None) is data
