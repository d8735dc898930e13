"""
Khata Bootstrap — Invariant Tests
===================================
The ledger must refuse to open on a broken registry or document.
"""

from decimal import Decimal

import pytest

from core.bootstrap import (
    SystemBootstrapError,
    check_ledger_invariants,
    check_registry_sanity,
    find_ledger_violations,
    run_bootstrap_checks,
)
from core.engines import EventTypeRegistry
from core.primitives import (
    PAYMENT_LOGS,
    PRODUCTS,
    STOCK_IN_LOGS,
    STOCK_OUT_LOGS,
    PaymentLog,
    StockIn,
    StockOut,
    initial_data,
)


def sale(**overrides):
    base = dict(
        id="s1", bill_number="BILL-000001", product_id="1", customer_id="1",
        quantity=2, unit_price=125, discount=10, total_price=240, date="2026-03-01",
    )
    base.update(overrides)
    return StockOut(**base)


class TestRegistrySanity:
    def test_unlocked_registry_fails(self):
        with pytest.raises(SystemBootstrapError, match="REGISTRY_LOCKED"):
            check_registry_sanity(EventTypeRegistry())

    def test_unroutable_event_type_fails(self):
        registry = EventTypeRegistry()
        registry.register("sales.sale.recorded.v1")
        registry.register("sales.sale.refunded.v1")
        registry.lock()

        with pytest.raises(SystemBootstrapError) as exc_info:
            check_registry_sanity(registry)
        assert exc_info.value.invariant == "REGISTRY_ROUTING"
        assert "sales.sale.refunded.v1" in exc_info.value.detail

    def test_routed_registry_passes(self):
        registry = EventTypeRegistry()
        registry.register("sales.sale.recorded.v1")
        registry.lock()
        check_registry_sanity(registry)


class TestLedgerInvariants:
    def test_seed_is_consistent(self):
        assert find_ledger_violations(initial_data()) == []

    def test_consistent_sale(self):
        data = initial_data().prepend(STOCK_OUT_LOGS, sale())
        check_ledger_invariants(data)

    def test_wrong_sale_total(self):
        data = initial_data().prepend(STOCK_OUT_LOGS, sale(total_price=250))
        problems = find_ledger_violations(data)
        assert len(problems) == 1
        assert problems[0].startswith("stock_out_logs: 's1'")

    def test_wrong_purchase_total(self):
        purchase = StockIn(
            id="p1", product_id="1", supplier_id="1", quantity=10,
            unit_price=Decimal("110.5"), total_price=1100, date="2026-03-01",
        )
        data = initial_data().prepend(STOCK_IN_LOGS, purchase)
        with pytest.raises(SystemBootstrapError, match="LEDGER_ARITHMETIC"):
            check_ledger_invariants(data)

    def test_duplicate_ids(self):
        product = initial_data().get(PRODUCTS, "1")
        data = initial_data().append(PRODUCTS, product)
        assert find_ledger_violations(data) == ["products: duplicate id '1'"]

    def test_negative_payment(self):
        payment = PaymentLog(id="pay1", customer_id="1", amount=-5, date="2026-03-01")
        data = initial_data().prepend(PAYMENT_LOGS, payment)
        assert find_ledger_violations(data) == ["payment_logs: 'pay1' has a negative amount"]


class TestRunBootstrapChecks:
    def test_all_checks_run(self):
        registry = EventTypeRegistry()
        registry.register("expense.entry.added.v1")
        registry.lock()
        run_bootstrap_checks(event_type_registry=registry, data=initial_data())

    def test_error_message_names_invariant(self):
        error = SystemBootstrapError(invariant="X", detail="broken")
        assert str(error) == "KHATA BOOTSTRAP FAILURE: X: broken"
