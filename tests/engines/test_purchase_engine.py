"""
Khata Purchase Engine — Tests
===============================
Stock-in: stock, weighted average cost, edits, deletion and undo.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.bootstrap import build_khata
from core.commands import ReasonCode
from core.config import KhataSettings
from core.primitives import PRODUCTS, STOCK_IN_LOGS
from core.time import FixedClock
from engines.purchase.commands import (
    PurchaseDeleteRequest,
    PurchaseRecordRequest,
    PurchaseUpdateRequest,
)
from engines.sales.commands import SaleRecordRequest

NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def _book():
    return build_khata(KhataSettings(), clock=FixedClock(NOW), auto_sync=False)


def sugar_purchase(**overrides):
    base = dict(
        product_id="1", supplier_id="1", quantity=10, unit_price=140,
        stock_in_id="p1",
    )
    base.update(overrides)
    return PurchaseRecordRequest(**base)


def product(book, product_id="1"):
    return book.data.get(PRODUCTS, product_id)


class TestPurchaseRequests:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValueError):
            sugar_purchase(quantity=0)

    def test_negative_price(self):
        with pytest.raises(ValueError):
            sugar_purchase(unit_price=-1)

    def test_supplier_required(self):
        with pytest.raises(ValueError):
            sugar_purchase(supplier_id="")

    def test_total_beyond_float_precision_rejected(self):
        with pytest.raises(ValueError, match="total_price"):
            sugar_purchase(quantity="3.333333", unit_price="3.333333333")


class TestRecordPurchase:
    def test_stock_and_average_cost(self):
        book = _book()
        result = book.execute(sugar_purchase())

        assert result.execution_result.event_type == "purchase.stock_in.recorded.v1"
        assert product(book).stock == Decimal("60")
        # (50 × 110 + 10 × 140) / 60
        assert product(book).cost_price == Decimal("115.00")

    def test_log_snapshot(self):
        book = _book()
        book.execute(sugar_purchase(bill_number="INV-9"))
        log = book.data.get(STOCK_IN_LOGS, "p1")

        assert log.total_price == Decimal("1400")
        assert log.product_name == "চিনি (Sugar)"
        assert log.product_unit == "Kg"
        assert log.bill_number == "INV-9"
        assert log.date == "2026-03-01"

    def test_unknown_supplier(self):
        book = _book()
        result = book.execute(sugar_purchase(supplier_id="9"))
        assert result.reason.code == ReasonCode.UNKNOWN_SUPPLIER
        assert product(book).stock == Decimal("50")

    def test_unknown_product(self):
        book = _book()
        result = book.execute(sugar_purchase(product_id="9"))
        assert result.reason.code == ReasonCode.UNKNOWN_PRODUCT


class TestUpdatePurchase:
    def test_old_quantity_removed_then_new_received(self):
        book = _book()
        book.execute(sugar_purchase())

        book.execute(PurchaseUpdateRequest(
            stock_in_id="p1", product_id="1", supplier_id="1",
            quantity=20, unit_price=140,
        ))

        assert product(book).stock == Decimal("70")
        # (50 × 115 + 20 × 140) / 70
        assert product(book).cost_price == Decimal("122.14")
        assert book.data.get(STOCK_IN_LOGS, "p1").total_price == Decimal("2800")

    def test_missing_bill_number_kept(self):
        book = _book()
        book.execute(sugar_purchase(bill_number="INV-9"))
        book.execute(PurchaseUpdateRequest(
            stock_in_id="p1", product_id="1", supplier_id="1",
            quantity=10, unit_price=150,
        ))
        assert book.data.get(STOCK_IN_LOGS, "p1").bill_number == "INV-9"

    def test_missing_purchase(self):
        book = _book()
        result = book.execute(PurchaseUpdateRequest(
            stock_in_id="p9", product_id="1", supplier_id="1",
            quantity=1, unit_price=1,
        ))
        assert result.reason.code == ReasonCode.RECORD_NOT_FOUND


class TestDeletePurchase:
    def test_delete_takes_stock_back_and_keeps_cost(self):
        book = _book()
        book.execute(sugar_purchase())
        book.execute(PurchaseDeleteRequest(stock_in_id="p1"))

        assert product(book).stock == Decimal("50")
        assert product(book).cost_price == Decimal("115.00")
        assert book.data.stock_in_logs == ()

    def test_delete_bounded_at_zero(self):
        book = _book()
        book.execute(sugar_purchase())
        book.execute(SaleRecordRequest(
            product_id="1", customer_id="1", quantity=55, unit_price=125,
        ))
        book.execute(PurchaseDeleteRequest(stock_in_id="p1"))

        assert product(book).stock == Decimal("0")

    def test_undo_restores_exact_stock(self):
        book = _book()
        book.execute(sugar_purchase())
        book.execute(SaleRecordRequest(
            product_id="1", customer_id="1", quantity=55, unit_price=125,
        ))
        book.execute(PurchaseDeleteRequest(stock_in_id="p1"))

        book.undo()

        assert product(book).stock == Decimal("5")
        assert book.data.contains(STOCK_IN_LOGS, "p1")
