"""
Khata Book — Integration Tests
================================
The wired ledger end to end: bookkeeping laws across engines,
undo, loading, and debounced sync.

Ledger laws:
1. Recording a sale lowers stock by quantity and raises due by due-added
2. Deleting a sale reverses both exactly
3. Editing a sale moves balances by the difference only
4. A payment lowers due by amount + discount
5. Undo restores the exact document from before the deletion
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.bootstrap import KhataBook, SystemBootstrapError, build_khata
from core.config import KhataSettings
from core.context import ActorContext
from core.primitives import (
    CUSTOMERS,
    PRODUCTS,
    STOCK_OUT_LOGS,
    KhataData,
    StockOut,
    initial_data,
)
from core.sync import (
    SOURCE_REMOTE,
    SOURCE_SEEDED,
    InMemoryRemoteStore,
    MemoryCache,
)
from core.time import FixedClock
from engines.customer.commands import CustomerDeleteRequest
from engines.expense.commands import ExpenseAddRequest, ExpenseDeleteRequest
from engines.inventory.commands import ProductDeleteRequest
from engines.payment.commands import PaymentDeleteRequest, PaymentRecordRequest
from engines.purchase.commands import PurchaseDeleteRequest, PurchaseRecordRequest
from engines.sales.commands import (
    SaleDeleteRequest,
    SaleRecordRequest,
    SaleUpdateRequest,
)

NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)
STORE = "shared_khata_v1"


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.daemon = False
        self.cancelled = False

    def start(self):
        pass

    def cancel(self):
        self.cancelled = True


def _book(**kwargs) -> KhataBook:
    kwargs.setdefault("auto_sync", False)
    return build_khata(KhataSettings(), clock=FixedClock(NOW), **kwargs)


def stock(book, product_id="1"):
    return book.data.get(PRODUCTS, product_id).stock


def due(book, customer_id="1"):
    return book.data.get(CUSTOMERS, customer_id).due_amount


def record_sale(book, **overrides):
    base = dict(
        product_id="1", customer_id="1", quantity=3, unit_price=125,
        paid_amount=75, sale_id="s1",
    )
    base.update(overrides)
    return book.execute(SaleRecordRequest(**base))


# ══════════════════════════════════════════════════════════════
# WIRING
# ══════════════════════════════════════════════════════════════

class TestWiring:
    def test_engines_registered(self):
        book = _book()
        assert set(book.services) == {
            "inventory", "customer", "supplier", "purchase",
            "sales", "payment", "expense",
        }
        assert book.event_type_registry.is_locked
        assert book.event_type_registry.event_type_count() == 32

    def test_starts_from_seed(self):
        assert _book().data == initial_data()

    def test_broken_document_refuses_to_open(self):
        bad_sale = StockOut(
            id="s1", bill_number="B", product_id="1", customer_id="1",
            quantity=2, unit_price=125, total_price=999, date="2026-03-01",
        )
        with pytest.raises(SystemBootstrapError, match="LEDGER_ARITHMETIC"):
            _book(data=initial_data().prepend(STOCK_OUT_LOGS, bad_sale))

    def test_actor_carried_into_events(self):
        book = _book()
        result = book.execute(
            ExpenseAddRequest(amount=10, name="Tea"),
            actor=ActorContext(actor_type="HUMAN", actor_id="owner-1"),
        )
        assert result.execution_result.event_data["actor_id"] == "owner-1"

    def test_default_actor_is_system(self):
        result = _book().execute(ExpenseAddRequest(amount=10, name="Tea"))
        assert result.execution_result.event_data["payload"]["actor_type"] == "SYSTEM"


# ══════════════════════════════════════════════════════════════
# LEDGER LAWS
# ══════════════════════════════════════════════════════════════

class TestLedgerLaws:
    def test_sale_moves_stock_and_due(self):
        book = _book()
        record_sale(book)
        # due_added = 375 − 75
        assert stock(book) == Decimal("47")
        assert due(book) == Decimal("800")

    def test_delete_sale_reverses_exactly(self):
        book = _book()
        before = book.data
        record_sale(book)
        book.execute(SaleDeleteRequest(sale_id="s1"))
        assert book.data == before

    def test_edit_applies_difference_only(self):
        book = _book()
        record_sale(book)
        stock_before, due_before = stock(book), due(book)

        book.execute(SaleUpdateRequest(
            sale_id="s1", product_id="1", customer_id="1", quantity=4,
            unit_price=125, paid_amount=75,
        ))

        assert stock(book) - stock_before == Decimal("-1")
        assert due(book) - due_before == Decimal("125")

    def test_payment_settles_amount_and_discount(self):
        book = _book()
        book.execute(PaymentRecordRequest(customer_id="1", amount=300, discount=25))
        assert due(book) == Decimal("175")

    @pytest.mark.parametrize("setup, delete", [
        (
            lambda book: record_sale(book),
            SaleDeleteRequest(sale_id="s1"),
        ),
        (
            lambda book: book.execute(PurchaseRecordRequest(
                product_id="1", supplier_id="1", quantity=5, unit_price=120,
                stock_in_id="p1",
            )),
            PurchaseDeleteRequest(stock_in_id="p1"),
        ),
        (
            lambda book: book.execute(PaymentRecordRequest(
                customer_id="1", amount=100, discount=10, payment_id="pay1",
            )),
            PaymentDeleteRequest(payment_id="pay1"),
        ),
        (
            lambda book: book.execute(ExpenseAddRequest(
                amount=50, name="Tea", entry_id="e1",
            )),
            ExpenseDeleteRequest(entry_id="e1"),
        ),
        (lambda book: None, ProductDeleteRequest(product_id="2")),
        (lambda book: None, CustomerDeleteRequest(customer_id="1")),
    ])
    def test_undo_restores_exact_document(self, setup, delete):
        book = _book()
        setup(book)
        before = book.data

        assert book.execute(delete).is_accepted
        assert book.data != before

        assert book.undo().is_accepted
        assert book.data == before
        assert not book.can_undo

    def test_only_latest_deletion_is_undoable(self):
        book = _book()
        record_sale(book, sale_id="s1")
        record_sale(book, sale_id="s2")
        book.execute(SaleDeleteRequest(sale_id="s1"))
        book.execute(SaleDeleteRequest(sale_id="s2"))

        book.undo()

        assert [s.id for s in book.data.stock_out_logs] == ["s2"]
        assert book.undo() is None

    def test_restore_refused_when_id_taken_again(self):
        book = _book()
        record_sale(book)
        book.execute(SaleDeleteRequest(sale_id="s1"))
        record_sale(book)

        result = book.undo()

        assert result.is_rejected
        assert result.reason.policy_name == "restore_target_free_policy"
        assert len(book.data.stock_out_logs) == 1
        assert book.can_undo


# ══════════════════════════════════════════════════════════════
# LOAD / SYNC
# ══════════════════════════════════════════════════════════════

class TestLoadAndSync:
    def test_load_existing_row(self):
        remote = InMemoryRemoteStore()
        document = initial_data().to_dict()
        document["products"][0]["stock"] = 7
        remote.rows[STORE] = {"id": STORE, "data": document}
        book = _book(remote=remote)

        result = book.load(signed_in=True)

        assert result.source == SOURCE_REMOTE
        assert stock(book) == Decimal("7")

    def test_load_seeds_missing_row(self):
        remote = InMemoryRemoteStore()
        book = _book(remote=remote)

        assert book.load(signed_in=True).source == SOURCE_SEEDED
        assert KhataData.from_dict(remote.rows[STORE]["data"]) == initial_data()

    def test_load_clears_undo(self):
        book = _book(remote=InMemoryRemoteStore())
        book.execute(ProductDeleteRequest(product_id="1"))
        book.load(signed_in=True)
        assert not book.can_undo

    def test_push_writes_current_document(self):
        remote = InMemoryRemoteStore()
        book = _book(remote=remote)
        book.load(signed_in=True)
        record_sale(book)

        assert book.push().remote_written
        pushed = KhataData.from_dict(remote.rows[STORE]["data"])
        assert pushed.get(PRODUCTS, "1").stock == Decimal("47")

    def test_offline_book_writes_cache_only(self):
        cache = MemoryCache()
        book = _book(cache=cache)
        book.load(signed_in=True)
        record_sale(book)

        result = book.push()

        assert result.cache_written and not result.remote_written
        assert KhataData.from_dict(cache.load()).get(CUSTOMERS, "1").due_amount == Decimal("800")


class TestAutoSync:
    def _book(self, remote):
        timers = []

        def timer_factory(delay, callback):
            timer = FakeTimer(delay, callback)
            timers.append(timer)
            return timer

        book = _book(remote=remote, auto_sync=True, timer_factory=timer_factory)
        return book, timers

    def test_edits_schedule_one_debounced_push(self):
        remote = InMemoryRemoteStore()
        book, timers = self._book(remote)
        book.load(signed_in=True)
        remote.rows.clear()

        record_sale(book, sale_id="s1")
        record_sale(book, sale_id="s2")

        assert len(timers) == 2
        assert timers[0].cancelled and not timers[1].cancelled
        assert timers[1].delay == 1.0
        assert remote.rows == {}

        timers[1].callback()
        assert len(KhataData.from_dict(remote.rows[STORE]["data"]).stock_out_logs) == 2

    def test_rejected_command_schedules_nothing(self):
        book, timers = self._book(InMemoryRemoteStore())
        book.execute(SaleDeleteRequest(sale_id="missing"))
        assert timers == []

    def test_sign_out_flushes_pending_push(self):
        remote = InMemoryRemoteStore()
        book, _ = self._book(remote)
        book.load(signed_in=True)
        record_sale(book)

        book.sign_out()

        pushed = KhataData.from_dict(remote.rows[STORE]["data"])
        assert pushed.contains(STOCK_OUT_LOGS, "s1")
        assert not book.sync.signed_in
        assert not book.auto_sync.pending

    def test_close_cancels_pending_push(self):
        book, timers = self._book(InMemoryRemoteStore())
        record_sale(book)
        book.close()
        assert timers[0].cancelled
        assert book.flush() is None
