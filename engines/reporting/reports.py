"""
Khata Reporting — Report Queries
==================================
Pure read-side functions over a KhataData document.

Nothing here mutates the document or emits events. Every function
takes the document (and any filter) explicitly, so the service layer
only decides *which* document and *which* day is current.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from core.primitives import (
    ZERO,
    Customer,
    KhataData,
    LedgerEntry,
    Product,
    StockIn,
    Supplier,
)
from core.time import DateRange, last_n_days


DEFAULT_LOW_STOCK_THRESHOLD = Decimal("10")

STOCK_IN = "stockIn"
STOCK_OUT = "stockOut"
TRANSACTION_TYPES = frozenset({"all", STOCK_IN, STOCK_OUT})

HISTORY_SALE = "sale"
HISTORY_PAYMENT = "payment"

MISSING_PARTY = "N/A"


def _newest_first(items, *, key=lambda item: item.date):
    # sorted() is stable with reverse=True, so same-day items keep their order
    return sorted(items, key=key, reverse=True)


def _matches(text: str, term: str) -> bool:
    return term.lower() in (text or "").lower()


# ══════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DashboardSummary:
    total_sales: Decimal
    total_purchase: Decimal
    total_due: Decimal
    total_profit: Decimal


def dashboard_summary(data: KhataData) -> DashboardSummary:
    """
    Headline totals.

    Only positive dues count as money owed. Profit is measured against
    each product's *current* cost price; sales of deleted products
    count at zero cost.
    """
    costs = {p.id: p.cost_price for p in data.products}

    gross = sum(
        ((log.unit_price - costs.get(log.product_id, ZERO)) * log.quantity
         for log in data.stock_out_logs),
        ZERO,
    )
    sales_discount = sum((log.discount for log in data.stock_out_logs), ZERO)
    payment_discount = sum((log.discount for log in data.payment_logs), ZERO)

    return DashboardSummary(
        total_sales=sum((log.total_price for log in data.stock_out_logs), ZERO),
        total_purchase=sum((log.total_price for log in data.stock_in_logs), ZERO),
        total_due=sum(
            (c.due_amount for c in data.customers if c.due_amount > ZERO), ZERO,
        ),
        total_profit=gross - sales_discount - payment_discount,
    )


@dataclass(frozen=True)
class DailyStats:
    date: str
    sales: Decimal
    purchases: Decimal


def daily_stats(data: KhataData, day: str) -> DailyStats:
    return DailyStats(
        date=day,
        sales=sum(
            (log.total_price for log in data.stock_out_logs if log.date == day), ZERO,
        ),
        purchases=sum(
            (log.total_price for log in data.stock_in_logs if log.date == day), ZERO,
        ),
    )


@dataclass(frozen=True)
class DailySales:
    date: str
    amount: Decimal


def sales_series(data: KhataData, end_day: str, days: int = 7) -> List[DailySales]:
    """Sales per day for the ``days`` days ending at end_day, oldest first."""
    totals: dict = {}
    for log in data.stock_out_logs:
        totals[log.date] = totals.get(log.date, ZERO) + log.total_price
    return [
        DailySales(date=day, amount=totals.get(day, ZERO))
        for day in last_n_days(end_day, days)
    ]


def low_stock_products(
    data: KhataData,
    default_threshold: Decimal = DEFAULT_LOW_STOCK_THRESHOLD,
) -> List[Product]:
    """Products at or below their threshold (zero threshold → default)."""
    return [
        p for p in data.products
        if p.stock <= (p.low_stock_threshold or default_threshold)
    ]


def search_products(data: KhataData, term: str = "") -> List[Product]:
    found = [p for p in data.products if _matches(p.name, term)]
    return sorted(found, key=lambda p: p.name.casefold())


# ══════════════════════════════════════════════════════════════
# CUSTOMERS / SUPPLIERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerStats:
    total_due: Decimal
    total_advance: Decimal


def customer_stats(data: KhataData) -> CustomerStats:
    return CustomerStats(
        total_due=sum(
            (c.due_amount for c in data.customers if c.due_amount > ZERO), ZERO,
        ),
        total_advance=sum(
            (-c.due_amount for c in data.customers if c.due_amount < ZERO), ZERO,
        ),
    )


def search_customers(data: KhataData, term: str = "") -> List[Customer]:
    return [
        c for c in data.customers
        if _matches(c.name, term) or term in (c.phone or "")
    ]


def search_suppliers(data: KhataData, term: str = "") -> List[Supplier]:
    return [
        s for s in data.suppliers
        if _matches(s.name, term) or term in (s.phone or "")
    ]


@dataclass(frozen=True)
class HistoryEntry:
    """
    One line of a customer's account history.

    kind is 'sale' or 'payment'. For a sale, amount is the bill total
    and details describe the product; for a payment, amount is the
    money received and details carry the payment note.
    """

    id: str
    date: str
    kind: str
    details: str
    amount: Decimal
    discount: Decimal
    record: object

    @property
    def is_sale(self) -> bool:
        return self.kind == HISTORY_SALE


def customer_history(
    data: KhataData,
    customer_id: str,
    date_range: Optional[DateRange] = None,
) -> List[HistoryEntry]:
    date_range = date_range or DateRange()

    entries: List[HistoryEntry] = [
        HistoryEntry(
            id=log.id,
            date=log.date,
            kind=HISTORY_SALE,
            details=f"{log.product_name} ({log.quantity} {log.product_unit})",
            amount=log.total_price,
            discount=log.discount,
            record=log,
        )
        for log in data.stock_out_logs
        if log.customer_id == customer_id
    ]
    entries.extend(
        HistoryEntry(
            id=log.id,
            date=log.date,
            kind=HISTORY_PAYMENT,
            details=log.note,
            amount=log.amount,
            discount=log.discount,
            record=log,
        )
        for log in data.payment_logs
        if log.customer_id == customer_id
    )

    return _newest_first(e for e in entries if date_range.contains(e.date))


def supplier_history(
    data: KhataData,
    supplier_id: str,
    date_range: Optional[DateRange] = None,
) -> List[StockIn]:
    date_range = date_range or DateRange()
    return _newest_first(
        log for log in data.stock_in_logs
        if log.supplier_id == supplier_id and date_range.contains(log.date)
    )


# ══════════════════════════════════════════════════════════════
# TRANSACTION REPORT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransactionRow:
    """A purchase or sale log joined with its party name."""

    type: str
    party_name: str
    record: object

    @property
    def date(self) -> str:
        return self.record.date

    @property
    def discount(self) -> Decimal:
        return getattr(self.record, "discount", ZERO)


def transaction_report(
    data: KhataData,
    date_range: DateRange,
    transaction_type: str = "all",
) -> List[TransactionRow]:
    """
    Purchases and/or sales inside an inclusive date range, newest first.

    Parties that no longer exist are reported as 'N/A'.
    """
    if transaction_type not in TRANSACTION_TYPES:
        raise ValueError(
            f"transaction_type '{transaction_type}' not valid. "
            f"Must be one of: {sorted(TRANSACTION_TYPES)}"
        )

    suppliers = {s.id: s.name for s in data.suppliers}
    customers = {c.id: c.name for c in data.customers}
    rows: List[TransactionRow] = []

    if transaction_type in ("all", STOCK_IN):
        rows.extend(
            TransactionRow(STOCK_IN, suppliers.get(log.supplier_id, MISSING_PARTY), log)
            for log in data.stock_in_logs
        )
    if transaction_type in ("all", STOCK_OUT):
        rows.extend(
            TransactionRow(STOCK_OUT, customers.get(log.customer_id, MISSING_PARTY), log)
            for log in data.stock_out_logs
        )

    return _newest_first(row for row in rows if date_range.contains(row.date))


# ══════════════════════════════════════════════════════════════
# EXPENSES
# ══════════════════════════════════════════════════════════════

def filter_expenses(
    data: KhataData,
    term: str = "",
    date_range: Optional[DateRange] = None,
) -> List[LedgerEntry]:
    date_range = date_range or DateRange()
    return _newest_first(
        e for e in data.ledger_entries
        if (_matches(e.description, term) or _matches(e.name, term))
        and date_range.contains(e.date)
    )


def expense_total(entries) -> Decimal:
    return sum((e.amount for e in entries), ZERO)


def expense_report(
    data: KhataData,
    term: str = "",
    date_range: Optional[DateRange] = None,
) -> Tuple[List[LedgerEntry], Decimal]:
    entries = filter_expenses(data, term, date_range)
    return entries, expense_total(entries)
