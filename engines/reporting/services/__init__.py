"""
Khata Reporting Engine — Application Service
==============================================
Read-side analytics over the shared ledger document.

This engine is READ ONLY:
- It registers no command handlers and emits no events
- Every query reads the projection's current document
- "Today" comes from the injected clock, never the wall clock
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from core.context import LedgerContext
from core.primitives import KhataData, LedgerEntry
from core.time import Clock, DateRange, SystemClock, today_iso
from engines.reporting.export import transaction_csv
from engines.reporting.reports import (
    CustomerStats,
    DailySales,
    DailyStats,
    DashboardSummary,
    HistoryEntry,
    TransactionRow,
    customer_history,
    customer_stats,
    daily_stats,
    dashboard_summary,
    expense_report,
    low_stock_products,
    sales_series,
    search_customers,
    search_products,
    search_suppliers,
    supplier_history,
    transaction_report,
)


class ReportingService:
    """Reporting Engine application service."""

    engine_name = "reporting"

    def __init__(
        self,
        *,
        ledger_context: LedgerContext,
        clock: Optional[Clock] = None,
    ):
        self._ledger_context = ledger_context
        self._clock = clock or SystemClock()

    @property
    def data(self) -> KhataData:
        return self._ledger_context.data

    def today(self) -> str:
        return today_iso(self._clock)

    # ── Dashboard ─────────────────────────────────────────────

    def dashboard(self) -> DashboardSummary:
        return dashboard_summary(self.data)

    def daily(self, day: Optional[str] = None) -> DailyStats:
        return daily_stats(self.data, day or self.today())

    def weekly_sales(self, end_day: Optional[str] = None) -> List[DailySales]:
        return sales_series(self.data, end_day or self.today(), days=7)

    def low_stock(self):
        return low_stock_products(
            self.data,
            self._ledger_context.settings.default_low_stock_threshold,
        )

    def products(self, term: str = ""):
        return search_products(self.data, term)

    # ── Parties ───────────────────────────────────────────────

    def customer_stats(self) -> CustomerStats:
        return customer_stats(self.data)

    def customers(self, term: str = ""):
        return search_customers(self.data, term)

    def suppliers(self, term: str = ""):
        return search_suppliers(self.data, term)

    def customer_history(
        self,
        customer_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[HistoryEntry]:
        return customer_history(self.data, customer_id, DateRange(start, end))

    def supplier_history(
        self,
        supplier_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ):
        return supplier_history(self.data, supplier_id, DateRange(start, end))

    # ── Transactions ──────────────────────────────────────────

    def transactions(
        self,
        start: str,
        end: str,
        transaction_type: str = "all",
    ) -> List[TransactionRow]:
        return transaction_report(self.data, DateRange(start, end), transaction_type)

    def transactions_csv(
        self,
        start: str,
        end: str,
        transaction_type: str = "all",
    ) -> str:
        rows = self.transactions(start, end, transaction_type)
        return transaction_csv(rows, self._ledger_context.settings.language)

    # ── Expenses ──────────────────────────────────────────────

    def expenses(
        self,
        term: str = "",
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> Tuple[List[LedgerEntry], Decimal]:
        return expense_report(self.data, term, DateRange(start, end))
