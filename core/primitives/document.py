"""
Khata Primitives — Ledger Document
====================================
The whole shared state as one immutable value.

Every mutation produces a new KhataData; collections are tuples and
are rebuilt rather than edited. The wire form is the JSON object
stored in the shared cloud row.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from core.primitives.records import (
    Category,
    Customer,
    LedgerEntry,
    PaymentLog,
    Product,
    StockIn,
    StockOut,
    Supplier,
)


# ══════════════════════════════════════════════════════════════
# COLLECTIONS
# ══════════════════════════════════════════════════════════════

CATEGORIES = "categories"
PRODUCTS = "products"
SUPPLIERS = "suppliers"
CUSTOMERS = "customers"
STOCK_IN_LOGS = "stock_in_logs"
STOCK_OUT_LOGS = "stock_out_logs"
PAYMENT_LOGS = "payment_logs"
LEDGER_ENTRIES = "ledger_entries"

COLLECTION_TYPES: Dict[str, Type] = {
    CATEGORIES: Category,
    PRODUCTS: Product,
    SUPPLIERS: Supplier,
    CUSTOMERS: Customer,
    STOCK_IN_LOGS: StockIn,
    STOCK_OUT_LOGS: StockOut,
    PAYMENT_LOGS: PaymentLog,
    LEDGER_ENTRIES: LedgerEntry,
}

COLLECTION_WIRE_NAMES: Dict[str, str] = {
    CATEGORIES: "categories",
    PRODUCTS: "products",
    SUPPLIERS: "suppliers",
    CUSTOMERS: "customers",
    STOCK_IN_LOGS: "stockInLogs",
    STOCK_OUT_LOGS: "stockOutLogs",
    PAYMENT_LOGS: "paymentLogs",
    LEDGER_ENTRIES: "ledgerEntries",
}


# ══════════════════════════════════════════════════════════════
# DOCUMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class KhataData:
    categories: Tuple[Category, ...] = ()
    products: Tuple[Product, ...] = ()
    suppliers: Tuple[Supplier, ...] = ()
    customers: Tuple[Customer, ...] = ()
    stock_in_logs: Tuple[StockIn, ...] = ()
    stock_out_logs: Tuple[StockOut, ...] = ()
    payment_logs: Tuple[PaymentLog, ...] = ()
    ledger_entries: Tuple[LedgerEntry, ...] = ()

    def __post_init__(self):
        for name in COLLECTION_TYPES:
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    # ── Lookup ────────────────────────────────────────────────

    def records(self, collection: str) -> Tuple[Any, ...]:
        if collection not in COLLECTION_TYPES:
            raise KeyError(f"Unknown collection '{collection}'.")
        return getattr(self, collection)

    def get(self, collection: str, record_id: str) -> Optional[Any]:
        for record in self.records(collection):
            if record.id == record_id:
                return record
        return None

    def index_of(self, collection: str, record_id: str) -> int:
        for index, record in enumerate(self.records(collection)):
            if record.id == record_id:
                return index
        return -1

    def contains(self, collection: str, record_id: str) -> bool:
        return self.index_of(collection, record_id) >= 0

    # ── Rebuilding ────────────────────────────────────────────

    def with_records(self, collection: str, records) -> "KhataData":
        self.records(collection)
        return replace(self, **{collection: tuple(records)})

    def append(self, collection: str, record: Any) -> "KhataData":
        return self.with_records(collection, self.records(collection) + (record,))

    def prepend(self, collection: str, record: Any) -> "KhataData":
        return self.with_records(collection, (record,) + self.records(collection))

    def insert(self, collection: str, index: int, record: Any) -> "KhataData":
        items = list(self.records(collection))
        index = max(0, min(index, len(items)))
        items.insert(index, record)
        return self.with_records(collection, items)

    def replace_record(self, collection: str, record: Any) -> "KhataData":
        return self.with_records(
            collection,
            (record if r.id == record.id else r for r in self.records(collection)),
        )

    def remove(self, collection: str, record_id: str) -> "KhataData":
        return self.with_records(
            collection,
            (r for r in self.records(collection) if r.id != record_id),
        )

    def map_record(
        self, collection: str, record_id: str, change: Callable[[Any], Any]
    ) -> "KhataData":
        """Apply ``change`` to the record with ``record_id`` (no-op if absent)."""
        return self.with_records(
            collection,
            (change(r) if r.id == record_id else r for r in self.records(collection)),
        )

    # ── Wire format ───────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            COLLECTION_WIRE_NAMES[name]: [r.to_dict() for r in getattr(self, name)]
            for name in COLLECTION_TYPES
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KhataData":
        """
        Decode a shared-row document.

        Missing or null collections (older rows have no paymentLogs or
        ledgerEntries) decode as empty.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Ledger document must be a JSON object.")

        kwargs = {}
        for name, record_type in COLLECTION_TYPES.items():
            raw = data.get(COLLECTION_WIRE_NAMES[name]) or []
            if not isinstance(raw, list):
                raise ValueError(
                    f"'{COLLECTION_WIRE_NAMES[name]}' must be a list."
                )
            kwargs[name] = tuple(record_type.from_dict(item) for item in raw)
        return cls(**kwargs)

    @property
    def record_count(self) -> int:
        return sum(len(getattr(self, name)) for name in COLLECTION_TYPES)
