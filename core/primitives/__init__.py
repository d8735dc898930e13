"""
Khata Primitives — Public API
===============================
Records, the ledger document, amounts and ids.
"""

from core.primitives.document import (
    CATEGORIES,
    COLLECTION_TYPES,
    COLLECTION_WIRE_NAMES,
    CUSTOMERS,
    LEDGER_ENTRIES,
    PAYMENT_LOGS,
    PRODUCTS,
    STOCK_IN_LOGS,
    STOCK_OUT_LOGS,
    SUPPLIERS,
    KhataData,
)
from core.primitives.ids import RECORD_ID_LENGTH, new_record_id
from core.primitives.money import (
    CENT,
    ZERO,
    check_precision,
    coerce_amounts,
    floor_at_zero,
    quantize_money,
    to_decimal,
    to_json_number,
    weighted_average_cost,
)
from core.primitives.records import (
    Category,
    Customer,
    LedgerEntry,
    PaymentLog,
    Product,
    StockIn,
    StockOut,
    Supplier,
    WireRecord,
)
from core.primitives.seed import INITIAL_DATA, initial_data

__all__ = [
    # ── Document ──────────────────────────────────────────────
    "KhataData",
    "CATEGORIES",
    "PRODUCTS",
    "SUPPLIERS",
    "CUSTOMERS",
    "STOCK_IN_LOGS",
    "STOCK_OUT_LOGS",
    "PAYMENT_LOGS",
    "LEDGER_ENTRIES",
    "COLLECTION_TYPES",
    "COLLECTION_WIRE_NAMES",
    # ── Records ───────────────────────────────────────────────
    "WireRecord",
    "Category",
    "Product",
    "Supplier",
    "Customer",
    "StockIn",
    "StockOut",
    "PaymentLog",
    "LedgerEntry",
    # ── Amounts / ids ─────────────────────────────────────────
    "ZERO",
    "CENT",
    "to_decimal",
    "to_json_number",
    "quantize_money",
    "weighted_average_cost",
    "floor_at_zero",
    "check_precision",
    "coerce_amounts",
    "new_record_id",
    "RECORD_ID_LENGTH",
    # ── Seed ──────────────────────────────────────────────────
    "INITIAL_DATA",
    "initial_data",
]
