"""
Khata Reporting — CSV Export
==============================
Transaction report rows as a spreadsheet-friendly CSV document.

The text starts with a UTF-8 byte order mark so spreadsheet tools
pick the right encoding for Bengali product and party names.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from core.primitives import to_json_number
from engines.reporting.reports import STOCK_IN, STOCK_OUT, TransactionRow


CSV_HEADER = (
    "Date", "Type", "Party", "Product", "Quantity", "Unit", "Rate", "Discount", "Total",
)
BOM = "\ufeff"
DELETED_PRODUCT = "Deleted"

TYPE_LABELS = {
    "en": {STOCK_IN: "Buy", STOCK_OUT: "Sell"},
    "bn": {STOCK_IN: "কেনা", STOCK_OUT: "বিক্রি"},
}


def transaction_csv(rows: Iterable[TransactionRow], language: str = "en") -> str:
    labels = TYPE_LABELS.get(language, TYPE_LABELS["en"])
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for row in rows:
        log = row.record
        writer.writerow((
            log.date,
            labels[row.type],
            row.party_name,
            log.product_name or DELETED_PRODUCT,
            to_json_number(log.quantity),
            log.product_unit or "",
            to_json_number(log.unit_price),
            to_json_number(row.discount),
            to_json_number(log.total_price),
        ))

    return BOM + buffer.getvalue()


def report_filename(start: str, end: str) -> str:
    return f"Report_{start}_to_{end}.csv"
