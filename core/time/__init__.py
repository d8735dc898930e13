"""
Khata Core Time — Public API
==============================
Explicit clock protocol and temporal helpers.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    bill_number_at,
    iso_date,
    make_bill_number,
    today_iso,
)
from core.time.temporal import (
    DateRange,
    is_expired,
    last_n_days,
    seconds_until_expiry,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "bill_number_at",
    "iso_date",
    "make_bill_number",
    "today_iso",
    "DateRange",
    "is_expired",
    "last_n_days",
    "seconds_until_expiry",
]
