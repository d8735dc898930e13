"""
Khata Core Time — Temporal Helpers
====================================
Pure functions over ISO dates and expiry windows.
All functions take explicit arguments — no hidden clock access.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive range of ISO dates. Either bound may be open (None).

    Ledger dates are stored as 'YYYY-MM-DD' strings, which order
    lexically the same way they order chronologically.
    """

    start: Optional[str] = None
    end: Optional[str] = None

    def __post_init__(self) -> None:
        for bound in (self.start, self.end):
            if bound:
                date.fromisoformat(bound)
        if self.start and self.end and self.start > self.end:
            raise ValueError(
                f"DateRange start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, day: str) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True

    @property
    def is_open(self) -> bool:
        return not self.start and not self.end


def last_n_days(end_day: str, n: int) -> List[str]:
    """The n ISO dates ending at end_day, oldest first."""
    if n <= 0:
        raise ValueError("n must be positive.")
    end = date.fromisoformat(end_day)
    return [(end - timedelta(days=offset)).isoformat() for offset in range(n - 1, -1, -1)]


def is_expired(issued_at: datetime, ttl_seconds: float, now: datetime) -> bool:
    """True once more than ttl_seconds have passed since issued_at."""
    return (now - issued_at).total_seconds() > ttl_seconds


def seconds_until_expiry(issued_at: datetime, ttl_seconds: float, now: datetime) -> float:
    remaining = ttl_seconds - (now - issued_at).total_seconds()
    return max(0.0, remaining)
