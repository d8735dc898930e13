"""
Khata Core Config — Ledger Settings
=====================================
All tunables of the ledger in one frozen dataclass.

Values come from the Django settings dict ``KHATA`` when Django is
configured, and fall back to the defaults below otherwise. Engines
receive a KhataSettings instance; they never read settings globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any, Mapping, Optional

from django.conf import settings as django_settings


SHARED_STORE_ID = "shared_khata_v1"
VALID_LANGUAGES = frozenset({"bn", "en"})


@dataclass(frozen=True)
class KhataSettings:
    """
    Ledger configuration.

    Fields:
        store_id:               Id of the shared cloud row.
        language:               'bn' or 'en'; selects default notes.
        undo_window_seconds:    How long the last deletion stays undoable.
        sync_debounce_seconds:  Quiet period before an automatic push.
        remote_url:             Base URL of the HTTP row store (None → ORM).
        remote_timeout_seconds: HTTP timeout for the row store.
        cache_path:             Local JSON cache file (None → no cache).
        allow_advance:          Let payments and reversals push a customer
                                due below zero (advance). When False,
                                reductions are floored at zero.
        allow_negative_stock:   Accept sales larger than stock on hand.
        default_low_stock_threshold:
                                Threshold used when a product has none.
    """

    store_id: str = SHARED_STORE_ID
    language: str = "bn"
    undo_window_seconds: float = 5.0
    sync_debounce_seconds: float = 1.0
    remote_url: Optional[str] = None
    remote_timeout_seconds: float = 30.0
    cache_path: Optional[str] = None
    allow_advance: bool = True
    allow_negative_stock: bool = True
    default_low_stock_threshold: Decimal = Decimal("10")

    def __post_init__(self) -> None:
        if not self.store_id:
            raise ValueError("store_id must be non-empty.")
        if self.language not in VALID_LANGUAGES:
            raise ValueError(
                f"language '{self.language}' not valid. "
                f"Must be one of: {sorted(VALID_LANGUAGES)}"
            )
        if self.undo_window_seconds < 0:
            raise ValueError("undo_window_seconds must be >= 0.")
        if self.sync_debounce_seconds < 0:
            raise ValueError("sync_debounce_seconds must be >= 0.")
        if self.remote_timeout_seconds <= 0:
            raise ValueError("remote_timeout_seconds must be positive.")
        if not isinstance(self.default_low_stock_threshold, Decimal):
            object.__setattr__(
                self,
                "default_low_stock_threshold",
                Decimal(str(self.default_low_stock_threshold)),
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "KhataSettings":
        """Build settings from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {
            key.lower(): value
            for key, value in values.items()
            if key.lower() in known
        }
        return cls(**kwargs)

    def with_overrides(self, **overrides: Any) -> "KhataSettings":
        return replace(self, **overrides)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> KhataSettings:
    """
    Resolve settings from Django's ``KHATA`` dict (if Django is
    configured) and apply explicit overrides on top.
    """
    values: dict[str, Any] = {}

    if django_settings.configured or os.environ.get("DJANGO_SETTINGS_MODULE"):
        values.update(getattr(django_settings, "KHATA", {}) or {})

    if overrides:
        values.update(overrides)

    return KhataSettings.from_mapping(values)
