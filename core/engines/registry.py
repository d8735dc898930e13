"""
Khata Engine Registry — Event Type Registry
=============================================
Knows every event type the engines may emit, and which engine owns it.

Rules:
- Event types follow engine.domain.action.vN format
- The owner is the first segment (sales.sale.recorded.v1 → sales)
- Registering the same type twice is a no-op
- Registry locks after bootstrap (no dynamic injection)
- Thread-safe for concurrent access

The sync scheduler subscribes to get_all_event_types() once
bootstrap has locked the registry.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

logger = logging.getLogger("khata.engines")


# ══════════════════════════════════════════════════════════════
# REGISTRY ERRORS
# ══════════════════════════════════════════════════════════════

class EngineRegistryError(Exception):
    """Base error for engine registry operations."""
    pass


class RegistryLockedError(EngineRegistryError):
    """Registry is locked — no modifications allowed."""

    def __init__(self):
        super().__init__(
            "Event type registry is locked after bootstrap. "
            "No dynamic registration allowed."
        )


# ══════════════════════════════════════════════════════════════
# EVENT TYPE REGISTRY
# ══════════════════════════════════════════════════════════════

class EventTypeRegistry:
    """
    Usage:
        registry = EventTypeRegistry()
        register_sales_event_types(registry)
        registry.lock()
        registry.get_owner("sales.sale.recorded.v1")   # "sales"
    """

    def __init__(self):
        self._event_owners: dict[str, str] = {}
        self._locked: bool = False
        self._lock = Lock()

    @staticmethod
    def _validate_event_type_format(event_type: str) -> None:
        if not event_type or not isinstance(event_type, str):
            raise ValueError(
                f"Event type must be a non-empty string, got: {event_type!r}"
            )

        parts = event_type.strip().split(".")
        if len(parts) < 4 or not parts[-1].startswith("v"):
            raise ValueError(
                f"Event type '{event_type}' does not follow "
                f"engine.domain.action.vN format."
            )

        for part in parts:
            if not part.strip():
                raise ValueError(
                    f"Event type '{event_type}' contains empty segment."
                )

    def register(self, event_type: str) -> None:
        self._validate_event_type_format(event_type)

        with self._lock:
            if event_type in self._event_owners:
                return
            if self._locked:
                raise RegistryLockedError()
            self._event_owners[event_type] = event_type.split(".")[0]

        logger.debug(f"Event type registered: {event_type}")

    def lock(self) -> None:
        """Idempotent."""
        with self._lock:
            if self._locked:
                return
            self._locked = True
            count = len(self._event_owners)

        logger.info(f"Event type registry LOCKED: {count} event types")

    @property
    def is_locked(self) -> bool:
        with self._lock:
            return self._locked

    def is_registered(self, event_type: str) -> bool:
        with self._lock:
            return event_type in self._event_owners

    def get_owner(self, event_type: str) -> Optional[str]:
        with self._lock:
            return self._event_owners.get(event_type)

    def get_all_event_types(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._event_owners)

    def get_all_engines(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._event_owners.values())

    def event_type_count(self) -> int:
        with self._lock:
            return len(self._event_owners)
