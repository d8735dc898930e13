"""
Khata Sync — Debounced Auto-Sync
==================================
Every applied ledger event (re)starts a quiet-period timer; when it
fires, the current document is pushed. A burst of edits therefore
costs one push.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable, Mapping, Optional

from core.events import SubscriberRegistry

logger = logging.getLogger("khata.sync")

SUBSCRIBER_NAME = "khata.sync"


class DebouncedSync:
    def __init__(
        self,
        push: Callable[[], Any],
        *,
        delay_seconds: float = 1.0,
        timer_factory: Callable[..., Any] = threading.Timer,
    ):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0.")
        self._push = push
        self._delay_seconds = delay_seconds
        self._timer_factory = timer_factory
        self._timer: Optional[Any] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def on_event(self, event: Mapping[str, Any]) -> None:
        """Subscriber entry point."""
        logger.debug(f"Sync scheduled after '{event.get('event_type')}'")
        self.schedule()

    def schedule(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self._delay_seconds, self._fire)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None

    def flush(self) -> Any:
        """Push now if a push is pending."""
        with self._lock:
            if self._timer is None:
                return None
            self._timer.cancel()
            self._timer = None
        return self._push()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        self._push()

    def subscribe(
        self, registry: SubscriberRegistry, event_types: Iterable[str],
    ) -> None:
        registry.register_for_all(event_types, self.on_event, SUBSCRIBER_NAME)
