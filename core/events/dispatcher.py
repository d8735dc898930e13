"""
Khata Event Bus — Dispatcher
==============================
Routes applied ledger events to registered subscribers.

Dispatch behavior:
1. Look up subscribers by event_type
2. Execute handlers sequentially
3. Catch and log subscriber exceptions per handler
4. Continue to next subscriber

A failing subscriber never undoes the ledger change that was
already applied.
"""

import logging
from typing import Any, Mapping

from core.events.registry import SubscriberRegistry

logger = logging.getLogger("khata.events")


def dispatch(event: Mapping[str, Any], registry: SubscriberRegistry) -> dict:
    """
    Dispatch an applied event to all registered subscribers.

    Args:
        event:    Event dict with at least 'event_type' and 'event_id'.
        registry: SubscriberRegistry with registered handlers.

    Returns:
        {
            'event_type': str,
            'event_id': str,
            'subscribers_notified': int,
            'subscribers_failed': int,
            'failures': list[dict]
        }

    This function never raises; handler failures are reported.
    """
    event_type = event["event_type"]
    event_id = str(event.get("event_id", ""))

    subscribers = registry.get_subscribers(event_type)

    result = {
        "event_type": event_type,
        "event_id": event_id,
        "subscribers_notified": 0,
        "subscribers_failed": 0,
        "failures": [],
    }

    if not subscribers:
        logger.debug(
            f"No subscribers for event type '{event_type}' "
            f"(event_id: {event_id})"
        )
        return result

    for handler, subscriber_name in subscribers:
        handler_name = getattr(handler, "__qualname__", str(handler))

        try:
            handler(event)
            result["subscribers_notified"] += 1
        except Exception as exc:
            result["subscribers_failed"] += 1
            result["failures"].append({
                "handler": handler_name,
                "subscriber": subscriber_name,
                "error": str(exc),
                "error_type": type(exc).__name__,
            })
            logger.error(
                f"Subscriber failed: {handler_name} for "
                f"{event_type} (event_id: {event_id}): {exc}",
                exc_info=True,
            )

    logger.debug(
        f"Dispatch complete: {event_type} (event_id: {event_id}) — "
        f"{result['subscribers_notified']} notified, "
        f"{result['subscribers_failed']} failed"
    )

    return result
