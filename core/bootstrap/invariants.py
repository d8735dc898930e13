"""
Khata Bootstrap — Invariant Checks
====================================
Each function verifies one ledger law.
If a check fails → SystemBootstrapError is raised.

These checks do NOT:
- Repair the document
- Recompute balances
- Silence failures
"""

from __future__ import annotations

import logging
from typing import List

from core.bootstrap.errors import SystemBootstrapError
from core.primitives import COLLECTION_TYPES, CENT, KhataData, ZERO
from projections.ledger import route_event

logger = logging.getLogger("khata.bootstrap")


# ══════════════════════════════════════════════════════════════
# CHECK 1: Every registered event type reaches the ledger
# ══════════════════════════════════════════════════════════════

def check_registry_sanity(event_type_registry) -> None:
    """
    A registered event type the ledger projection cannot route would
    be accepted, dispatched and then silently dropped.
    """
    if not event_type_registry.is_locked:
        raise SystemBootstrapError(
            invariant="REGISTRY_LOCKED",
            detail="Event type registry must be locked after wiring.",
        )

    unrouted = sorted(
        event_type
        for event_type in event_type_registry.get_all_event_types()
        if route_event(event_type) is None
    )
    if unrouted:
        raise SystemBootstrapError(
            invariant="REGISTRY_ROUTING",
            detail=f"Ledger cannot apply: {', '.join(unrouted)}",
        )

    logger.info(
        f"✓ {event_type_registry.event_type_count()} event types routed."
    )


# ══════════════════════════════════════════════════════════════
# CHECK 2: Document arithmetic
# ══════════════════════════════════════════════════════════════

def _off_by_more_than_a_cent(actual, expected) -> bool:
    return abs(actual - expected) >= CENT


def find_ledger_violations(data: KhataData) -> List[str]:
    """
    Every broken ledger identity in ``data``, as readable messages.

    Checked:
    - record ids are unique inside each collection
    - purchase total = quantity × unit price
    - sale total = quantity × unit price − discount
    - payment amount and discount are not negative
    """
    problems: List[str] = []

    for collection in COLLECTION_TYPES:
        seen = set()
        for record in data.records(collection):
            if record.id in seen:
                problems.append(f"{collection}: duplicate id '{record.id}'")
            seen.add(record.id)

    for log in data.stock_in_logs:
        if _off_by_more_than_a_cent(log.total_price, log.quantity * log.unit_price):
            problems.append(
                f"stock_in_logs: '{log.id}' total {log.total_price} "
                f"!= {log.quantity} × {log.unit_price}"
            )

    for log in data.stock_out_logs:
        expected = log.quantity * log.unit_price - log.discount
        if _off_by_more_than_a_cent(log.total_price, expected):
            problems.append(
                f"stock_out_logs: '{log.id}' total {log.total_price} != {expected}"
            )

    for log in data.payment_logs:
        if log.amount < ZERO or log.discount < ZERO:
            problems.append(f"payment_logs: '{log.id}' has a negative amount")

    return problems


def check_ledger_invariants(data: KhataData) -> None:
    problems = find_ledger_violations(data)
    if problems:
        raise SystemBootstrapError(
            invariant="LEDGER_ARITHMETIC",
            detail="; ".join(problems),
        )
    logger.info(f"✓ Ledger document consistent ({data.record_count} records).")
