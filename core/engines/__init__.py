"""
Khata Engines — Shared Engine Layer
=====================================
Event type ownership, shared policy checks and the service base
every ledger engine builds on.
"""

from core.engines.payloads import (
    build_restored_payload,
    deleted_payload,
    updated_payload,
)
from core.engines.policies import (
    duplicate_record,
    missing_record,
    missing_reference,
    restore_target_free_policy,
)
from core.engines.registry import (
    EngineRegistryError,
    EventTypeRegistry,
    RegistryLockedError,
)
from core.engines.service import (
    LedgerEngineService,
    LedgerExecutionResult,
    PayloadBuilder,
    base_payload,
    make_event_data,
)

__all__ = [
    # ── Registry ──────────────────────────────────────────────
    "EventTypeRegistry",
    "EngineRegistryError",
    "RegistryLockedError",
    # ── Policies ──────────────────────────────────────────────
    "duplicate_record",
    "missing_record",
    "missing_reference",
    "restore_target_free_policy",
    # ── Payloads ──────────────────────────────────────────────
    "build_restored_payload",
    "deleted_payload",
    "updated_payload",
    # ── Service ───────────────────────────────────────────────
    "LedgerEngineService",
    "LedgerExecutionResult",
    "PayloadBuilder",
    "base_payload",
    "make_event_data",
]
