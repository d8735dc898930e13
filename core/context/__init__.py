"""
Khata Context — Public API
============================
Ledger scope and actor identity passed to policies and services.
"""

from core.context.actor_context import SYSTEM_ACTOR, ActorContext
from core.context.ledger import LedgerContext

__all__ = [
    "ActorContext",
    "LedgerContext",
    "SYSTEM_ACTOR",
]
