"""
Khata Bootstrap — Wiring and Self-Defense
===========================================
Builds the ledger and refuses to hand it out in an unsafe state.
"""

from core.bootstrap.errors import SystemBootstrapError
from core.bootstrap.invariants import (
    check_ledger_invariants,
    check_registry_sanity,
    find_ledger_violations,
)
from core.bootstrap.self_check import run_bootstrap_checks
from core.bootstrap.wiring import KhataBook, build_khata

__all__ = [
    "KhataBook",
    "SystemBootstrapError",
    "build_khata",
    "check_ledger_invariants",
    "check_registry_sanity",
    "find_ledger_violations",
    "run_bootstrap_checks",
]
