"""
Khata Bootstrap — Self-Check Orchestrator
===========================================
Runs all invariant checks once the ledger is wired.
If any check fails → SystemBootstrapError propagates → build_khata()
returns nothing.

Check order:
1. Event type registry locked and fully routed
2. Starting document consistent
"""

import logging

from core.bootstrap.invariants import check_ledger_invariants, check_registry_sanity

logger = logging.getLogger("khata.bootstrap")


def run_bootstrap_checks(*, event_type_registry, data) -> None:
    logger.info("═══ Khata Bootstrap Self-Check Starting ═══")

    check_registry_sanity(event_type_registry)
    check_ledger_invariants(data)

    logger.info("═══ Khata Bootstrap Self-Check PASSED ═══")
