"""
Khata Command Layer — Command Dispatcher
==========================================
Accept Command → Evaluate Policies → Produce Outcome.

The Dispatcher decides ACCEPTED or REJECTED. It does not touch
the ledger, it does not notify listeners.

Policies are callables returning Optional[RejectionReason].
First rejection wins; remaining policies are skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from core.commands.base import Command
from core.commands.outcomes import CommandOutcome, CommandStatus
from core.commands.rejection import ReasonCode, RejectionReason
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("khata.commands")


# A policy is a callable:
#   (Command, context) → Optional[RejectionReason]
PolicyEvaluator = Callable[[Command, Any], Optional[RejectionReason]]


def store_scope_guard(command: Command, context: Any) -> Optional[RejectionReason]:
    """Commands must target the ledger the context is bound to."""
    store_id = getattr(context, "store_id", None)
    if store_id is not None and command.store_id != store_id:
        return RejectionReason(
            code=ReasonCode.STORE_MISMATCH,
            message=(
                f"Command targets store '{command.store_id}' but this "
                f"ledger is '{store_id}'."
            ),
            policy_name="store_scope_guard",
        )
    return None


class CommandDispatcher:
    """
    Evaluate a command through the registered policies.

    Usage:
        dispatcher = CommandDispatcher(context=ledger_context)
        dispatcher.register_policy(store_scope_guard)
        outcome = dispatcher.dispatch(command)
    """

    def __init__(self, context: Any, clock: Clock | None = None):
        self._context = context
        self._clock = clock or SystemClock()
        self._policies: List[PolicyEvaluator] = []

    def register_policy(self, policy: PolicyEvaluator) -> None:
        if not callable(policy):
            raise TypeError(
                f"Policy must be callable, got {type(policy).__name__}."
            )
        self._policies.append(policy)

        policy_name = getattr(policy, "__qualname__", str(policy))
        logger.debug(f"Policy registered: {policy_name}")

    def register_policies(self, policies) -> None:
        for policy in policies:
            self.register_policy(policy)

    @property
    def policy_count(self) -> int:
        return len(self._policies)

    def dispatch(self, command: Command) -> CommandOutcome:
        now = self._clock.now_utc()

        for policy in self._policies:
            rejection = policy(command, self._context)
            if rejection is None:
                continue
            if not isinstance(rejection, RejectionReason):
                raise TypeError(
                    f"Policy must return RejectionReason or None, "
                    f"got {type(rejection).__name__}."
                )

            logger.info(
                f"Command {command.command_id} rejected by "
                f"policy '{rejection.policy_name}': "
                f"[{rejection.code}] {rejection.message}"
            )
            return CommandOutcome(
                command_id=command.command_id,
                status=CommandStatus.REJECTED,
                reason=rejection,
                occurred_at=now,
            )

        logger.info(f"Command {command.command_id} ACCEPTED")
        return CommandOutcome(
            command_id=command.command_id,
            status=CommandStatus.ACCEPTED,
            reason=None,
            occurred_at=now,
        )
