"""
Khata Command Layer — Command Bus
===================================
High-level orchestration of the command lifecycle.

Flow:
    1. Dispatch command → get Outcome
    2. If ACCEPTED → call engine service handler → handler applies event
    3. If REJECTED → return the rejection, ledger untouched

The CommandBus orchestrates, it does not decide, and it contains
no engine-specific logic.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from core.commands.base import Command
from core.commands.dispatcher import CommandDispatcher
from core.commands.outcomes import CommandOutcome
from core.commands.rejection import RejectionReason

logger = logging.getLogger("khata.commands")


class EngineServiceProtocol(Protocol):
    def execute(self, command: Command) -> Any:
        ...


# ══════════════════════════════════════════════════════════════
# COMMAND BUS ERRORS
# ══════════════════════════════════════════════════════════════

class CommandBusError(Exception):
    """Base error for command bus operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine service handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service handler registered for "
            f"command type '{command_type}'."
        )


class DuplicateHandlerError(CommandBusError):
    """A handler is already registered for the command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"Handler already registered for command type '{command_type}'."
        )


# ══════════════════════════════════════════════════════════════
# COMMAND BUS RESULT
# ══════════════════════════════════════════════════════════════

class CommandResult:
    """Result of CommandBus.handle() — wraps outcome + execution result."""

    def __init__(
        self,
        outcome: CommandOutcome,
        execution_result: Any = None,
    ):
        self.outcome = outcome
        self.execution_result = execution_result

    @property
    def is_accepted(self) -> bool:
        return self.outcome.is_accepted

    @property
    def is_rejected(self) -> bool:
        return self.outcome.is_rejected

    @property
    def reason(self) -> Optional[RejectionReason]:
        return self.outcome.reason

    def __repr__(self) -> str:
        code = self.reason.code if self.reason else None
        return f"CommandResult(status={self.outcome.status.value}, reason={code})"


# ══════════════════════════════════════════════════════════════
# COMMAND BUS
# ══════════════════════════════════════════════════════════════

class CommandBus:
    """
    Orchestration layer for command lifecycle.

    Usage:
        bus = CommandBus(dispatcher=dispatcher)
        bus.register_handler("sales.sale.record.request", sales_handler)
        result = bus.handle(command)
    """

    def __init__(self, dispatcher: CommandDispatcher):
        self._dispatcher = dispatcher
        self._handlers: Dict[str, Any] = {}

    def register_handler(self, command_type: str, handler: Any) -> None:
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")

        if command_type in self._handlers:
            raise DuplicateHandlerError(command_type)

        self._handlers[command_type] = handler
        logger.debug(f"Handler registered: {command_type}")

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._handlers

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def handle(self, command: Command) -> CommandResult:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        outcome = self._dispatcher.dispatch(command)
        if outcome.is_rejected:
            return CommandResult(outcome=outcome)

        logger.info(
            f"Executing accepted command {command.command_id} "
            f"({command.command_type})"
        )
        execution_result = handler.execute(command)

        return CommandResult(
            outcome=outcome,
            execution_result=execution_result,
        )
