"""
Khata Engine Policies — Shared Checks
=======================================
Building blocks for engine policies. Each returns a RejectionReason
or None; engine policy functions decide when to call them.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from projections.ledger import EVENT_COLLECTIONS


def missing_reference(
    context: Any,
    collection: str,
    record_id: Optional[str],
    *,
    code: str,
    label: str,
    policy_name: str,
) -> Optional[RejectionReason]:
    """Reject when ``record_id`` is not present in ``collection``."""
    if record_id and context.data.get(collection, record_id) is not None:
        return None
    return RejectionReason(
        code=code,
        message=f"{label} '{record_id}' does not exist.",
        policy_name=policy_name,
    )


def missing_record(
    context: Any,
    collection: str,
    record_id: Optional[str],
    *,
    label: str,
    policy_name: str,
) -> Optional[RejectionReason]:
    return missing_reference(
        context, collection, record_id,
        code=ReasonCode.RECORD_NOT_FOUND,
        label=label,
        policy_name=policy_name,
    )


def duplicate_record(
    context: Any,
    collection: str,
    record_id: Optional[str],
    *,
    label: str,
    policy_name: str,
) -> Optional[RejectionReason]:
    """Reject when ``record_id`` is already taken in ``collection``."""
    if not record_id or context.data.get(collection, record_id) is None:
        return None
    return RejectionReason(
        code=ReasonCode.DUPLICATE_RECORD,
        message=f"{label} '{record_id}' already exists.",
        policy_name=policy_name,
    )


def restore_target_free_policy(
    command: Any, context: Any,
) -> Optional[RejectionReason]:
    """A record can only be restored while its id is free again."""
    if not command.command_type.endswith(".restore.request"):
        return None

    namespace = ".".join(command.command_type.split(".")[:2])
    collection = EVENT_COLLECTIONS.get(namespace)
    if collection is None:
        return RejectionReason(
            code=ReasonCode.INVALID_COMMAND_TYPE,
            message=f"Nothing can be restored by '{command.command_type}'.",
            policy_name="restore_target_free_policy",
        )
    return duplicate_record(
        context, collection, command.payload.get("record", {}).get("id"),
        label="Record",
        policy_name="restore_target_free_policy",
    )
