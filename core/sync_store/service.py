"""
Khata Sync Store - Row Service
==============================
Read and overwrite shared document rows. Used by the ORM-backed
remote store and by the HTTP adapter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone as dt_timezone
from typing import Any

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.sync_store.models import StoreRow

logger = logging.getLogger("khata.store")


def _clean_row_id(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("row id must be a non-empty string.")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("row id must be a non-empty string.")
    return cleaned


def _clean_updated_at(value: Any) -> datetime:
    if value is None:
        return timezone.now()
    if isinstance(value, datetime):
        moment = value
    else:
        moment = parse_datetime(str(value))
        if moment is None:
            raise ValueError("updated_at must be an ISO 8601 timestamp.")
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    return moment


def serialize_row(row: StoreRow) -> dict[str, Any]:
    return {
        "id": row.id,
        "data": row.data,
        "updated_at": row.updated_at.isoformat(),
    }


def get_row(row_id: str) -> dict[str, Any] | None:
    """The stored row, or None when nothing was ever written under row_id."""
    row = StoreRow.objects.filter(id=_clean_row_id(row_id)).first()
    if row is None:
        return None
    return serialize_row(row)


def upsert_row(
    row_id: str,
    data: Mapping[str, Any],
    *,
    updated_at: Any = None,
) -> dict[str, Any]:
    """Create or overwrite the row wholesale."""
    row_id = _clean_row_id(row_id)
    if not isinstance(data, Mapping):
        raise ValueError("data must be a JSON object.")
    moment = _clean_updated_at(updated_at)

    with transaction.atomic():
        row, created = StoreRow.objects.update_or_create(
            id=row_id,
            defaults={"data": dict(data), "updated_at": moment},
        )

    logger.info(
        f"Store row '{row_id}' {'created' if created else 'overwritten'} "
        f"at {moment.isoformat()}"
    )
    return serialize_row(row)


def delete_row(row_id: str) -> bool:
    deleted, _ = StoreRow.objects.filter(id=_clean_row_id(row_id)).delete()
    return deleted > 0
