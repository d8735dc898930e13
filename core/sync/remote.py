"""
Khata Sync — Remote Stores
============================
Where the shared document row lives.

A remote store reads and overwrites one row by id:

    fetch(row_id)                     → {"id", "data", "updated_at"} | None
    upsert(row_id, data, updated_at)  → None

Two backends:
- DjangoRemoteStore: the core.sync_store app through the ORM.
- HttpRemoteStore:   the same rows through the JSON API
                     (adapters.django_api) over HTTP with requests.
                     Responses use the adapter's {"ok", "data", "error"}
                     envelope.

Backends raise RemoteStoreError for every failure.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Protocol

import requests
from django.db import DatabaseError

from core.sync.errors import RemoteStoreError


class RemoteStore(Protocol):
    def fetch(self, row_id: str) -> Optional[dict]: ...

    def upsert(self, row_id: str, data: dict, updated_at: datetime) -> None: ...


# ══════════════════════════════════════════════════════════════
# ORM BACKEND
# ══════════════════════════════════════════════════════════════

class DjangoRemoteStore:
    """Rows kept in the local Django database."""

    def fetch(self, row_id: str) -> Optional[dict]:
        from core.sync_store.service import get_row

        try:
            return get_row(row_id)
        except DatabaseError as exc:
            raise RemoteStoreError(f"Cannot read row '{row_id}': {exc}") from exc

    def upsert(self, row_id: str, data: dict, updated_at: datetime) -> None:
        from core.sync_store.service import upsert_row

        try:
            upsert_row(row_id, data, updated_at=updated_at)
        except DatabaseError as exc:
            raise RemoteStoreError(f"Cannot write row '{row_id}': {exc}") from exc


# ══════════════════════════════════════════════════════════════
# HTTP BACKEND
# ══════════════════════════════════════════════════════════════

def _error_message(resp: requests.Response) -> str:
    msg = resp.text
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        msg = payload["error"].get("message") or msg
    return str(msg)[:500]


class HttpRemoteStore:
    """Rows served by a Khata API at ``base_url`` (e.g. http://host/v1)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        headers: Optional[dict[str, str]] = None,
    ):
        if not base_url:
            raise ValueError("base_url must be non-empty.")
        self._base_url = base_url.rstrip("/")
        self._timeout_s = float(timeout_s)
        self._headers = dict(headers or {})

    def row_url(self, row_id: str) -> str:
        return f"{self._base_url}/rows/{row_id}/"

    def fetch(self, row_id: str) -> Optional[dict]:
        url = self.row_url(row_id)
        try:
            resp = requests.get(url, headers=self._headers, timeout=self._timeout_s)
        except requests.RequestException as exc:
            raise RemoteStoreError(f"GET {url} failed: {exc}") from exc

        if resp.status_code == 404:
            return None
        if resp.status_code // 100 != 2:
            raise RemoteStoreError(
                f"HTTP {resp.status_code} for {url}: {_error_message(resp)}",
                status_code=resp.status_code,
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise RemoteStoreError(f"Invalid JSON from {url}: {exc}") from exc
        row = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(row, dict):
            raise RemoteStoreError(f"Row from {url} is not a JSON object.")
        return row

    def upsert(self, row_id: str, data: dict, updated_at: datetime) -> None:
        url = self.row_url(row_id)
        body: dict[str, Any] = {"data": data, "updated_at": updated_at.isoformat()}
        headers = {"Content-Type": "application/json", **self._headers}
        try:
            resp = requests.put(
                url,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                headers=headers,
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise RemoteStoreError(f"PUT {url} failed: {exc}") from exc

        if resp.status_code // 100 != 2:
            raise RemoteStoreError(
                f"HTTP {resp.status_code} for {url}: {_error_message(resp)}",
                status_code=resp.status_code,
            )


class InMemoryRemoteStore:
    """Rows in a dict; for tests and offline runs."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self.fail_with: Optional[Exception] = None

    def fetch(self, row_id: str) -> Optional[dict]:
        if self.fail_with is not None:
            raise self.fail_with
        row = self.rows.get(row_id)
        return json.loads(json.dumps(row)) if row is not None else None

    def upsert(self, row_id: str, data: dict, updated_at: datetime) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.rows[row_id] = {
            "id": row_id,
            "data": json.loads(json.dumps(data)),
            "updated_at": updated_at.isoformat(),
        }
