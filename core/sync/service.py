"""
Khata Sync — Sync Service
===========================
Moves the ledger document between the projection, the local cache
and the shared remote row.

Rules:
- Signed in:  the remote row is the source of truth on load and is
              copied into the local cache. A missing row is seeded
              with INITIAL_DATA. A failing remote falls back to the
              local cache.
- Signed out: the local cache is loaded if present, else the seed.
- Every push writes the cache first; the remote is written only while
  signed in. The remote row is overwritten wholesale (last write wins).
- Sync failures are logged and reported in SyncResult, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.config import KhataSettings
from core.primitives import INITIAL_DATA, KhataData
from core.sync.cache import MemoryCache
from core.sync.errors import SyncError
from core.time import Clock, SystemClock
from projections.ledger import LedgerProjectionStore

logger = logging.getLogger("khata.sync")


SOURCE_REMOTE = "remote"
SOURCE_SEEDED = "seeded"
SOURCE_CACHE = "cache"
SOURCE_INITIAL = "initial"


@dataclass(frozen=True)
class SyncResult:
    """
    Outcome of a load or push.

    source:          where the loaded document came from (load only).
    cache_written:   the local cache holds the pushed document.
    remote_written:  the remote row holds the pushed document.
    error:           message of the failure that was logged, if any.
    """

    ok: bool
    source: Optional[str] = None
    cache_written: bool = False
    remote_written: bool = False
    error: Optional[str] = None


class SyncService:
    def __init__(
        self,
        *,
        projection: LedgerProjectionStore,
        settings: Optional[KhataSettings] = None,
        remote=None,
        cache=None,
        clock: Optional[Clock] = None,
    ):
        self._projection = projection
        self._settings = settings or KhataSettings()
        self._remote = remote
        self._cache = cache if cache is not None else MemoryCache()
        self._clock = clock or SystemClock()
        self._signed_in = False
        self._loaded = False

    @property
    def signed_in(self) -> bool:
        return self._signed_in

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def store_id(self) -> str:
        return self._settings.store_id

    def sign_out(self) -> None:
        self._signed_in = False

    # ── Load ──────────────────────────────────────────────────

    def load_shared_data(self, signed_in: bool) -> SyncResult:
        self._signed_in = bool(signed_in) and self._remote is not None
        try:
            if self._signed_in:
                return self._load_remote()
            return self._load_cache()
        finally:
            self._loaded = True

    def _load_remote(self) -> SyncResult:
        try:
            row = self._remote.fetch(self.store_id)
            if row is not None:
                data = KhataData.from_dict(row.get("data") or {})
                self._projection.hydrate(data)
                logger.info(f"Loaded shared row '{self.store_id}' from remote")
                return SyncResult(
                    ok=True,
                    source=SOURCE_REMOTE,
                    cache_written=self._write_cache(data.to_dict()),
                )

            self._projection.hydrate(INITIAL_DATA)
            pushed = self.sync_to_cloud(INITIAL_DATA)
            logger.info(f"Shared row '{self.store_id}' missing; seeded remote")
            return SyncResult(
                ok=pushed.ok,
                source=SOURCE_SEEDED,
                cache_written=pushed.cache_written,
                remote_written=pushed.remote_written,
                error=pushed.error,
            )
        except (SyncError, ValueError) as exc:
            logger.error(
                f"Remote load of '{self.store_id}' failed: {exc}", exc_info=True,
            )
            fallback = self._load_cache()
            return SyncResult(ok=False, source=fallback.source, error=str(exc))

    def _write_cache(self, document: dict) -> bool:
        try:
            self._cache.save(document)
        except SyncError as exc:
            logger.error(f"Cache write failed: {exc}", exc_info=True)
            return False
        return True

    def _load_cache(self) -> SyncResult:
        try:
            document = self._cache.load()
            if document is not None:
                self._projection.hydrate(KhataData.from_dict(document))
                return SyncResult(ok=True, source=SOURCE_CACHE)
        except (SyncError, ValueError) as exc:
            logger.error(f"Cache load failed: {exc}", exc_info=True)
            return SyncResult(ok=False, source=SOURCE_INITIAL, error=str(exc))
        return SyncResult(ok=True, source=SOURCE_INITIAL)

    # ── Push ──────────────────────────────────────────────────

    def sync_to_cloud(self, data: Optional[KhataData] = None) -> SyncResult:
        """Write ``data`` (default: the current document) to cache and remote."""
        data = data if data is not None else self._projection.data
        document = data.to_dict()

        try:
            self._cache.save(document)
        except SyncError as exc:
            logger.error(f"Cache write failed: {exc}", exc_info=True)
            return SyncResult(ok=False, error=str(exc))

        if not self._signed_in:
            return SyncResult(ok=True, cache_written=True)

        try:
            self._remote.upsert(self.store_id, document, self._clock.now_utc())
        except SyncError as exc:
            logger.error(
                f"Sync of '{self.store_id}' failed: {exc}", exc_info=True,
            )
            return SyncResult(ok=False, cache_written=True, error=str(exc))

        logger.debug(f"Synced '{self.store_id}' ({data.record_count} records)")
        return SyncResult(ok=True, cache_written=True, remote_written=True)
