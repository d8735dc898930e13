"""
Khata Sync — Public API
=========================
Local cache, remote row stores, sync service and the debounced
auto-sync subscriber.
"""

from core.sync.cache import LocalCache, MemoryCache
from core.sync.errors import CacheError, RemoteStoreError, SyncError
from core.sync.remote import (
    DjangoRemoteStore,
    HttpRemoteStore,
    InMemoryRemoteStore,
    RemoteStore,
)
from core.sync.scheduler import DebouncedSync
from core.sync.service import (
    SOURCE_CACHE,
    SOURCE_INITIAL,
    SOURCE_REMOTE,
    SOURCE_SEEDED,
    SyncResult,
    SyncService,
)

__all__ = [
    "LocalCache",
    "MemoryCache",
    "SyncError",
    "RemoteStoreError",
    "CacheError",
    "RemoteStore",
    "DjangoRemoteStore",
    "HttpRemoteStore",
    "InMemoryRemoteStore",
    "DebouncedSync",
    "SyncResult",
    "SyncService",
    "SOURCE_REMOTE",
    "SOURCE_SEEDED",
    "SOURCE_CACHE",
    "SOURCE_INITIAL",
]
