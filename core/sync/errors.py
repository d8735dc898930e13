"""
Khata Sync — Errors
=====================
Raised by remote stores and the local cache. SyncService catches
them; nothing above the sync layer ever sees one.
"""


class SyncError(Exception):
    """Base for every sync failure."""


class RemoteStoreError(SyncError):
    """The remote row store could not be read or written."""

    def __init__(self, message: str, *, status_code=None):
        self.status_code = status_code
        super().__init__(message)


class CacheError(SyncError):
    """The local cache file could not be read or written."""
