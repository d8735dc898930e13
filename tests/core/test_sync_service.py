"""
Khata Sync — Tests
====================
Cache, remote stores, load/push rules and debounced auto-sync.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import requests

from core.primitives import CUSTOMERS, KhataData, initial_data
from core.sync import (
    SOURCE_CACHE,
    SOURCE_INITIAL,
    SOURCE_REMOTE,
    SOURCE_SEEDED,
    CacheError,
    DebouncedSync,
    HttpRemoteStore,
    InMemoryRemoteStore,
    LocalCache,
    MemoryCache,
    RemoteStoreError,
    SyncService,
)
from core.config import KhataSettings
from core.events import SubscriberRegistry
from core.time import FixedClock
from projections.ledger import LedgerProjectionStore

NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)
STORE = "shared_khata_v1"


def remote_document():
    data = initial_data()
    wire = data.to_dict()
    wire["customers"][0]["dueAmount"] = 900
    return wire


def _service(remote=None, cache=None, data=None):
    projection = LedgerProjectionStore(data or KhataData())
    service = SyncService(
        projection=projection,
        settings=KhataSettings(),
        remote=remote,
        cache=cache if cache is not None else MemoryCache(),
        clock=FixedClock(NOW),
    )
    return service, projection


# ══════════════════════════════════════════════════════════════
# TEST INFRASTRUCTURE — FAKES
# ══════════════════════════════════════════════════════════════

class FakeTimer:
    created = []

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class BrokenCache(MemoryCache):
    def save(self, document):
        raise CacheError("disk full")


@pytest.fixture(autouse=True)
def _reset_timers():
    FakeTimer.created = []
    yield


# ══════════════════════════════════════════════════════════════
# CACHES
# ══════════════════════════════════════════════════════════════

class TestLocalCache:
    def test_missing_file_loads_none(self, tmp_path):
        cache = LocalCache(tmp_path / "khata.json")
        assert not cache.exists()
        assert cache.load() is None

    def test_save_and_load(self, tmp_path):
        cache = LocalCache(tmp_path / "nested" / "khata.json")
        cache.save({"products": [{"id": "1", "name": "চিনি"}]})
        assert cache.load() == {"products": [{"id": "1", "name": "চিনি"}]}
        assert not (tmp_path / "nested" / "khata.json.tmp").exists()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "khata.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CacheError):
            LocalCache(path).load()

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "khata.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CacheError):
            LocalCache(path).load()

    def test_clear(self, tmp_path):
        cache = LocalCache(tmp_path / "khata.json")
        cache.save({})
        cache.clear()
        cache.clear()
        assert not cache.exists()


class TestMemoryCache:
    def test_copies_on_save(self):
        cache = MemoryCache()
        document = {"products": []}
        cache.save(document)
        document["products"].append({"id": "x"})
        assert cache.load() == {"products": []}


# ══════════════════════════════════════════════════════════════
# HTTP REMOTE
# ══════════════════════════════════════════════════════════════

class TestHttpRemoteStore:
    def test_row_url(self):
        store = HttpRemoteStore("http://khata.local/v1/")
        assert store.row_url(STORE) == "http://khata.local/v1/rows/shared_khata_v1/"

    def test_base_url_required(self):
        with pytest.raises(ValueError):
            HttpRemoteStore("")

    def test_fetch_unwraps_envelope(self, monkeypatch):
        row = {"id": STORE, "data": {"products": []}, "updated_at": NOW.isoformat()}
        calls = []

        def fake_get(url, headers=None, timeout=None):
            calls.append((url, timeout))
            return FakeResponse(200, {"ok": True, "data": row, "error": None})

        monkeypatch.setattr(requests, "get", fake_get)
        store = HttpRemoteStore("http://khata.local/v1", timeout_s=3)

        assert store.fetch(STORE) == row
        assert calls == [("http://khata.local/v1/rows/shared_khata_v1/", 3.0)]

    def test_fetch_missing_row(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda url, headers=None, timeout=None: FakeResponse(404, {}),
        )
        assert HttpRemoteStore("http://khata.local/v1").fetch(STORE) is None

    def test_fetch_server_error_carries_message(self, monkeypatch):
        body = {"ok": False, "data": None, "error": {"code": "X", "message": "db down"}}
        monkeypatch.setattr(
            requests, "get", lambda url, headers=None, timeout=None: FakeResponse(500, body),
        )
        with pytest.raises(RemoteStoreError, match="db down") as exc_info:
            HttpRemoteStore("http://khata.local/v1").fetch(STORE)
        assert exc_info.value.status_code == 500

    def test_network_failure(self, monkeypatch):
        def boom(url, headers=None, timeout=None):
            raise requests.ConnectionError("unreachable")

        monkeypatch.setattr(requests, "get", boom)
        with pytest.raises(RemoteStoreError, match="unreachable"):
            HttpRemoteStore("http://khata.local/v1").fetch(STORE)

    def test_upsert_puts_json(self, monkeypatch):
        sent = {}

        def fake_put(url, data=None, headers=None, timeout=None):
            sent["url"] = url
            sent["body"] = json.loads(data.decode("utf-8"))
            sent["headers"] = headers
            return FakeResponse(200, {"ok": True, "data": {}, "error": None})

        monkeypatch.setattr(requests, "put", fake_put)
        store = HttpRemoteStore("http://khata.local/v1", headers={"X-Khata": "1"})
        store.upsert(STORE, {"products": []}, NOW)

        assert sent["url"].endswith("/rows/shared_khata_v1/")
        assert sent["body"] == {"data": {"products": []}, "updated_at": NOW.isoformat()}
        assert sent["headers"]["Content-Type"] == "application/json"
        assert sent["headers"]["X-Khata"] == "1"

    def test_upsert_rejected(self, monkeypatch):
        monkeypatch.setattr(
            requests, "put",
            lambda url, data=None, headers=None, timeout=None: FakeResponse(400, None, "bad"),
        )
        with pytest.raises(RemoteStoreError, match="HTTP 400"):
            HttpRemoteStore("http://khata.local/v1").upsert(STORE, {}, NOW)


# ══════════════════════════════════════════════════════════════
# LOAD
# ══════════════════════════════════════════════════════════════

class TestLoadSharedData:
    def test_signed_in_loads_remote_row(self):
        remote = InMemoryRemoteStore()
        remote.rows[STORE] = {"id": STORE, "data": remote_document()}
        service, projection = _service(remote=remote)

        result = service.load_shared_data(signed_in=True)

        assert result.ok and result.source == SOURCE_REMOTE
        assert projection.data.get(CUSTOMERS, "1").due_amount == Decimal("900")
        assert service.signed_in and service.loaded

    def test_remote_row_refreshes_stale_cache(self):
        remote = InMemoryRemoteStore()
        remote.rows[STORE] = {"id": STORE, "data": remote_document()}
        cache = MemoryCache(initial_data().to_dict())
        service, _ = _service(remote=remote, cache=cache)

        result = service.load_shared_data(signed_in=True)

        assert result.cache_written
        assert cache.load()["customers"][0]["dueAmount"] == 900

        offline, projection = _service(cache=cache)
        assert offline.load_shared_data(signed_in=False).source == SOURCE_CACHE
        assert projection.data.get(CUSTOMERS, "1").due_amount == Decimal("900")

    def test_remote_load_survives_cache_write_failure(self):
        remote = InMemoryRemoteStore()
        remote.rows[STORE] = {"id": STORE, "data": remote_document()}
        service, projection = _service(remote=remote, cache=BrokenCache())

        result = service.load_shared_data(signed_in=True)

        assert result.ok and result.source == SOURCE_REMOTE
        assert not result.cache_written
        assert projection.data.get(CUSTOMERS, "1").due_amount == Decimal("900")

    def test_missing_row_is_seeded(self):
        remote = InMemoryRemoteStore()
        service, projection = _service(remote=remote)

        result = service.load_shared_data(signed_in=True)

        assert result.source == SOURCE_SEEDED
        assert result.remote_written
        assert projection.data == initial_data()
        assert KhataData.from_dict(remote.rows[STORE]["data"]) == initial_data()
        assert remote.rows[STORE]["updated_at"] == NOW.isoformat()

    def test_remote_failure_falls_back_to_cache(self):
        remote = InMemoryRemoteStore()
        remote.fail_with = RemoteStoreError("offline")
        cache = MemoryCache(remote_document())
        service, projection = _service(remote=remote, cache=cache)

        result = service.load_shared_data(signed_in=True)

        assert not result.ok
        assert result.source == SOURCE_CACHE
        assert result.error == "offline"
        assert projection.data.get(CUSTOMERS, "1").due_amount == Decimal("900")

    def test_malformed_remote_row_falls_back(self):
        remote = InMemoryRemoteStore()
        remote.rows[STORE] = {"id": STORE, "data": {"products": "oops"}}
        service, _ = _service(remote=remote)

        result = service.load_shared_data(signed_in=True)

        assert not result.ok
        assert result.source == SOURCE_INITIAL

    def test_signed_out_uses_cache(self):
        remote = InMemoryRemoteStore()
        remote.rows[STORE] = {"id": STORE, "data": initial_data().to_dict()}
        service, projection = _service(remote=remote, cache=MemoryCache(remote_document()))

        result = service.load_shared_data(signed_in=False)

        assert result.source == SOURCE_CACHE
        assert not service.signed_in
        assert projection.data.get(CUSTOMERS, "1").due_amount == Decimal("900")

    def test_signed_out_without_cache_keeps_document(self):
        service, projection = _service(data=initial_data())
        result = service.load_shared_data(signed_in=False)
        assert result.ok and result.source == SOURCE_INITIAL
        assert projection.data == initial_data()

    def test_signed_in_without_remote_is_offline(self):
        service, _ = _service(remote=None)
        service.load_shared_data(signed_in=True)
        assert not service.signed_in

    def test_corrupt_cache_reported(self, tmp_path):
        path = tmp_path / "khata.json"
        path.write_text("nope", encoding="utf-8")
        service, _ = _service(cache=LocalCache(path))

        result = service.load_shared_data(signed_in=False)

        assert not result.ok
        assert result.source == SOURCE_INITIAL


# ══════════════════════════════════════════════════════════════
# PUSH
# ══════════════════════════════════════════════════════════════

class TestSyncToCloud:
    def test_signed_in_writes_cache_and_remote(self):
        remote = InMemoryRemoteStore()
        cache = MemoryCache()
        service, _ = _service(remote=remote, cache=cache, data=initial_data())
        service.load_shared_data(signed_in=True)

        result = service.sync_to_cloud()

        assert result.ok and result.cache_written and result.remote_written
        assert cache.load() == remote.rows[STORE]["data"]

    def test_signed_out_writes_cache_only(self):
        remote = InMemoryRemoteStore()
        cache = MemoryCache()
        service, _ = _service(remote=remote, cache=cache, data=initial_data())

        result = service.sync_to_cloud()

        assert result.cache_written and not result.remote_written
        assert remote.rows == {}
        assert KhataData.from_dict(cache.load()) == initial_data()

    def test_remote_failure_is_reported_not_raised(self):
        remote = InMemoryRemoteStore()
        service, _ = _service(remote=remote, data=initial_data())
        service.load_shared_data(signed_in=True)
        remote.fail_with = RemoteStoreError("timeout")

        result = service.sync_to_cloud()

        assert not result.ok
        assert result.cache_written
        assert result.error == "timeout"

    def test_cache_failure_is_reported(self):
        service, _ = _service(cache=BrokenCache(), data=initial_data())
        result = service.sync_to_cloud()
        assert not result.ok and not result.cache_written

    def test_sign_out_stops_remote_writes(self):
        remote = InMemoryRemoteStore()
        service, _ = _service(remote=remote, data=initial_data())
        service.load_shared_data(signed_in=True)
        remote.rows.clear()

        service.sign_out()
        service.sync_to_cloud()

        assert remote.rows == {}


# ══════════════════════════════════════════════════════════════
# DEBOUNCED AUTO-SYNC
# ══════════════════════════════════════════════════════════════

class TestDebouncedSync:
    def _scheduler(self):
        pushes = []
        scheduler = DebouncedSync(
            lambda: pushes.append("push") or "pushed",
            delay_seconds=1.0,
            timer_factory=FakeTimer,
        )
        return scheduler, pushes

    def test_burst_of_events_costs_one_push(self):
        scheduler, pushes = self._scheduler()
        for _ in range(3):
            scheduler.on_event({"event_type": "sales.sale.recorded.v1"})

        assert len(FakeTimer.created) == 3
        assert [t.cancelled for t in FakeTimer.created] == [True, True, False]
        assert FakeTimer.created[-1].daemon and FakeTimer.created[-1].started
        assert FakeTimer.created[-1].delay == 1.0

        FakeTimer.created[-1].fire()
        assert pushes == ["push"]
        assert not scheduler.pending

    def test_flush_pushes_pending(self):
        scheduler, pushes = self._scheduler()
        scheduler.schedule()

        assert scheduler.flush() == "pushed"
        assert FakeTimer.created[0].cancelled
        assert scheduler.flush() is None
        assert pushes == ["push"]

    def test_cancel(self):
        scheduler, pushes = self._scheduler()
        scheduler.schedule()
        scheduler.cancel()
        assert not scheduler.pending
        assert scheduler.flush() is None
        assert pushes == []

    def test_subscribe_to_event_types(self):
        scheduler, _ = self._scheduler()
        registry = SubscriberRegistry()
        scheduler.subscribe(registry, ["sales.sale.recorded.v1", "expense.entry.added.v1"])
        assert registry.subscriber_count("sales.sale.recorded.v1") == 1
        assert registry.get_subscribers("expense.entry.added.v1")[0][1] == "khata.sync"

    def test_negative_delay(self):
        with pytest.raises(ValueError):
            DebouncedSync(lambda: None, delay_seconds=-1)
