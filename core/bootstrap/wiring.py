"""
Khata Bootstrap — Wiring
==========================
Builds a ready-to-use KhataBook: one projection, one command bus,
every engine, the undo buffer, reporting and the sync client.

    book = build_khata()
    book.load(signed_in=True)
    book.execute(SaleRecordRequest(product_id="1", customer_id="1",
                                   quantity=2, unit_price=125))
    book.undo()
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Callable, Optional

from core.bootstrap.self_check import run_bootstrap_checks
from core.commands.bus import CommandBus, CommandResult
from core.commands.dispatcher import CommandDispatcher, store_scope_guard
from core.config import KhataSettings, load_settings
from core.context import SYSTEM_ACTOR, ActorContext, LedgerContext
from core.engines import EventTypeRegistry, restore_target_free_policy
from core.events import SubscriberRegistry
from core.primitives import KhataData, initial_data
from core.sync import (
    DebouncedSync,
    HttpRemoteStore,
    LocalCache,
    MemoryCache,
    SyncResult,
    SyncService,
)
from core.time import Clock, SystemClock
from core.undo import RestoreRequest, UndoBuffer, UndoEntry
from engines.customer.policies import CUSTOMER_POLICIES
from engines.customer.services import CustomerService
from engines.expense.policies import EXPENSE_POLICIES
from engines.expense.services import ExpenseService
from engines.inventory.policies import INVENTORY_POLICIES
from engines.inventory.services import InventoryService
from engines.payment.policies import PAYMENT_POLICIES
from engines.payment.services import PaymentService
from engines.purchase.policies import PURCHASE_POLICIES
from engines.purchase.services import PurchaseService
from engines.reporting.services import ReportingService
from engines.sales.policies import SALES_POLICIES
from engines.sales.services import SalesService
from engines.supplier.policies import SUPPLIER_POLICIES
from engines.supplier.services import SupplierService
from projections.ledger import LedgerProjectionStore

logger = logging.getLogger("khata.bootstrap")


ENGINE_SERVICES = (
    InventoryService,
    CustomerService,
    SupplierService,
    PurchaseService,
    SalesService,
    PaymentService,
    ExpenseService,
)

ENGINE_POLICIES = (
    INVENTORY_POLICIES
    + CUSTOMER_POLICIES
    + SUPPLIER_POLICIES
    + PURCHASE_POLICIES
    + SALES_POLICIES
    + PAYMENT_POLICIES
    + EXPENSE_POLICIES
)


# ══════════════════════════════════════════════════════════════
# FACADE
# ══════════════════════════════════════════════════════════════

class KhataBook:
    """
    The wired ledger.

    Every change goes through execute() (or undo(), which executes a
    restore request); reads go through ``data`` or ``reporting``.
    """

    def __init__(
        self,
        *,
        settings: KhataSettings,
        clock: Clock,
        context: LedgerContext,
        command_bus: CommandBus,
        event_type_registry: EventTypeRegistry,
        subscriber_registry: SubscriberRegistry,
        undo_buffer: UndoBuffer,
        services: dict,
        reporting: ReportingService,
        sync: SyncService,
        auto_sync: Optional[DebouncedSync],
        actor: ActorContext,
    ):
        self.settings = settings
        self.clock = clock
        self.context = context
        self.command_bus = command_bus
        self.event_type_registry = event_type_registry
        self.subscriber_registry = subscriber_registry
        self.undo_buffer = undo_buffer
        self.services = services
        self.reporting = reporting
        self.sync = sync
        self.auto_sync = auto_sync
        self.actor = actor

    @property
    def data(self) -> KhataData:
        return self.context.data

    @property
    def projection(self) -> LedgerProjectionStore:
        return self.context.projection

    # ── Commands ──────────────────────────────────────────────

    def execute(self, request: Any, *, actor: Optional[ActorContext] = None) -> CommandResult:
        """Turn a request dataclass into a command and run it."""
        actor = actor or self.actor
        command = request.to_command(
            store_id=self.context.store_id,
            actor_type=actor.actor_type,
            actor_id=actor.actor_id,
            command_id=uuid.uuid4(),
            correlation_id=uuid.uuid4(),
            issued_at=self.clock.now_utc(),
        )
        return self.command_bus.handle(command)

    # ── Undo ──────────────────────────────────────────────────

    def restore(self, entry: UndoEntry) -> CommandResult:
        return self.execute(RestoreRequest.from_entry(entry))

    def undo(self) -> Optional[CommandResult]:
        """Restore the last deletion; None when nothing is undoable."""
        return self.undo_buffer.undo()

    @property
    def can_undo(self) -> bool:
        return self.undo_buffer.is_available

    # ── Sync ──────────────────────────────────────────────────

    def load(self, signed_in: bool) -> SyncResult:
        result = self.sync.load_shared_data(signed_in)
        self.undo_buffer.clear()
        return result

    def sign_out(self) -> None:
        self.flush()
        self.sync.sign_out()

    def push(self) -> SyncResult:
        if self.auto_sync is not None:
            self.auto_sync.cancel()
        return self.sync.sync_to_cloud()

    def flush(self) -> Optional[SyncResult]:
        """Run a pending automatic sync now."""
        if self.auto_sync is None:
            return None
        return self.auto_sync.flush()

    def close(self) -> None:
        if self.auto_sync is not None:
            self.auto_sync.cancel()


# ══════════════════════════════════════════════════════════════
# BUILDERS
# ══════════════════════════════════════════════════════════════

def _build_remote(settings: KhataSettings):
    if not settings.remote_url:
        return None
    return HttpRemoteStore(
        settings.remote_url, timeout_s=settings.remote_timeout_seconds,
    )


def _build_cache(settings: KhataSettings):
    if settings.cache_path:
        return LocalCache(settings.cache_path)
    return MemoryCache()


def _build_dispatcher(context: LedgerContext, clock: Clock) -> CommandDispatcher:
    dispatcher = CommandDispatcher(context=context, clock=clock)
    dispatcher.register_policy(store_scope_guard)
    dispatcher.register_policy(restore_target_free_policy)
    dispatcher.register_policies(ENGINE_POLICIES)
    return dispatcher


def build_khata(
    settings: Optional[KhataSettings] = None,
    *,
    clock: Optional[Clock] = None,
    data: Optional[KhataData] = None,
    remote=None,
    cache=None,
    actor: Optional[ActorContext] = None,
    auto_sync: bool = True,
    timer_factory: Callable[..., Any] = threading.Timer,
) -> KhataBook:
    """
    Wire a KhataBook.

    Defaults: settings from Django's KHATA dict, the system clock, the
    seed document, an HTTP remote when remote_url is configured
    (otherwise none, i.e. offline), and a file cache when cache_path is
    configured (otherwise in-memory).
    """
    settings = settings or load_settings()
    clock = clock or SystemClock()
    remote = remote if remote is not None else _build_remote(settings)
    cache = cache if cache is not None else _build_cache(settings)

    projection = LedgerProjectionStore(data if data is not None else initial_data())
    context = LedgerContext(projection=projection, settings=settings)

    command_bus = CommandBus(dispatcher=_build_dispatcher(context, clock))
    event_type_registry = EventTypeRegistry()
    subscriber_registry = SubscriberRegistry()
    undo_buffer = UndoBuffer(clock=clock, window_seconds=settings.undo_window_seconds)

    services = {
        service_class.engine_name: service_class(
            ledger_context=context,
            command_bus=command_bus,
            event_type_registry=event_type_registry,
            subscriber_registry=subscriber_registry,
            undo_buffer=undo_buffer,
            clock=clock,
        )
        for service_class in ENGINE_SERVICES
    }
    event_type_registry.lock()

    sync = SyncService(
        projection=projection,
        settings=settings,
        remote=remote,
        cache=cache,
        clock=clock,
    )

    scheduler = None
    if auto_sync:
        scheduler = DebouncedSync(
            sync.sync_to_cloud,
            delay_seconds=settings.sync_debounce_seconds,
            timer_factory=timer_factory,
        )
        scheduler.subscribe(
            subscriber_registry, event_type_registry.get_all_event_types(),
        )

    book = KhataBook(
        settings=settings,
        clock=clock,
        context=context,
        command_bus=command_bus,
        event_type_registry=event_type_registry,
        subscriber_registry=subscriber_registry,
        undo_buffer=undo_buffer,
        services=services,
        reporting=ReportingService(ledger_context=context, clock=clock),
        sync=sync,
        auto_sync=scheduler,
        actor=actor or SYSTEM_ACTOR,
    )
    undo_buffer.set_restorer(book.restore)

    run_bootstrap_checks(
        event_type_registry=event_type_registry, data=projection.data,
    )
    logger.info(
        f"Khata ledger '{context.store_id}' ready with "
        f"{len(services)} engines"
    )
    return book
