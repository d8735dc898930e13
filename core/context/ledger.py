"""
Khata Core Context — LedgerContext
====================================
Immutable execution scope shared by policies and engine services.

A context binds one store id to the projection that holds its
document and to the settings the engines must honour.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.config import KhataSettings
from core.primitives import KhataData
from projections.ledger import LedgerProjectionStore


@dataclass(frozen=True)
class LedgerContext:
    """
    Canonical ledger scope.

    store_id is taken from settings when not given explicitly.
    """

    projection: LedgerProjectionStore
    settings: KhataSettings = field(default_factory=KhataSettings)
    store_id: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.projection, LedgerProjectionStore):
            raise ValueError("projection must be a LedgerProjectionStore.")
        if not self.store_id:
            object.__setattr__(self, "store_id", self.settings.store_id)

    @property
    def data(self) -> KhataData:
        """Current document (always read fresh from the projection)."""
        return self.projection.data

    @property
    def scope_label(self) -> str:
        return f"store:{self.store_id}"
