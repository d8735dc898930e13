"""
Khata Supplier Engine — Commands
==================================
Suppliers carry no balance; what was bought from them lives in
the purchase log.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from core.commands.base import Command, make_command
from core.primitives import new_record_id


SUPPLIER_ACCOUNT_ADD_REQUEST = "supplier.account.add.request"
SUPPLIER_ACCOUNT_UPDATE_REQUEST = "supplier.account.update.request"
SUPPLIER_ACCOUNT_DELETE_REQUEST = "supplier.account.delete.request"
SUPPLIER_ACCOUNT_RESTORE_REQUEST = "supplier.account.restore.request"

SUPPLIER_COMMAND_TYPES = frozenset({
    SUPPLIER_ACCOUNT_ADD_REQUEST,
    SUPPLIER_ACCOUNT_UPDATE_REQUEST,
    SUPPLIER_ACCOUNT_DELETE_REQUEST,
    SUPPLIER_ACCOUNT_RESTORE_REQUEST,
})


@dataclass(frozen=True)
class SupplierAddRequest:
    name: str
    phone: str = ""
    supplier_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not self.supplier_id:
            raise ValueError("supplier_id must be non-empty.")

    def to_command(
        self,
        *,
        store_id: str,
        actor_type: str,
        actor_id: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return make_command(
            SUPPLIER_ACCOUNT_ADD_REQUEST,
            {
                "supplier_id": self.supplier_id,
                "name": self.name.strip(),
                "phone": self.phone.strip(),
            },
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class SupplierUpdateRequest:
    supplier_id: str
    name: str
    phone: str = ""

    def __post_init__(self):
        if not self.supplier_id:
            raise ValueError("supplier_id must be non-empty.")
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")

    def to_command(
        self,
        *,
        store_id: str,
        actor_type: str,
        actor_id: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return make_command(
            SUPPLIER_ACCOUNT_UPDATE_REQUEST,
            {
                "supplier_id": self.supplier_id,
                "name": self.name.strip(),
                "phone": self.phone.strip(),
            },
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class SupplierDeleteRequest:
    supplier_id: str

    def __post_init__(self):
        if not self.supplier_id:
            raise ValueError("supplier_id must be non-empty.")

    def to_command(
        self,
        *,
        store_id: str,
        actor_type: str,
        actor_id: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return make_command(
            SUPPLIER_ACCOUNT_DELETE_REQUEST,
            {"supplier_id": self.supplier_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
