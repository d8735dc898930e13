"""
Khata Inventory Engine — Request Commands
===========================================
Typed product and category requests that convert into canonical
Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.commands.base import Command, make_command
from core.primitives import ZERO, coerce_amounts, new_record_id


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

INVENTORY_PRODUCT_ADD_REQUEST = "inventory.product.add.request"
INVENTORY_PRODUCT_UPDATE_REQUEST = "inventory.product.update.request"
INVENTORY_PRODUCT_DELETE_REQUEST = "inventory.product.delete.request"
INVENTORY_PRODUCT_RESTORE_REQUEST = "inventory.product.restore.request"
INVENTORY_CATEGORY_ADD_REQUEST = "inventory.category.add.request"
INVENTORY_CATEGORY_UPDATE_REQUEST = "inventory.category.update.request"
INVENTORY_CATEGORY_DELETE_REQUEST = "inventory.category.delete.request"
INVENTORY_CATEGORY_RESTORE_REQUEST = "inventory.category.restore.request"

INVENTORY_COMMAND_TYPES = frozenset({
    INVENTORY_PRODUCT_ADD_REQUEST,
    INVENTORY_PRODUCT_UPDATE_REQUEST,
    INVENTORY_PRODUCT_DELETE_REQUEST,
    INVENTORY_PRODUCT_RESTORE_REQUEST,
    INVENTORY_CATEGORY_ADD_REQUEST,
    INVENTORY_CATEGORY_UPDATE_REQUEST,
    INVENTORY_CATEGORY_DELETE_REQUEST,
    INVENTORY_CATEGORY_RESTORE_REQUEST,
})


def _check_product_fields(request) -> None:
    coerce_amounts(
        request, "stock", "cost_price", "sale_price", "low_stock_threshold",
    )
    if not request.name or not request.name.strip():
        raise ValueError("name must be non-empty.")
    if request.cost_price < ZERO:
        raise ValueError("cost_price must be >= 0.")
    if request.sale_price < ZERO:
        raise ValueError("sale_price must be >= 0.")
    if request.low_stock_threshold < ZERO:
        raise ValueError("low_stock_threshold must be >= 0.")


def _product_payload(request) -> dict:
    return {
        "product_id": request.product_id,
        "name": request.name.strip(),
        "unit": request.unit,
        "stock": request.stock,
        "cost_price": request.cost_price,
        "sale_price": request.sale_price,
        "low_stock_threshold": request.low_stock_threshold,
        "category_id": request.category_id,
    }


# ══════════════════════════════════════════════════════════════
# PRODUCT REQUESTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductAddRequest:
    """Request to add a product to the catalogue."""
    name: str
    unit: str = ""
    stock: Decimal = ZERO
    cost_price: Decimal = ZERO
    sale_price: Decimal = ZERO
    low_stock_threshold: Decimal = ZERO
    category_id: Optional[str] = None
    product_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        _check_product_fields(self)
        if self.stock < ZERO:
            raise ValueError("opening stock must be >= 0.")
        if not self.product_id:
            raise ValueError("product_id must be non-empty.")

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
            INVENTORY_PRODUCT_ADD_REQUEST,
            _product_payload(self),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class ProductUpdateRequest:
    """Request to replace a product's fields. The id never changes."""
    product_id: str
    name: str
    unit: str = ""
    stock: Decimal = ZERO
    cost_price: Decimal = ZERO
    sale_price: Decimal = ZERO
    low_stock_threshold: Decimal = ZERO
    category_id: Optional[str] = None

    def __post_init__(self):
        if not self.product_id:
            raise ValueError("product_id must be non-empty.")
        _check_product_fields(self)

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
            INVENTORY_PRODUCT_UPDATE_REQUEST,
            _product_payload(self),
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class ProductDeleteRequest:
    """Request to remove a product. Logs that mention it are kept."""
    product_id: str

    def __post_init__(self):
        if not self.product_id:
            raise ValueError("product_id must be non-empty.")

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
            INVENTORY_PRODUCT_DELETE_REQUEST,
            {"product_id": self.product_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


# ══════════════════════════════════════════════════════════════
# CATEGORY REQUESTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CategoryAddRequest:
    name: str
    category_id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("name must be non-empty.")
        if not self.category_id:
            raise ValueError("category_id must be non-empty.")

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
            INVENTORY_CATEGORY_ADD_REQUEST,
            {"category_id": self.category_id, "name": self.name.strip()},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class CategoryUpdateRequest:
    category_id: str
    name: str

    def __post_init__(self):
        if not self.category_id:
            raise ValueError("category_id must be non-empty.")
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
            INVENTORY_CATEGORY_UPDATE_REQUEST,
            {"category_id": self.category_id, "name": self.name.strip()},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class CategoryDeleteRequest:
    """Products keep their category_id after the category is gone."""
    category_id: str

    def __post_init__(self):
        if not self.category_id:
            raise ValueError("category_id must be non-empty.")

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
            INVENTORY_CATEGORY_DELETE_REQUEST,
            {"category_id": self.category_id},
            store_id=store_id,
            actor_type=actor_type,
            actor_id=actor_id,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
