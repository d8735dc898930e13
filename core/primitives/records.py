"""
Khata Primitives — Ledger Records
===================================
One frozen dataclass per entity kept in the shared ledger document.

Python attributes are snake_case; the shared cloud row stores the
camelCase names listed in each class's ``_wire_names``. Every record
round-trips through ``to_dict()`` / ``from_dict()``.
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields
from decimal import Decimal
from typing import Any, ClassVar, Dict, FrozenSet, Mapping, Optional

from core.primitives.money import ZERO, to_decimal, to_json_number


# ══════════════════════════════════════════════════════════════
# WIRE MAPPING
# ══════════════════════════════════════════════════════════════

class WireRecord:
    """Mixin turning a record dataclass into its camelCase JSON shape."""

    _wire_names: ClassVar[Dict[str, str]] = {}
    _decimal_fields: ClassVar[FrozenSet[str]] = frozenset()
    _omit_when_none: ClassVar[FrozenSet[str]] = frozenset()

    @classmethod
    def wire_name(cls, attribute: str) -> str:
        return cls._wire_names.get(attribute, attribute)

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name in self._omit_when_none:
                continue
            if f.name in self._decimal_fields:
                value = to_json_number(value)
            out[self.wire_name(f.name)] = value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        if not isinstance(data, Mapping):
            raise ValueError(
                f"{cls.__name__} must be decoded from an object, "
                f"got {type(data).__name__}."
            )

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            wire = cls.wire_name(f.name)
            if wire not in data:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise ValueError(f"{cls.__name__} is missing '{wire}'.")
                continue
            value = data[wire]
            if f.name in cls._decimal_fields:
                value = to_decimal(value)
            kwargs[f.name] = value
        return cls(**kwargs)


def _normalize(record: Any) -> None:
    if not record.id or not isinstance(record.id, str):
        raise ValueError(f"{type(record).__name__}.id must be a non-empty string.")
    for name in record._decimal_fields:
        object.__setattr__(record, name, to_decimal(getattr(record, name)))


# ══════════════════════════════════════════════════════════════
# MASTER DATA
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Category(WireRecord):
    id: str
    name: str

    def __post_init__(self):
        _normalize(self)


@dataclass(frozen=True)
class Product(WireRecord):
    """A stocked product. ``cost_price`` is the running weighted average."""

    id: str
    name: str
    stock: Decimal = ZERO
    unit: str = ""
    cost_price: Decimal = ZERO
    sale_price: Decimal = ZERO
    low_stock_threshold: Decimal = ZERO
    category_id: Optional[str] = None

    _wire_names = {
        "cost_price": "costPrice",
        "sale_price": "salePrice",
        "low_stock_threshold": "lowStockThreshold",
        "category_id": "categoryId",
    }
    _decimal_fields = frozenset({"stock", "cost_price", "sale_price", "low_stock_threshold"})
    _omit_when_none = frozenset({"category_id"})

    def __post_init__(self):
        _normalize(self)


@dataclass(frozen=True)
class Supplier(WireRecord):
    id: str
    name: str
    phone: str = ""

    def __post_init__(self):
        _normalize(self)


@dataclass(frozen=True)
class Customer(WireRecord):
    """A customer account. Positive ``due_amount`` is owed, negative is advance."""

    id: str
    name: str
    phone: str = ""
    due_amount: Decimal = ZERO

    _wire_names = {"due_amount": "dueAmount"}
    _decimal_fields = frozenset({"due_amount"})

    def __post_init__(self):
        _normalize(self)

    @property
    def has_advance(self) -> bool:
        return self.due_amount < ZERO


# ══════════════════════════════════════════════════════════════
# TRANSACTION LOGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockIn(WireRecord):
    """Purchase of a product from a supplier."""

    id: str
    product_id: str
    supplier_id: str
    quantity: Decimal
    unit_price: Decimal
    date: str
    product_name: str = ""
    product_unit: str = ""
    total_price: Decimal = ZERO
    bill_number: Optional[str] = None

    _wire_names = {
        "product_id": "productId",
        "supplier_id": "supplierId",
        "unit_price": "unitPrice",
        "product_name": "productName",
        "product_unit": "productUnit",
        "total_price": "totalPrice",
        "bill_number": "billNumber",
    }
    _decimal_fields = frozenset({"quantity", "unit_price", "total_price"})
    _omit_when_none = frozenset({"bill_number"})

    def __post_init__(self):
        _normalize(self)


@dataclass(frozen=True)
class StockOut(WireRecord):
    """
    Sale of a product to a customer.

    total_price = quantity × unit_price − discount
    due_added   = total_price − paid_amount (negative means overpaid)
    """

    id: str
    bill_number: str
    product_id: str
    customer_id: str
    quantity: Decimal
    unit_price: Decimal
    date: str
    product_name: str = ""
    product_unit: str = ""
    discount: Decimal = ZERO
    total_price: Decimal = ZERO
    paid_amount: Decimal = ZERO
    due_added: Decimal = ZERO
    is_sample: bool = False

    _wire_names = {
        "bill_number": "billNumber",
        "product_id": "productId",
        "customer_id": "customerId",
        "unit_price": "unitPrice",
        "product_name": "productName",
        "product_unit": "productUnit",
        "total_price": "totalPrice",
        "paid_amount": "paidAmount",
        "due_added": "dueAdded",
        "is_sample": "isSample",
    }
    _decimal_fields = frozenset({
        "quantity", "unit_price", "discount", "total_price", "paid_amount", "due_added",
    })

    def __post_init__(self):
        _normalize(self)


@dataclass(frozen=True)
class PaymentLog(WireRecord):
    """Money collected from a customer; ``discount`` is a waived amount."""

    id: str
    customer_id: str
    amount: Decimal
    date: str
    discount: Decimal = ZERO
    note: str = ""

    _wire_names = {"customer_id": "customerId"}
    _decimal_fields = frozenset({"amount", "discount"})

    def __post_init__(self):
        _normalize(self)

    @property
    def settled(self) -> Decimal:
        """Amount the payment takes off the customer's due."""
        return self.amount + self.discount


@dataclass(frozen=True)
class LedgerEntry(WireRecord):
    """Miscellaneous expense line."""

    id: str
    date: str
    description: str = ""
    name: str = ""
    amount: Decimal = ZERO

    _decimal_fields = frozenset({"amount"})

    def __post_init__(self):
        _normalize(self)
