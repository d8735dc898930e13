"""
Khata Primitives — Seed Document
==================================
The document a brand new shared row starts from.
"""

from __future__ import annotations

from decimal import Decimal

from core.primitives.document import KhataData
from core.primitives.records import Category, Customer, Product, Supplier


def initial_data() -> KhataData:
    """Two categories, two products, one supplier, one customer, no logs."""
    return KhataData(
        categories=(
            Category(id="cat1", name="মুদি (Grocery)"),
            Category(id="cat2", name="পানীয় (Beverage)"),
        ),
        products=(
            Product(
                id="1",
                name="চিনি (Sugar)",
                category_id="cat1",
                stock=Decimal("50"),
                unit="Kg",
                cost_price=Decimal("110"),
                sale_price=Decimal("125"),
                low_stock_threshold=Decimal("10"),
            ),
            Product(
                id="2",
                name="মসুর ডাল (Lentil)",
                category_id="cat1",
                stock=Decimal("30"),
                unit="Kg",
                cost_price=Decimal("130"),
                sale_price=Decimal("145"),
                low_stock_threshold=Decimal("15"),
            ),
        ),
        suppliers=(
            Supplier(id="1", name="করিম ট্রেডার্স", phone="01711223344"),
        ),
        customers=(
            Customer(
                id="1",
                name="রহিম সাহেব",
                phone="01999887766",
                due_amount=Decimal("500"),
            ),
        ),
    )


INITIAL_DATA = initial_data()
