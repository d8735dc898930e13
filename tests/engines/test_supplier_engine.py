"""Khata supplier engine tests."""

from datetime import datetime, timezone

import pytest

from core.bootstrap import build_khata
from core.commands import ReasonCode
from core.config import KhataSettings
from core.primitives import SUPPLIERS
from core.time import FixedClock
from engines.supplier.commands import (
    SupplierAddRequest,
    SupplierDeleteRequest,
    SupplierUpdateRequest,
)

NOW = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def _book():
    return build_khata(KhataSettings(), clock=FixedClock(NOW), auto_sync=False)


class TestSuppliers:
    def test_add(self):
        book = _book()
        result = book.execute(SupplierAddRequest(
            name="জামাল এন্টারপ্রাইজ", phone="01700000000", supplier_id="2",
        ))
        assert result.execution_result.event_type == "supplier.account.added.v1"
        assert book.data.get(SUPPLIERS, "2").phone == "01700000000"

    def test_blank_name(self):
        with pytest.raises(ValueError):
            SupplierAddRequest(name="")

    def test_update(self):
        book = _book()
        book.execute(SupplierUpdateRequest(supplier_id="1", name="Karim Traders"))
        assert book.data.get(SUPPLIERS, "1").name == "Karim Traders"

    def test_delete_missing_rejected(self):
        book = _book()
        result = book.execute(SupplierDeleteRequest(supplier_id="7"))
        assert result.reason.code == ReasonCode.RECORD_NOT_FOUND

    def test_delete_and_undo(self):
        book = _book()
        book.execute(SupplierDeleteRequest(supplier_id="1"))
        assert book.data.suppliers == ()
        book.undo()
        assert book.data.get(SUPPLIERS, "1").name == "করিম ট্রেডার্স"
