"""
Khata Sync Store - Shared Document Rows
=======================================
A row holds the whole ledger document of one shared store.
Writes overwrite the row wholesale (last write wins).
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class StoreRow(models.Model):
    id = models.CharField(primary_key=True, max_length=255)
    data = models.JSONField(default=dict)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "khata_store_rows"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.id} (updated {self.updated_at.isoformat()})"
