"""
Khata Sync Store - App Configuration
====================================
The hosted document store: one JSON row per shared store id.
"""

from django.apps import AppConfig


class CoreSyncStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.sync_store"
    label = "core_sync_store"
    verbose_name = "Khata Sync Store"
