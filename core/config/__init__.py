"""
Khata Core Config — Public API
================================
"""

from core.config.settings import (
    SHARED_STORE_ID,
    VALID_LANGUAGES,
    KhataSettings,
    load_settings,
)

__all__ = [
    "SHARED_STORE_ID",
    "VALID_LANGUAGES",
    "KhataSettings",
    "load_settings",
]
