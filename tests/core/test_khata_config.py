"""Khata settings tests."""

from decimal import Decimal

import pytest

from core.config import SHARED_STORE_ID, KhataSettings, load_settings


class TestKhataSettings:
    def test_defaults(self):
        settings = KhataSettings()
        assert settings.store_id == SHARED_STORE_ID == "shared_khata_v1"
        assert settings.language == "bn"
        assert settings.undo_window_seconds == 5.0
        assert settings.sync_debounce_seconds == 1.0
        assert settings.allow_advance is True
        assert settings.allow_negative_stock is True
        assert settings.default_low_stock_threshold == Decimal("10")

    def test_invalid_language(self):
        with pytest.raises(ValueError, match="language"):
            KhataSettings(language="fr")

    def test_negative_undo_window(self):
        with pytest.raises(ValueError):
            KhataSettings(undo_window_seconds=-1)

    def test_threshold_coerced_to_decimal(self):
        assert KhataSettings(default_low_stock_threshold="7").default_low_stock_threshold == Decimal("7")

    def test_from_mapping_ignores_unknown_keys(self):
        settings = KhataSettings.from_mapping({"LANGUAGE": "en", "colour": "green"})
        assert settings.language == "en"

    def test_with_overrides(self):
        assert KhataSettings().with_overrides(allow_advance=False).allow_advance is False


class TestLoadSettings:
    def test_reads_django_khata_dict(self, settings):
        settings.KHATA = {"language": "en", "undo_window_seconds": 8}
        loaded = load_settings()
        assert loaded.language == "en"
        assert loaded.undo_window_seconds == 8

    def test_overrides_win(self, settings):
        settings.KHATA = {"language": "en"}
        assert load_settings({"language": "bn"}).language == "bn"
