"""
Khata – Django Settings (Infrastructure Only)
=============================================
Django hosts the shared-row store and its JSON API.
The ledger itself is plain Python; it reads its tunables from the
KHATA dict below through core.config.load_settings().
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("KHATA_SECRET_KEY", "khata-dev-key-replace-before-deployment")

DEBUG = _env_bool("KHATA_DEBUG", True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("KHATA_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── Khata Modules ─────────────────────────────────────
    "core.sync_store",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("KHATA_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Ledger ────────────────────────────────────────────────────
KHATA = {
    "store_id": os.environ.get("KHATA_STORE_ID", "shared_khata_v1"),
    "language": os.environ.get("KHATA_LANGUAGE", "bn"),
    "undo_window_seconds": float(os.environ.get("KHATA_UNDO_WINDOW_SECONDS", "5")),
    "sync_debounce_seconds": float(os.environ.get("KHATA_SYNC_DEBOUNCE_SECONDS", "1")),
    "remote_url": os.environ.get("KHATA_REMOTE_URL") or None,
    "remote_timeout_seconds": float(os.environ.get("KHATA_REMOTE_TIMEOUT_SECONDS", "30")),
    "cache_path": os.environ.get("KHATA_CACHE_PATH") or None,
    "allow_advance": _env_bool("KHATA_ALLOW_ADVANCE", True),
    "allow_negative_stock": _env_bool("KHATA_ALLOW_NEGATIVE_STOCK", True),
    "default_low_stock_threshold": os.environ.get("KHATA_DEFAULT_LOW_STOCK_THRESHOLD", "10"),
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "khata": {
            "handlers": ["console"],
            "level": os.environ.get("KHATA_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
