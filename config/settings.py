"""
OwnerLens – Django Settings (Infrastructure Only)
==================================================
Django serves as the HTTP container for the analytics API.
The analytics engine does not depend on Django; only adapters/ do.

OWNERLENS_ANALYTICS holds the deployment tunables read by
adapters.django_api.wiring.load_analytics_config().
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "OWNERLENS_SECRET_KEY", "ownerlens-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("OWNERLENS_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
# Django infrastructure only. The analytics engine owns no models.
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Records are served by the RecordStore.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "ownerlens": {
            "handlers": ["console"],
            "level": os.environ.get("OWNERLENS_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

# ── Analytics ─────────────────────────────────────────────────
# Keys map onto core.config.analytics.AnalyticsConfig fields.
OWNERLENS_ANALYTICS = {
    "tax_rate": "0.15",
    "default_multiplier": "3.5",
    "industry_multipliers": {
        "manufacturer": "4.0",
        "wholesaler": "3.5",
        "retailer": "3.0",
        "distributor": "3.5",
        "ecommerce": "4.5",
        "service": "3.8",
        "trader": "3.2",
    },
    "top_n": 5,
}
