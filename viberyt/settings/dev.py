"""
Development settings for the VibeRyt license service.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

EXPOSE_LICENSE_KEY_IN_RESPONSE = (
    os.environ.get("EXPOSE_LICENSE_KEY_IN_RESPONSE", "True") == "True"
)

# Observability stack is opt-in locally
OBSERVABILITY_ENABLED = os.environ.get("OBSERVABILITY_ENABLED", "False") == "True"

# Database - Use PostgreSQL in Docker, SQLite for local development
# Override with environment variable DB_ENGINE=sqlite for SQLite
if os.environ.get("DB_ENGINE") == "sqlite":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Use local memory cache unless Redis is configured
if not os.environ.get("REDIS_URL"):
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
