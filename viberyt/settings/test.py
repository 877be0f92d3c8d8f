"""
Test settings for the VibeRyt license service.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    import urllib.parse

    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path.lstrip("/")
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {
                "NAME": db_name + "_test",
            },
        }
    }
else:
    # Use in-memory SQLite for faster local tests
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LICENSE_KEY_SECRET = "test-secret-salt"
EXPOSE_LICENSE_KEY_IN_RESPONSE = True

SUPABASE_URL = "https://identity.test"
SUPABASE_SERVICE_ROLE_KEY = "test-service-role-key"
SUPABASE_ANON_KEY = "test-anon-key"

POLAR_ACCESS_TOKEN = "test-polar-token"
POLAR_TRIAL_PRODUCT_ID = "prod_trial"
POLAR_LIFETIME_PRODUCT_ID = "prod_lifetime"
POLAR_WEBHOOK_SECRET = "test-webhook-secret"
APP_URL = "https://viberyt.test"

OBSERVABILITY_ENABLED = False

# Disable logging during tests
LOGGING_CONFIG = None
