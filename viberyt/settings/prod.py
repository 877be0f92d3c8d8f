"""
Production settings for the VibeRyt license service.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Never echo license keys back in production
EXPOSE_LICENSE_KEY_IN_RESPONSE = False

LOGGING = get_logging_config("production")  # noqa: F405
