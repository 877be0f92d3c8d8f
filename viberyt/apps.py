"""
App configuration for the VibeRyt license service.
"""

import logging
import os

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class VibeRytConfig(AppConfig):
    """App configuration for the viberyt project."""

    name = "viberyt"
    verbose_name = "VibeRyt License Service"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers

        # Subscriptions are deduplicated, so a second ready() call is harmless
        register_event_handlers()

        if not settings.OBSERVABILITY_ENABLED:
            return

        # Django's autoreloader imports the project twice; only the serving child sets up
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not getattr(self, "_observability_initialized", False):
            from core.instrumentation import setup_opentelemetry

            logger.info("Setting up observability...")
            setup_opentelemetry()
            self._observability_initialized = True
            logger.info("Observability setup complete")
