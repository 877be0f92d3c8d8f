"""
Core views for health checks and system status.

Liveness (``/health/``) never touches collaborators. The component probes
back the per-component endpoints and the readiness check, which also
confirms that a license signing secret is configured.
"""

import logging
from typing import Optional, Tuple

from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)

SERVICE_NAME = "viberyt-license-service"


def probe_database() -> Tuple[bool, Optional[str]]:
    """Run a trivial query; returns (ok, error)."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.warning("Database probe failed: %s", e)
        return False, str(e)
    return True, None


def probe_cache() -> Tuple[bool, Optional[str]]:
    """Write and read back a short-lived key; returns (ok, error)."""
    try:
        cache.set("viberyt:probe", "ok", 10)
        if cache.get("viberyt:probe") != "ok":
            return False, "read back mismatch"
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.warning("Cache probe failed: %s", e)
        return False, str(e)
    return True, None


def _component_response(component: str, ok: bool, error: Optional[str]) -> JsonResponse:
    body = {
        "status": "healthy" if ok else "unhealthy",
        component: "connected" if ok else "disconnected",
    }
    if error:
        body["error"] = error
    return JsonResponse(body, status=200 if ok else 503)


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness endpoint."""

    def get(self, _request):
        return JsonResponse({"status": "healthy", "service": SERVICE_NAME})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        return _component_response("database", *probe_database())


@method_decorator(csrf_exempt, name="dispatch")
class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        return _component_response("cache", *probe_cache())


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """
        Report whether the service can issue and validate keys.

        Returns:
            200 with every check passing, otherwise 503
        """
        checks = {
            "database": probe_database()[0],
            "cache": probe_cache()[0],
            "license_secret": bool(settings.LICENSE_KEY_SECRET),
        }
        ready = all(checks.values())
        return JsonResponse(
            {"status": "ready" if ready else "not_ready", "checks": checks},
            status=200 if ready else 503,
        )
