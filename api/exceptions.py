"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AuthenticationError,
    DomainException,
    InvalidWebhookSignatureError,
    LicenseAlreadyExistsError,
    LicenseNotFoundError,
    ServiceConfigurationError,
    UpstreamServiceError,
    UserNotFoundError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

# Checked in order; anything else derived from DomainException is a 400
DOMAIN_EXCEPTION_STATUS = (
    ((AuthenticationError, InvalidWebhookSignatureError), status.HTTP_401_UNAUTHORIZED),
    ((UserNotFoundError, LicenseNotFoundError), status.HTTP_404_NOT_FOUND),
    ((LicenseAlreadyExistsError,), status.HTTP_409_CONFLICT),
    ((ServiceConfigurationError, UpstreamServiceError), status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        data = response.data
        message = data.get("detail", data) if isinstance(data, dict) else data
        response.data = {"error": {"code": code, "message": message}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def status_for_domain_exception(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code."""
    for exception_types, status_code in DOMAIN_EXCEPTION_STATUS:
        if isinstance(exc, exception_types):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else "unknown"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for_domain_exception(exc)
    error = {"code": exc.code, "message": exc.message}
    if isinstance(exc, LicenseAlreadyExistsError) and exc.existing:
        error["existing"] = exc.existing

    if status_code >= 500:
        errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
        logger.error(
            "Service exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    return Response({"error": error}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
