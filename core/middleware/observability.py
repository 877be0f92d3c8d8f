"""
Observability middleware.

Gives every request a correlation id (reusing the caller's
``X-Correlation-ID`` when present), ties it to the active OpenTelemetry
span and writes one structured log line per request.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def request_outcome(status_code: int) -> str:
    """Classify a status code as success, client_error or server_error."""
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """Correlation ids, trace ids and request logging."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        log_context: Dict[str, Any] = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
        }
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            request.trace_id = format_trace_id(span_context.trace_id)  # type: ignore
            log_context["trace_id"] = request.trace_id
            log_context["span_id"] = format_span_id(span_context.span_id)

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **log_context,
                    "request_status": "exception",
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        outcome = request_outcome(response.status_code)
        self._log(request, response, outcome, duration, log_context)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if "trace_id" in log_context:
            response["X-Trace-ID"] = log_context["trace_id"]
        return response

    @staticmethod
    def _log(request, response, outcome, duration, log_context):
        extra = {
            **log_context,
            "request_status": outcome,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
            # Installer downloads stream; their size is not known here
            "response_size": 0 if response.streaming else len(response.content),
        }
        account = getattr(request, "account", None)
        if account:
            extra["user_id"] = str(account.user_id)

        if outcome == "server_error":
            logger.error("Request completed with server error", extra=extra)
        elif outcome == "client_error":
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.info("Request completed", extra=extra)
