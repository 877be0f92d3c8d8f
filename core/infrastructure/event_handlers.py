"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging, customer notification and metrics.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.metrics import license_keys_issued_total
from licenses.domain.events import LicenseKeyIssued

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the structured log."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class LicenseKeyNotificationHandler(EventHandler):
    """
    Notifies the customer that a license key was issued.

    Email delivery is not wired up yet; the handler records the pending
    notification so that keys can be resent manually.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle LicenseKeyIssued.

        Args:
            event: LicenseKeyIssued event
        """
        if not isinstance(event, LicenseKeyIssued):
            return
        # TODO: deliver the key by email through the transactional mail provider
        logger.info(
            "License key email pending for %s (%s)",
            event.customer_email,
            event.key_type,
            extra={
                "license_record_id": str(event.license_record_id),
                "user_id": str(event.user_id),
            },
        )


class LicenseMetricsHandler(EventHandler):
    """Counts issued license keys per type."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseKeyIssued):
            license_keys_issued_total.labels(key_type=event.key_type).inc()


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    event_bus.subscribe(LicenseKeyIssued, AuditLogEventHandler())
    event_bus.subscribe(LicenseKeyIssued, LicenseKeyNotificationHandler())
    event_bus.subscribe(LicenseKeyIssued, LicenseMetricsHandler())

    logger.info("Event handlers registered")
