"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import LicenseKey


@admin.register(LicenseKey)
class LicenseKeyAdmin(admin.ModelAdmin):
    """Admin interface for LicenseKey model."""

    list_display = [
        "license_key",
        "user",
        "key_type",
        "status_display",
        "is_activated",
        "expires_at",
        "created_at",
    ]
    list_filter = ["key_type", "is_activated", "expires_at", "created_at"]
    search_fields = ["license_key", "user__id"]
    readonly_fields = ["id", "license_key", "created_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "user", "license_key", "key_type"),
            },
        ),
        (
            "Activation",
            {
                "fields": ("is_activated", "device_id"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at", "created_at"),
            },
        ),
    )

    def status_display(self, obj):
        """Display expiry status with color coding."""
        if obj.is_expired:
            return format_html('<span style="color: gray; font-weight: bold;">EXPIRED</span>')
        return format_html('<span style="color: green; font-weight: bold;">ACTIVE</span>')

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user")
