"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    """Admin interface for UserProfile model."""

    list_display = ["id", "subscription_type", "trial_ends_at", "license_count", "created_at"]
    list_filter = ["subscription_type", "created_at"]
    search_fields = ["id"]
    readonly_fields = ["id", "created_at", "updated_at"]

    def license_count(self, obj):
        """Display number of license keys issued to this user."""
        return obj.license_keys.count()

    license_count.short_description = "Licenses"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("license_keys")
