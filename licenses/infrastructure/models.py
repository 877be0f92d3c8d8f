"""
License key record model.
"""
import uuid

from django.db import models
from django.utils import timezone


class LicenseKey(models.Model):
    """
    A license key issued to a user.
    The key string is produced by the license codec; this row only records
    ownership, type and expiry.
    """

    KEY_TYPE_CHOICES = [
        ("trial", "Trial"),
        ("lifetime", "Lifetime"),
        ("demo", "Demo"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        "accounts.UserProfile", on_delete=models.CASCADE, related_name="license_keys"
    )
    license_key = models.CharField(max_length=64, unique=True, db_index=True)
    key_type = models.CharField(max_length=20, choices=KEY_TYPE_CHOICES)
    device_id = models.CharField(
        max_length=255, null=True, blank=True, help_text="Reserved for device binding"
    )
    expires_at = models.DateTimeField(null=True, blank=True)
    is_activated = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "license_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "key_type"]),
            models.Index(fields=["user", "created_at"]),
        ]

    def __str__(self):
        return self.license_key

    @property
    def is_expired(self) -> bool:
        """
        Check if the license has passed its expiry date.

        Returns:
            True if an expiry date exists and is in the past
        """
        return bool(self.expires_at and self.expires_at < timezone.now())
