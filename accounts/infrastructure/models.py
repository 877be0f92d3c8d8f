"""
User profile model.
"""

from django.db import models


class UserProfile(models.Model):
    """
    License-service view of an identity-provider account.
    The primary key is the identity provider's user id.
    """

    SUBSCRIPTION_CHOICES = [
        ("none", "None"),
        ("trial", "Trial"),
        ("lifetime", "Lifetime"),
    ]

    id = models.UUIDField(primary_key=True, editable=False)
    subscription_type = models.CharField(
        max_length=20, choices=SUBSCRIPTION_CHOICES, default="none", db_index=True
    )
    trial_activated_at = models.DateTimeField(null=True, blank=True)
    trial_ends_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "user_profiles"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} ({self.subscription_type})"
