"""
LicenseRequest model.
"""
import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

OPEN_STATUSES = ["pending", "pending_payment", "payment_verified"]


class LicenseRequest(models.Model):
    """
    A user's request for a license over one or more account IDs.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("pending_payment", "Pending Payment"),
        ("payment_verified", "Payment Verified"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="license_requests",
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    account_ids = models.JSONField(default=list)
    reason = models.TextField()
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default="pending", db_index=True
    )
    subscription_plan = models.ForeignKey(
        "catalog.SubscriptionPlan",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="license_requests",
    )
    payment = models.ForeignKey(
        "payments.Payment",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Latest submitted payment",
    )
    admin_notes = models.TextField(blank=True)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    rejected_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "license_requests"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "status"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=Q(status__in=OPEN_STATUSES),
                name="unique_open_license_request_per_user",
            ),
            models.CheckConstraint(
                condition=Q(approved_by__isnull=True) | Q(rejected_by__isnull=True),
                name="license_request_single_decision",
            ),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.status})"
