"""
License and LicenseAccount models.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    An issued license binding account IDs to an expiry date.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
        ("expired", "Expired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=19, unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active", db_index=True)
    expires_at = models.DateTimeField(db_index=True)
    metadata = models.JSONField(default=dict, blank=True, help_text="Originating request, approver")
    license_request = models.ForeignKey(
        "license_requests.LicenseRequest",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="licenses",
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expires_at"]),
        ]

    def __str__(self):
        return self.license_key

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class LicenseAccount(models.Model):
    """
    One account ID covered by a license. Kept as rows so account lookups
    use an index on every database backend.
    """

    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="accounts")
    account_id = models.CharField(max_length=32, db_index=True)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = "license_accounts"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "account_id"], name="unique_account_per_license"
            ),
        ]

    def __str__(self):
        return self.account_id
