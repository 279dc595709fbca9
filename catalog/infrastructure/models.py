"""
SubscriptionPlan and PaymentMethod models.
"""
import uuid

from django.db import models


class SubscriptionPlan(models.Model):
    """
    A priced license duration offered to users.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    duration_months = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="USD")
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "subscription_plans"
        ordering = ["duration_months", "name"]

    def __str__(self):
        return f"{self.name} ({self.duration_months} months)"


class PaymentMethod(models.Model):
    """
    A manually verified payment method with instructions for users.
    """

    TYPE_CHOICES = [
        ("bank_transfer", "Bank Transfer"),
        ("crypto", "Crypto"),
        ("paypal", "PayPal"),
        ("zelle", "Zelle"),
        ("binance", "Binance"),
        ("binance_pay_qr", "Binance Pay QR"),
        ("airtm", "AirTM"),
        ("skrill", "Skrill"),
        ("sinpe", "SINPE"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    method_type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    details = models.JSONField(default=dict, blank=True)
    instructions = models.TextField()
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "payment_methods"
        ordering = ["name"]

    def __str__(self):
        return self.name
