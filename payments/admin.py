"""
Django admin configuration for payments app.
"""
from django.contrib import admin
from django.utils.html import format_html

from payments.infrastructure.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for Payment model."""

    list_display = [
        "id",
        "user",
        "amount",
        "currency",
        "payment_method",
        "status_display",
        "created_at",
    ]
    list_filter = ["status", "currency", "payment_method", "created_at"]
    search_fields = ["user__username", "user__email", "transaction_reference"]
    readonly_fields = [
        "id",
        "user",
        "license_request",
        "status",
        "verified_by",
        "verified_at",
        "rejection_reason",
        "created_at",
        "updated_at",
    ]

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "pending": "orange",
            "verified": "green",
            "rejected": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return (
            super()
            .get_queryset(request)
            .select_related("user", "payment_method", "subscription_plan")
        )
