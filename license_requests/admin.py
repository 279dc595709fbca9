"""
Django admin configuration for license_requests app.

Status changes go through the portal API so that licenses are issued in
the same transaction; the admin only exposes the records.
"""
from django.contrib import admin
from django.utils.html import format_html

from license_requests.infrastructure.models import LicenseRequest

STATUS_COLORS = {
    "pending": "orange",
    "pending_payment": "goldenrod",
    "payment_verified": "steelblue",
    "approved": "green",
    "rejected": "red",
}


@admin.register(LicenseRequest)
class LicenseRequestAdmin(admin.ModelAdmin):
    """Admin interface for LicenseRequest model."""

    list_display = [
        "full_name",
        "user",
        "status_display",
        "subscription_plan",
        "created_at",
    ]
    list_filter = ["status", "subscription_plan", "created_at"]
    search_fields = ["first_name", "last_name", "user__username", "user__email", "reason"]
    readonly_fields = [
        "id",
        "user",
        "status",
        "payment",
        "approved_by",
        "approved_at",
        "rejected_by",
        "rejected_at",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Request",
            {
                "fields": (
                    "id",
                    "user",
                    "first_name",
                    "last_name",
                    "account_ids",
                    "reason",
                    "subscription_plan",
                    "payment",
                    "status",
                ),
            },
        ),
        (
            "Decision",
            {
                "fields": (
                    "admin_notes",
                    "approved_by",
                    "approved_at",
                    "rejected_by",
                    "rejected_at",
                ),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def full_name(self, obj):
        return f"{obj.first_name} {obj.last_name}"

    full_name.short_description = "Name"

    def status_display(self, obj):
        """Display status with color coding."""
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            STATUS_COLORS.get(obj.status, "black"),
            obj.get_status_display(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user", "subscription_plan")
