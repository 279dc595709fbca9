"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License, LicenseAccount


class LicenseAccountInline(admin.TabularInline):
    """Account IDs covered by a license."""

    model = LicenseAccount
    extra = 0
    fields = ["account_id", "position"]


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "full_name",
        "status_display",
        "account_list",
        "expires_at",
        "created_at",
    ]
    list_filter = ["status", "expires_at", "created_at"]
    search_fields = ["license_key", "first_name", "last_name", "accounts__account_id"]
    readonly_fields = ["id", "license_key", "license_request", "created_at", "updated_at"]
    inlines = [LicenseAccountInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "first_name", "last_name", "status"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Origin",
            {
                "fields": ("license_request", "metadata"),
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

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "active": "green",
            "inactive": "orange",
            "expired": "gray",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def account_list(self, obj):
        return ", ".join(a.account_id for a in obj.accounts.all())

    account_list.short_description = "Accounts"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("accounts")
