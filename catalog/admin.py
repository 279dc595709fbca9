"""
Django admin configuration for catalog app.
"""
from django.contrib import admin

from catalog.infrastructure.models import PaymentMethod, SubscriptionPlan


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(admin.ModelAdmin):
    """Admin interface for SubscriptionPlan model."""

    list_display = ["name", "duration_months", "price", "currency", "is_active", "updated_at"]
    list_filter = ["is_active", "currency"]
    search_fields = ["name", "description"]
    readonly_fields = ["id", "created_at", "updated_at"]


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    """Admin interface for PaymentMethod model."""

    list_display = ["name", "method_type", "is_active", "updated_at"]
    list_filter = ["method_type", "is_active"]
    search_fields = ["name", "instructions"]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "method_type", "is_active"),
            },
        ),
        (
            "Instructions",
            {
                "fields": ("details", "instructions"),
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
