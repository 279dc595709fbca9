"""
URL configuration for backoffice API endpoints.
"""

from django.urls import path

from api.v1.backoffice import views

app_name = "backoffice"

urlpatterns = [
    path("requests", views.AdminLicenseRequestListView.as_view(), name="requests"),
    path(
        "requests/<uuid:request_id>",
        views.AdminLicenseRequestDetailView.as_view(),
        name="request-detail",
    ),
    path(
        "requests/<uuid:request_id>/decision",
        views.LicenseRequestDecisionView.as_view(),
        name="request-decision",
    ),
    path("payments", views.AdminPaymentListView.as_view(), name="payments"),
    path(
        "payments/<uuid:payment_id>/decision",
        views.PaymentDecisionView.as_view(),
        name="payment-decision",
    ),
    path("licenses", views.AdminLicenseListCreateView.as_view(), name="licenses"),
    path(
        "licenses/<uuid:license_id>",
        views.AdminLicenseDetailView.as_view(),
        name="license-detail",
    ),
    path("plans", views.AdminSubscriptionPlanListCreateView.as_view(), name="plans"),
    path(
        "plans/<uuid:plan_id>",
        views.AdminSubscriptionPlanDetailView.as_view(),
        name="plan-detail",
    ),
    path(
        "payment-methods",
        views.AdminPaymentMethodListCreateView.as_view(),
        name="payment-methods",
    ),
    path(
        "payment-methods/<uuid:method_id>",
        views.AdminPaymentMethodDetailView.as_view(),
        name="payment-method-detail",
    ),
]
