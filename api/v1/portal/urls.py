"""
URL configuration for portal API endpoints.
"""

from django.urls import path

from api.v1.portal import views

app_name = "portal"

urlpatterns = [
    path("plans", views.SubscriptionPlanListView.as_view(), name="list-plans"),
    path(
        "payment-methods",
        views.PaymentMethodListView.as_view(),
        name="list-payment-methods",
    ),
    path(
        "requests",
        views.LicenseRequestListCreateView.as_view(),
        name="requests",
    ),
    path(
        "requests/<uuid:request_id>",
        views.LicenseRequestDetailView.as_view(),
        name="request-detail",
    ),
    path(
        "requests/<uuid:request_id>/payments",
        views.SubmitPaymentView.as_view(),
        name="submit-payment",
    ),
    path("payments", views.PaymentListView.as_view(), name="payments"),
    path(
        "payments/<uuid:payment_id>",
        views.PaymentDetailView.as_view(),
        name="payment-detail",
    ),
]
