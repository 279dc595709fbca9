"""
URL configuration for MT5 Expert Advisor endpoints.
"""

from django.urls import path

from api.v1.mt5 import views

app_name = "mt5"

urlpatterns = [
    path("validate-account", views.ValidateAccountView.as_view(), name="validate-account"),
    path("ping", views.PingView.as_view(), name="ping"),
]
