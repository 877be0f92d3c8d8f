"""
URL configuration for payments API endpoints.
"""

from django.urls import path

from api.v1.payments import views

urlpatterns = [
    path("checkout", views.CreateCheckoutView.as_view(), name="create-checkout"),
    path("webhook", views.PaymentWebhookView.as_view(), name="payment-webhook"),
]
