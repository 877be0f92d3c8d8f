"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path("claim-trial", views.ClaimTrialView.as_view(), name="claim-trial"),
    path("me", views.LicenseOverviewView.as_view(), name="license-overview"),
    path("validate", views.ValidateLicenseView.as_view(), name="validate-license"),
]
