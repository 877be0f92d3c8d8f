"""
URL configuration for the installer download.
"""

from django.urls import path

from api.download import views

urlpatterns = [
    path("", views.InstallerDownloadView.as_view(), name="installer-download"),
]
