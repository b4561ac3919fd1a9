"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("licenses", views.LicenseListView.as_view(), name="licenses"),
    path("licenses/expire", views.ExpireLicensesView.as_view(), name="expire-licenses"),
    path(
        "licenses/alerts/dispatch",
        views.DispatchAlertsView.as_view(),
        name="dispatch-license-alerts",
    ),
    path(
        "licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<uuid:license_id>/activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "licenses/<uuid:license_id>/revoke",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
    path(
        "licenses/<uuid:license_id>/renew",
        views.RenewLicenseView.as_view(),
        name="renew-license",
    ),
]
