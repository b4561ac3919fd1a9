"""
URL configuration for dashboard endpoints.
"""

from django.urls import path

from api.v1.dashboard import views

urlpatterns = [
    path("dashboard/stats", views.DashboardStatsView.as_view(), name="dashboard-stats"),
    path(
        "dashboard/expiring-licenses",
        views.ExpiringLicensesView.as_view(),
        name="dashboard-expiring-licenses",
    ),
    path(
        "dashboard/recent-transactions",
        views.RecentTransactionsView.as_view(),
        name="dashboard-recent-transactions",
    ),
    path(
        "dashboard/recent-tickets",
        views.RecentTicketsView.as_view(),
        name="dashboard-recent-tickets",
    ),
]
