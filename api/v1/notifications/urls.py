"""
URL configuration for notification endpoints.
"""

from django.urls import path

from api.v1.notifications import views

urlpatterns = [
    path("notifications", views.NotificationListView.as_view(), name="notifications"),
    path(
        "notifications/unread-count",
        views.UnreadCountView.as_view(),
        name="notifications-unread-count",
    ),
    path(
        "notifications/<uuid:notification_id>/read",
        views.MarkNotificationReadView.as_view(),
        name="notification-read",
    ),
]
