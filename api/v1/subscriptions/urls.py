"""
URL configuration for subscription endpoints.
"""

from django.urls import path

from api.v1.subscriptions import views

urlpatterns = [
    path("subscriptions", views.SubscriptionListView.as_view(), name="subscriptions"),
    path(
        "subscriptions/<uuid:subscription_id>",
        views.SubscriptionDetailView.as_view(),
        name="subscription-detail",
    ),
]
