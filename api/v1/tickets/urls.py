"""
URL configuration for ticket endpoints.
"""

from django.urls import path

from api.v1.tickets import views

urlpatterns = [
    path("tickets", views.TicketListView.as_view(), name="tickets"),
    path("tickets/<uuid:ticket_id>", views.TicketDetailView.as_view(), name="ticket-detail"),
]
