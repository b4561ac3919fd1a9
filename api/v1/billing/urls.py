"""
URL configuration for billing endpoints.
"""

from django.urls import path

from api.v1.billing import views

urlpatterns = [
    path("invoices", views.InvoiceListView.as_view(), name="invoices"),
    path(
        "invoices/<uuid:invoice_id>",
        views.InvoiceDetailView.as_view(),
        name="invoice-detail",
    ),
    path("transactions", views.TransactionListView.as_view(), name="transactions"),
    path(
        "transactions/<uuid:transaction_id>",
        views.TransactionDetailView.as_view(),
        name="transaction-detail",
    ),
]
