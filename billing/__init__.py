"""
Billing module - invoices, payment transactions and invoice numbering.
"""
