"""
Subscriptions module - client subscriptions to products and their billing periods.
"""
