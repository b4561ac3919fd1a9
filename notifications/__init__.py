"""
Notifications module - in-app notifications and expiration alert delivery.
"""
