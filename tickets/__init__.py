"""
Tickets module - client support tickets.
"""
