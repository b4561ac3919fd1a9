"""
Clients module - client organisations and products.
"""
