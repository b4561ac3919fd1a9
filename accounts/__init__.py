"""
Accounts module - user profiles, roles and the access policy.
"""
