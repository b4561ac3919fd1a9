"""
Dashboard module - read-only aggregates for staff.
"""
