"""
Licenses module - License lifecycle management.

This module handles:
- License entity and its state machine (issue, activate, revoke, expire, renew)
- License key generation
- Expiring-license alerts and the expiry sweep
"""
