"""
Shared building blocks for the entitlement service.

Domain exceptions, value objects and events used by every app, the
in-process event bus with its audit log handler, the actor and
observability middleware, Prometheus metrics and the daily license
maintenance tasks.
"""
