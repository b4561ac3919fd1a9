"""
Model registration for the clients app.
"""
from clients.infrastructure.models import Client, Product  # noqa: F401
