"""
Endpoint clients built on top of a Connection.
"""

from .authorizations import AuthorizationsClient

__all__ = [
    "AuthorizationsClient",
]
