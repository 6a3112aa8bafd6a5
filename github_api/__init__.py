"""
Awaitable GitHub REST API client.

Contains the HTTP connection and the endpoint clients. These encapsulate:

- Base URLs, credentials and request shapes
- Link header pagination
- Error handling that maps to shared errors
"""

from .client import GitHubClient
from .clients import AuthorizationsClient
from .connection import ApiResponse, AuthenticationType, Connection, Credentials

__all__ = [
    "ApiResponse",
    "AuthenticationType",
    "AuthorizationsClient",
    "Connection",
    "Credentials",
    "GitHubClient",
]
