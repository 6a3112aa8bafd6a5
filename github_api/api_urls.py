"""
Relative URIs for the OAuth authorization endpoints.
"""

from typing import Optional
from urllib.parse import quote


def _escape(value: str) -> str:
    return quote(value, safe="")


def authorizations() -> str:
    """Authorizations of the authenticated user."""
    return "authorizations"


def authorization(authorization_id: int) -> str:
    """A single authorization."""
    return f"authorizations/{authorization_id}"


def authorization_client(client_id: str) -> str:
    """Get-or-create endpoint for an OAuth application."""
    return f"authorizations/clients/{_escape(client_id)}"


def application_authorization(client_id: str, access_token: Optional[str] = None) -> str:
    """Token endpoints of an OAuth application, or one of its tokens."""
    uri = f"applications/{_escape(client_id)}/tokens"
    if access_token is not None:
        uri = f"{uri}/{_escape(access_token)}"
    return uri
