"""
Data models for the OAuth authorization endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Application(_ResponseModel):
    """OAuth application an authorization belongs to."""
    name: str
    url: Optional[str] = None
    client_id: Optional[str] = None


class Authorization(_ResponseModel):
    """OAuth authorization granted by the authenticated user."""
    id: int
    url: Optional[str] = None
    app: Optional[Application] = None
    token: Optional[str] = None
    hashed_token: Optional[str] = None
    token_last_eight: Optional[str] = None
    note: Optional[str] = None
    note_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    scopes: List[str] = Field(default_factory=list)
    fingerprint: Optional[str] = None


class ApplicationAuthorization(Authorization):
    """Authorization returned to the OAuth application, with the full token."""
    token: str


class NewAuthorization(BaseModel):
    """Scopes and metadata for a token to create."""
    scopes: Optional[List[str]] = None
    note: Optional[str] = None
    note_url: Optional[str] = None
    fingerprint: Optional[str] = None


class AuthorizationUpdate(BaseModel):
    """Changes to apply to an existing authorization."""
    scopes: Optional[List[str]] = None
    add_scopes: Optional[List[str]] = None
    remove_scopes: Optional[List[str]] = None
    note: Optional[str] = None
    note_url: Optional[str] = None
    fingerprint: Optional[str] = None
