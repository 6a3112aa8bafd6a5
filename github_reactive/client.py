"""
Entry point for the observable GitHub client.
"""

from typing import Optional

import httpx

from github_api.client import GitHubClient
from github_api.connection import AuthenticationType
from github_reactive.authorizations import ObservableAuthorizationsClient
from shared.config import BaseConfig
from shared.ensure import argument_not_null


class ObservableGitHubClient:
    """Observable counterpart of GitHubClient."""

    def __init__(self, client: GitHubClient):
        argument_not_null(client, "client")
        self.github_client = client
        self.connection = client.connection
        self.authorization = ObservableAuthorizationsClient(client)

    @property
    def authentication_type(self) -> AuthenticationType:
        return self.github_client.authentication_type

    @classmethod
    def from_config(cls, config: Optional[BaseConfig] = None,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> "ObservableGitHubClient":
        return cls(GitHubClient.from_config(config, transport=transport))
