"""
Entry point for the awaitable GitHub client.
"""

from typing import Optional

import httpx

from github_api.clients.authorizations import AuthorizationsClient
from github_api.connection import AuthenticationType, Connection, Credentials
from shared.config import BaseConfig, get_config
from shared.ensure import argument_not_null
from shared.logging import configure_logging
from shared.tracing import configure_tracing


class GitHubClient:
    """Groups the endpoint clients that share one connection."""

    def __init__(self, connection: Connection):
        argument_not_null(connection, "connection")
        self.connection = connection
        self.authorization = AuthorizationsClient(connection)

    @property
    def authentication_type(self) -> AuthenticationType:
        return self.connection.authentication_type

    @classmethod
    def from_config(cls, config: Optional[BaseConfig] = None,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> "GitHubClient":
        """Build a client from settings; a token wins over login and password."""
        config = config or get_config()

        if config.enable_logging:
            configure_logging(config.user_agent, config.log_level)
        if config.enable_tracing:
            configure_tracing(config.user_agent, enable_console=config.enable_console_tracing)

        if config.token is not None and config.token.get_secret_value().strip():
            credentials = Credentials.from_token(config.token.get_secret_value())
        elif config.login and config.password is not None:
            credentials = Credentials.from_basic(config.login, config.password.get_secret_value())
        else:
            credentials = Credentials.anonymous()

        connection = Connection(
            base_address=config.api_url,
            credentials=credentials,
            user_agent=config.user_agent,
            timeout=config.timeout,
            per_page=config.per_page,
            transport=transport
        )
        return cls(connection)
