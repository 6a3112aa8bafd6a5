"""
Awaitable client for the OAuth authorization endpoints.
"""

from typing import Any, Dict, List, Optional

from github_api import api_urls
from github_api.connection import Connection, OTP_HEADER
from github_api.models import (
    ApplicationAuthorization,
    Authorization,
    AuthorizationUpdate,
    NewAuthorization,
)
from shared.ensure import argument_not_null, argument_not_null_or_empty_string
from shared.errors import TwoFactorChallengeFailedError, TwoFactorRequiredError
from shared.logging import get_logger


class AuthorizationsClient:
    """Client for the /authorizations and /applications token endpoints.

    Most of these endpoints only accept basic authentication: the user's
    login and password for /authorizations, and the application's client id
    and secret for /applications.
    """

    def __init__(self, connection: Connection):
        argument_not_null(connection, "connection")
        self.connection = connection
        self.logger = get_logger("github.authorizations")

    async def get_all(self) -> List[Authorization]:
        """List every authorization of the authenticated user."""
        items = await self.connection.get_all_pages(api_urls.authorizations())
        return [Authorization.model_validate(item) for item in items]

    async def get(self, authorization_id: int) -> Authorization:
        """Get a single authorization."""
        response = await self.connection.get(api_urls.authorization(authorization_id))
        return Authorization.model_validate(response.body)

    async def get_or_create_application_authentication(
        self,
        client_id: str,
        client_secret: str,
        new_authorization: NewAuthorization,
        two_factor_authentication_code: Optional[str] = None
    ) -> ApplicationAuthorization:
        """Return the user's token for an application, creating it when missing.

        Raises TwoFactorRequiredError when the account uses two-factor
        authentication and no code was given, and
        TwoFactorChallengeFailedError when the given code is rejected.
        """
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(client_secret, "client_secret")
        argument_not_null(new_authorization, "new_authorization")
        if two_factor_authentication_code is not None:
            argument_not_null_or_empty_string(two_factor_authentication_code, "two_factor_authentication_code")

        body: Dict[str, Any] = {"client_secret": client_secret}
        body.update(new_authorization.model_dump(mode="json", exclude_none=True))

        headers = None
        if two_factor_authentication_code is not None:
            headers = {OTP_HEADER: two_factor_authentication_code}

        try:
            response = await self.connection.put(
                api_urls.authorization_client(client_id),
                body=body,
                headers=headers
            )
        except TwoFactorRequiredError as e:
            if two_factor_authentication_code is None:
                raise
            self.logger.warning("Two-factor code rejected", client_id=client_id)
            raise TwoFactorChallengeFailedError(
                documentation_url=e.documentation_url,
                details={"two_factor_type": e.two_factor_type}
            ) from e

        return ApplicationAuthorization.model_validate(response.body)

    async def check_application_authentication(self, client_id: str, access_token: str) -> ApplicationAuthorization:
        """Check a token without counting against failed login limits."""
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        response = await self.connection.get(api_urls.application_authorization(client_id, access_token))
        return ApplicationAuthorization.model_validate(response.body)

    async def reset_application_authentication(self, client_id: str, access_token: str) -> ApplicationAuthorization:
        """Reset a token; the returned authorization carries the new token."""
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        response = await self.connection.post(api_urls.application_authorization(client_id, access_token))
        return ApplicationAuthorization.model_validate(response.body)

    async def revoke_application_authentication(self, client_id: str, access_token: str) -> None:
        """Revoke a single token of an application."""
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        await self.connection.delete(api_urls.application_authorization(client_id, access_token))

    async def revoke_all_application_authentications(self, client_id: str) -> None:
        """Revoke every token of an application."""
        argument_not_null_or_empty_string(client_id, "client_id")

        await self.connection.delete(api_urls.application_authorization(client_id))

    async def update(self, authorization_id: int, authorization_update: AuthorizationUpdate) -> Authorization:
        argument_not_null(authorization_update, "authorization_update")

        response = await self.connection.patch(
            api_urls.authorization(authorization_id),
            body=authorization_update
        )
        return Authorization.model_validate(response.body)

    async def delete(self, authorization_id: int) -> None:
        await self.connection.delete(api_urls.authorization(authorization_id))
