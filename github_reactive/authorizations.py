"""
Observable client for the OAuth authorization endpoints.
"""

from typing import Optional

from github_api import api_urls
from github_api.models import (
    ApplicationAuthorization,
    Authorization,
    AuthorizationUpdate,
    NewAuthorization,
)
from github_reactive.observable import Observable
from github_reactive.pagination import get_and_flatten_all_pages
from shared.ensure import argument_not_null, argument_not_null_or_empty_string


class ObservableAuthorizationsClient:
    """Exposes each authorization endpoint as a cold Observable.

    Arguments are checked when a method is called. Requests are sent when the
    returned Observable is subscribed to or iterated, once per subscription.
    Operations without a payload emit a single None.
    """

    def __init__(self, client):
        argument_not_null(client, "client")

        self._client = client.authorization
        self._connection = client.connection

    def get_all(self) -> Observable[Authorization]:
        """Every authorization of the authenticated user. Requires basic auth.

        See https://docs.github.com/rest/oauth-authorizations#list-your-authorizations
        """
        return get_and_flatten_all_pages(self._connection, api_urls.authorizations(), Authorization)

    def get(self, authorization_id: int) -> Observable[Authorization]:
        """A single authorization of the authenticated user. Requires basic auth."""
        return Observable.from_awaitable(lambda: self._client.get(authorization_id))

    def get_or_create_application_authentication(
        self,
        client_id: str,
        client_secret: str,
        new_authorization: NewAuthorization,
        two_factor_authentication_code: Optional[str] = None
    ) -> Observable[ApplicationAuthorization]:
        """Emit the user's token for an application, creating one if none exists.

        The stream fails with AuthorizationError when the user may not make
        this request, TwoFactorRequiredError when the account has two-factor
        authentication enabled and no code was given, and
        TwoFactorChallengeFailedError when the given code is not valid.
        """
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(client_secret, "client_secret")
        argument_not_null(new_authorization, "new_authorization")
        if two_factor_authentication_code is not None:
            argument_not_null_or_empty_string(two_factor_authentication_code, "two_factor_authentication_code")

        return Observable.from_awaitable(
            lambda: self._client.get_or_create_application_authentication(
                client_id,
                client_secret,
                new_authorization,
                two_factor_authentication_code
            )
        )

    def check_application_authentication(self, client_id: str,
                                         access_token: str) -> Observable[ApplicationAuthorization]:
        """Check a token without running afoul of the failed login rate limits."""
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        return Observable.from_awaitable(
            lambda: self._client.check_application_authentication(client_id, access_token)
        )

    def reset_application_authentication(self, client_id: str,
                                         access_token: str) -> Observable[ApplicationAuthorization]:
        """Reset a token without end user involvement; emits the new token."""
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        return Observable.from_awaitable(
            lambda: self._client.reset_application_authentication(client_id, access_token)
        )

    def revoke_application_authentication(self, client_id: str, access_token: str) -> Observable[None]:
        argument_not_null_or_empty_string(client_id, "client_id")
        argument_not_null_or_empty_string(access_token, "access_token")

        return Observable.from_awaitable(
            lambda: self._client.revoke_application_authentication(client_id, access_token)
        )

    def revoke_all_application_authentications(self, client_id: str) -> Observable[None]:
        argument_not_null_or_empty_string(client_id, "client_id")

        return Observable.from_awaitable(
            lambda: self._client.revoke_all_application_authentications(client_id)
        )

    def update(self, authorization_id: int,
               authorization_update: AuthorizationUpdate) -> Observable[Authorization]:
        argument_not_null(authorization_update, "authorization_update")

        return Observable.from_awaitable(lambda: self._client.update(authorization_id, authorization_update))

    def delete(self, authorization_id: int) -> Observable[None]:
        return Observable.from_awaitable(lambda: self._client.delete(authorization_id))
