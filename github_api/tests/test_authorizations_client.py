"""
Unit tests for AuthorizationsClient.
"""

import json
from typing import List

import httpx
import pytest

from github_api.clients.authorizations import AuthorizationsClient
from github_api.connection import Connection, Credentials
from github_api.models import (
    ApplicationAuthorization,
    Authorization,
    AuthorizationUpdate,
    NewAuthorization,
)
from shared.errors import (
    ArgumentEmptyError,
    ArgumentNullError,
    NotFoundError,
    TwoFactorChallengeFailedError,
    TwoFactorRequiredError,
)

AUTHORIZATION = {
    "id": 1,
    "url": "https://api.github.com/authorizations/1",
    "app": {
        "name": "Octo App",
        "url": "https://octo.example.com",
        "client_id": "abc123"
    },
    "token": "",
    "hashed_token": "25f94a2a5c7fbaf499c665bc73d67c1c87e496da8985131633ee0a95819db2e8",
    "token_last_eight": "12345678",
    "note": "deploy script",
    "note_url": "https://octo.example.com/deploy",
    "created_at": "2011-09-06T17:26:27Z",
    "updated_at": "2011-09-06T20:39:23Z",
    "scopes": ["public_repo"],
    "fingerprint": "jklmnop12345678"
}

APPLICATION_AUTHORIZATION = dict(AUTHORIZATION, token="v1.0123456789abcdef0123456789abcdef01234567")


def two_factor_challenge() -> httpx.Response:
    return httpx.Response(
        401,
        json={"message": "Must specify two-factor authentication OTP code."},
        headers={"X-GitHub-OTP": "required; app"}
    )


class FakeGitHub:
    """Records requests and replies with a queued response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def github():
    return FakeGitHub(httpx.Response(200, json=AUTHORIZATION))


@pytest.fixture
def client(github):
    connection = Connection(
        credentials=Credentials.from_basic("octocat", "hunter2"),
        transport=httpx.MockTransport(github)
    )
    return AuthorizationsClient(connection)


class TestAuthorizationsClient:
    """Test cases for AuthorizationsClient."""

    def test_requires_connection(self):
        with pytest.raises(ArgumentNullError):
            AuthorizationsClient(None)

    @pytest.mark.asyncio
    async def test_get_all(self, client, github):
        """Test listing authorizations."""
        github.response = httpx.Response(200, json=[AUTHORIZATION, dict(AUTHORIZATION, id=2)])

        result = await client.get_all()

        assert [authorization.id for authorization in result] == [1, 2]
        assert all(isinstance(authorization, Authorization) for authorization in result)
        assert github.last.method == "GET"
        assert github.last.url.path == "/authorizations"

    @pytest.mark.asyncio
    async def test_get(self, client, github):
        """Test getting a single authorization."""
        result = await client.get(1)

        assert result.id == 1
        assert result.app.client_id == "abc123"
        assert result.scopes == ["public_repo"]
        assert result.created_at.year == 2011
        assert github.last.url.path == "/authorizations/1"

    @pytest.mark.asyncio
    async def test_get_not_found(self, client, github):
        github.response = httpx.Response(404, json={"message": "Not Found"})

        with pytest.raises(NotFoundError):
            await client.get(42)

    @pytest.mark.asyncio
    async def test_get_or_create_application_authentication(self, client, github):
        """Test get-or-create sends the secret with the new authorization."""
        github.response = httpx.Response(201, json=APPLICATION_AUTHORIZATION)
        new_authorization = NewAuthorization(scopes=["repo", "user"], note="deploy script")

        result = await client.get_or_create_application_authentication("abc123", "s3cret", new_authorization)

        assert isinstance(result, ApplicationAuthorization)
        assert result.token == APPLICATION_AUTHORIZATION["token"]
        assert github.last.method == "PUT"
        assert github.last.url.path == "/authorizations/clients/abc123"
        assert "X-GitHub-OTP" not in github.last.headers
        assert json.loads(github.last.content) == {
            "client_secret": "s3cret",
            "scopes": ["repo", "user"],
            "note": "deploy script"
        }

    @pytest.mark.asyncio
    async def test_get_or_create_with_two_factor_code(self, client, github):
        github.response = httpx.Response(200, json=APPLICATION_AUTHORIZATION)

        await client.get_or_create_application_authentication(
            "abc123", "s3cret", NewAuthorization(), "123456"
        )

        assert github.last.headers["X-GitHub-OTP"] == "123456"

    @pytest.mark.asyncio
    async def test_get_or_create_two_factor_required(self, client, github):
        """Test a challenge without a code surfaces as TwoFactorRequiredError."""
        github.response = two_factor_challenge()

        with pytest.raises(TwoFactorRequiredError) as exc_info:
            await client.get_or_create_application_authentication("abc123", "s3cret", NewAuthorization())

        assert exc_info.value.two_factor_type == "app"

    @pytest.mark.asyncio
    async def test_get_or_create_two_factor_challenge_failed(self, client, github):
        """Test a rejected code surfaces as TwoFactorChallengeFailedError."""
        github.response = two_factor_challenge()

        with pytest.raises(TwoFactorChallengeFailedError) as exc_info:
            await client.get_or_create_application_authentication(
                "abc123", "s3cret", NewAuthorization(), "000000"
            )

        assert exc_info.value.status_code == 401
        assert exc_info.value.details["two_factor_type"] == "app"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args,error", [
        ((None, "s3cret", NewAuthorization()), ArgumentNullError),
        (("", "s3cret", NewAuthorization()), ArgumentEmptyError),
        (("abc123", " ", NewAuthorization()), ArgumentEmptyError),
        (("abc123", "s3cret", None), ArgumentNullError),
        (("abc123", "s3cret", NewAuthorization(), ""), ArgumentEmptyError),
    ])
    async def test_get_or_create_validates_arguments(self, client, github, args, error):
        with pytest.raises(error):
            await client.get_or_create_application_authentication(*args)

        assert github.requests == []

    @pytest.mark.asyncio
    async def test_check_application_authentication(self, client, github):
        github.response = httpx.Response(200, json=APPLICATION_AUTHORIZATION)

        result = await client.check_application_authentication("abc123", "tok/en")

        assert result.token == APPLICATION_AUTHORIZATION["token"]
        assert github.last.method == "GET"
        assert github.last.url.raw_path == b"/applications/abc123/tokens/tok%2Fen"

    @pytest.mark.asyncio
    async def test_reset_application_authentication(self, client, github):
        github.response = httpx.Response(200, json=dict(APPLICATION_AUTHORIZATION, token="new-token"))

        result = await client.reset_application_authentication("abc123", "old-token")

        assert result.token == "new-token"
        assert github.last.method == "POST"
        assert github.last.url.path == "/applications/abc123/tokens/old-token"

    @pytest.mark.asyncio
    async def test_revoke_application_authentication(self, client, github):
        github.response = httpx.Response(204)

        result = await client.revoke_application_authentication("abc123", "old-token")

        assert result is None
        assert github.last.method == "DELETE"
        assert github.last.url.path == "/applications/abc123/tokens/old-token"

    @pytest.mark.asyncio
    async def test_revoke_all_application_authentications(self, client, github):
        github.response = httpx.Response(204)

        await client.revoke_all_application_authentications("abc123")

        assert github.last.method == "DELETE"
        assert github.last.url.path == "/applications/abc123/tokens"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", [
        "check_application_authentication",
        "reset_application_authentication",
        "revoke_application_authentication",
    ])
    async def test_token_methods_validate_arguments(self, client, github, method):
        with pytest.raises(ArgumentEmptyError):
            await getattr(client, method)("", "token")
        with pytest.raises(ArgumentNullError):
            await getattr(client, method)("abc123", None)

        assert github.requests == []

    @pytest.mark.asyncio
    async def test_update(self, client, github):
        """Test updating sends only the given fields."""
        github.response = httpx.Response(200, json=dict(AUTHORIZATION, scopes=["public_repo", "gist"]))

        result = await client.update(1, AuthorizationUpdate(add_scopes=["gist"]))

        assert result.scopes == ["public_repo", "gist"]
        assert github.last.method == "PATCH"
        assert github.last.url.path == "/authorizations/1"
        assert json.loads(github.last.content) == {"add_scopes": ["gist"]}

    @pytest.mark.asyncio
    async def test_update_requires_changes(self, client):
        with pytest.raises(ArgumentNullError):
            await client.update(1, None)

    @pytest.mark.asyncio
    async def test_delete(self, client, github):
        github.response = httpx.Response(204)

        await client.delete(1)

        assert github.last.method == "DELETE"
        assert github.last.url.path == "/authorizations/1"
