"""
HTTP connection to the GitHub REST API.

The connection owns everything below the endpoint clients:

- Base address resolution and default headers
- Anonymous, basic and OAuth token credentials
- Link header pagination
- Mapping of error responses onto shared errors
"""

import base64
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from pydantic import BaseModel

from shared.config import DEFAULT_API_URL, DEFAULT_USER_AGENT
from shared.errors import (
    ApiError,
    ApiValidationError,
    AuthorizationError,
    ConnectionFailedError,
    ForbiddenError,
    LoginAttemptsExceededError,
    NotFoundError,
    RateLimitExceededError,
    TwoFactorRequiredError,
)
from shared.logging import get_logger, request_context
from shared.tracing import trace_operation

MEDIA_TYPE = "application/vnd.github.v3+json"
OTP_HEADER = "X-GitHub-OTP"


class AuthenticationType(str, Enum):
    """How requests are authenticated."""
    ANONYMOUS = "anonymous"
    BASIC = "basic"
    OAUTH = "oauth"


@dataclass(frozen=True)
class Credentials:
    """Credentials sent with every request."""
    login: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    token: Optional[str] = field(default=None, repr=False)

    @classmethod
    def anonymous(cls) -> "Credentials":
        return cls()

    @classmethod
    def from_token(cls, token: str) -> "Credentials":
        return cls(token=token)

    @classmethod
    def from_basic(cls, login: str, password: str) -> "Credentials":
        return cls(login=login, password=password)

    @property
    def authentication_type(self) -> AuthenticationType:
        if self.token:
            return AuthenticationType.OAUTH
        if self.login and self.password is not None:
            return AuthenticationType.BASIC
        return AuthenticationType.ANONYMOUS

    def authorization_header(self) -> Optional[str]:
        """Value for the Authorization header, if any."""
        auth_type = self.authentication_type
        if auth_type == AuthenticationType.OAUTH:
            return f"token {self.token}"
        if auth_type == AuthenticationType.BASIC:
            raw = f"{self.login}:{self.password}".encode("utf-8")
            return "Basic " + base64.b64encode(raw).decode("ascii")
        return None


@dataclass
class RateLimit:
    """Rate limit state reported by the last response."""
    limit: int
    remaining: int
    reset: Optional[datetime] = None


@dataclass
class ApiInfo:
    """Metadata GitHub returns in response headers."""
    oauth_scopes: List[str] = field(default_factory=list)
    accepted_oauth_scopes: List[str] = field(default_factory=list)
    etag: Optional[str] = None
    rate_limit: Optional[RateLimit] = None

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> "ApiInfo":
        rate_limit = None
        if "X-RateLimit-Limit" in headers:
            try:
                rate_limit = RateLimit(
                    limit=int(headers["X-RateLimit-Limit"]),
                    remaining=int(headers.get("X-RateLimit-Remaining", "0")),
                    reset=RateLimitExceededError.parse_reset(headers.get("X-RateLimit-Reset"))
                )
            except ValueError:
                rate_limit = None

        return cls(
            oauth_scopes=_split_scopes(headers.get("X-OAuth-Scopes")),
            accepted_oauth_scopes=_split_scopes(headers.get("X-Accepted-OAuth-Scopes")),
            etag=headers.get("ETag"),
            rate_limit=rate_limit
        )


def _split_scopes(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [scope.strip() for scope in value.split(",") if scope.strip()]


@dataclass
class ApiResponse:
    """Decoded response of a single request."""
    status_code: int
    headers: httpx.Headers
    body: Any
    links: Dict[str, str] = field(default_factory=dict)

    @property
    def next_page_url(self) -> Optional[str]:
        return self.links.get("next")

    @property
    def api_info(self) -> ApiInfo:
        return ApiInfo.from_headers(self.headers)


class Connection:
    """Sends requests to GitHub and decodes the responses."""

    def __init__(self,
                 base_address: str = DEFAULT_API_URL,
                 credentials: Optional[Credentials] = None,
                 user_agent: str = DEFAULT_USER_AGENT,
                 timeout: float = 10.0,
                 per_page: Optional[int] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_address = base_address
        self.credentials = credentials or Credentials.anonymous()
        self.user_agent = user_agent
        self.timeout = timeout
        self.per_page = per_page
        self.transport = transport
        self.last_api_info: Optional[ApiInfo] = None
        self.logger = get_logger("github.connection")

    @property
    def authentication_type(self) -> AuthenticationType:
        return self.credentials.authentication_type

    def _default_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": MEDIA_TYPE,
            "User-Agent": self.user_agent,
        }
        authorization = self.credentials.authorization_header()
        if authorization:
            headers["Authorization"] = authorization
        return headers

    async def get(self, uri: str, params: Optional[Dict[str, Any]] = None,
                  headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        return await self.send("GET", uri, params=params, headers=headers)

    async def post(self, uri: str, body: Any = None,
                   headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        return await self.send("POST", uri, body=body, headers=headers)

    async def put(self, uri: str, body: Any = None,
                  headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        return await self.send("PUT", uri, body=body, headers=headers)

    async def patch(self, uri: str, body: Any = None,
                    headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        return await self.send("PATCH", uri, body=body, headers=headers)

    async def delete(self, uri: str, headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        return await self.send("DELETE", uri, headers=headers)

    async def get_pages(self, uri: str,
                        params: Optional[Dict[str, Any]] = None) -> AsyncIterator[ApiResponse]:
        """Yield the first page and every page reachable through rel="next"."""
        params = dict(params or {})
        if self.per_page and "per_page" not in params:
            params["per_page"] = self.per_page

        next_uri: Optional[str] = uri
        page = 0
        while next_uri:
            response = await self.get(next_uri, params=params or None)
            page += 1
            self.logger.debug("Fetched page", uri=uri, page=page, has_next=response.next_page_url is not None)
            yield response
            next_uri = response.next_page_url
            # The next link already carries the query string
            params = None

    async def get_all_pages(self, uri: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Fetch every page and concatenate the JSON arrays."""
        items: List[Any] = []
        async for response in self.get_pages(uri, params=params):
            items.extend(response.body or [])
        return items

    async def send(self, method: str, uri: str,
                   params: Optional[Dict[str, Any]] = None,
                   body: Any = None,
                   headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        """Send a request and return the decoded response, raising on errors."""
        with request_context() as request_id:
            return await self._send(request_id, method, uri, params, body, headers)

    async def _send(self, request_id: str, method: str, uri: str,
                    params: Optional[Dict[str, Any]],
                    body: Any,
                    headers: Optional[Dict[str, str]]) -> ApiResponse:
        request_headers = self._default_headers()
        if headers:
            request_headers.update(headers)

        self.logger.debug("GitHub request", method=method, uri=uri)

        with trace_operation("github.request", **{
            "http.method": method,
            "http.url": uri,
            "github.request_id": request_id
        }) as span:
            try:
                async with httpx.AsyncClient(base_url=self.base_address,
                                             timeout=self.timeout,
                                             transport=self.transport) as client:
                    response = await client.request(
                        method,
                        uri,
                        params=params,
                        json=_serialize(body),
                        headers=request_headers
                    )
            except httpx.HTTPError as e:
                self.logger.error("GitHub HTTP error", method=method, uri=uri, error=str(e))
                raise ConnectionFailedError(
                    f"Request to GitHub failed: {e}",
                    details={"method": method, "uri": uri, "http_error": str(e)}
                ) from e

            span.set_attribute("http.status_code", response.status_code)
            api_response = ApiResponse(
                status_code=response.status_code,
                headers=response.headers,
                body=_decode_body(response),
                links={rel: link["url"] for rel, link in response.links.items() if "url" in link}
            )
            self.last_api_info = api_response.api_info

            if response.is_success:
                return api_response

            error = map_error(api_response)
            self.logger.warning(
                "GitHub API error",
                method=method,
                uri=uri,
                status_code=response.status_code,
                error_code=error.code
            )
            raise error


def _serialize(body: Any) -> Any:
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _header_int(headers: httpx.Headers, name: str, default: int = 0) -> int:
    try:
        return int(headers.get(name, default))
    except ValueError:
        return default


def _two_factor_type(header_value: str) -> str:
    parts = [part.strip().lower() for part in header_value.split(";")]
    if len(parts) > 1 and parts[1] in ("sms", "app"):
        return parts[1]
    return "unknown"


def map_error(response: ApiResponse) -> ApiError:
    """Translate an error response into the matching exception."""
    body = response.body if isinstance(response.body, dict) else {}
    message = body.get("message") or (response.body if isinstance(response.body, str) else None)
    kwargs = {"documentation_url": body.get("documentation_url")}
    status = response.status_code
    headers = response.headers

    if status == 401:
        otp = headers.get(OTP_HEADER)
        if otp and otp.lower().startswith("required"):
            return TwoFactorRequiredError(_two_factor_type(otp), message, **kwargs)
        return AuthorizationError(message, **kwargs)

    if status == 403:
        if headers.get("X-RateLimit-Remaining") == "0":
            return RateLimitExceededError(
                limit=_header_int(headers, "X-RateLimit-Limit"),
                remaining=0,
                reset=RateLimitExceededError.parse_reset(headers.get("X-RateLimit-Reset")),
                message=message,
                **kwargs
            )
        if message and "login attempts" in message.lower():
            return LoginAttemptsExceededError(message, **kwargs)
        return ForbiddenError(message, **kwargs)

    if status == 404:
        return NotFoundError(message, **kwargs)

    if status == 422:
        return ApiValidationError(message, errors=body.get("errors"), **kwargs)

    return ApiError(status, message, **kwargs)
