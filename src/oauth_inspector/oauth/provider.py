"""
OAuth Provider Adapter Base Class

Describes how the proxy talks to one OAuth provider: token endpoint and body
encoding, refresh support, revocation request and success criterion, hosted
authorization URL, hosted secret names and explore headers. Adapters hold no
credentials; every request is built from a per-request ``CredentialSet``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar
from urllib.parse import quote, urlencode

import httpx

from oauth_inspector.errors import RequestValidationFailed
from oauth_inspector.oauth.models import (
    BodyEncoding,
    CredentialSet,
    OAuthGrantType,
    ProviderId,
)

AUTH0_DOMAIN_REQUIRED = "Auth0 domain is required."


def status_equals(expected: int) -> Callable[[int], bool]:
    """Revocation succeeds only on one exact status code."""

    def predicate(status_code: int) -> bool:
        return status_code == expected

    predicate.__name__ = f"status_equals_{expected}"
    return predicate


def status_is_2xx(status_code: int) -> bool:
    """Revocation succeeds on any 2xx status."""
    return 200 <= status_code < 300


@dataclass
class OutboundRequest:
    """Provider request ready to be sent with ``httpx``."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] | None = None
    json_body: dict[str, Any] | None = None
    basic_auth: tuple[str, str] | None = None

    async def send(self, client: httpx.AsyncClient) -> httpx.Response:
        """Issue the request on the shared client."""
        return await client.request(
            self.method,
            self.url,
            headers=self.headers,
            data=self.form,
            json=self.json_body,
            auth=httpx.BasicAuth(*self.basic_auth) if self.basic_auth else None,
        )


class OAuthProviderAdapter:
    """
    Base OAuth provider adapter.

    Implements the standard token and revocation requests; providers override
    class attributes for endpoints and policies, and methods where their
    protocol deviates from the common shape.
    """

    PROVIDER: ClassVar[ProviderId]
    DISPLAY_NAME: ClassVar[str]

    # Endpoints ("{domain}" is substituted for tenant-scoped providers)
    AUTHORIZATION_ENDPOINT: ClassVar[str]
    TOKEN_ENDPOINT: ClassVar[str]
    REVOCATION_ENDPOINT: ClassVar[str | None] = None

    TOKEN_ENCODING: ClassVar[BodyEncoding] = BodyEncoding.JSON
    SUPPORTS_REFRESH: ClassVar[bool] = True
    REFRESH_UNSUPPORTED_MESSAGE: ClassVar[str] = ""
    REQUIRES_DOMAIN: ClassVar[bool] = False

    # Revocation policy: status predicate applied to the provider response
    REVOKE_SUCCESS: ClassVar[Callable[[int], bool]] = staticmethod(status_is_2xx)
    REVOKE_UNSUPPORTED_MESSAGE: ClassVar[str | None] = None

    # Hosted flow
    SECRET_PREFIX: ClassVar[str]
    HOSTED_SCOPES: ClassVar[list[str]] = []
    SCOPE_SEPARATOR: ClassVar[str] = " "
    AUTHORIZATION_PARAMS: ClassVar[dict[str, str]] = {"response_type": "code"}

    @property
    def name(self) -> str:
        return self.PROVIDER.value

    # -- secrets -----------------------------------------------------------

    @property
    def client_id_secret(self) -> str:
        return f"{self.SECRET_PREFIX}_APP_OAUTH_CLIENT_ID"

    @property
    def client_secret_secret(self) -> str:
        return f"{self.SECRET_PREFIX}_APP_OAUTH_CLIENT_SECRET"

    def required_secrets(self) -> list[str]:
        """Secret names that must resolve for the hosted flow to be available."""
        return [self.client_id_secret, self.client_secret_secret]

    # -- endpoints ---------------------------------------------------------

    def _endpoint(self, template: str, domain: str | None) -> str:
        if "{domain}" not in template:
            return template
        if not domain:
            raise RequestValidationFailed(AUTH0_DOMAIN_REQUIRED)
        return template.format(domain=domain)

    def token_endpoint(self, domain: str | None = None) -> str:
        return self._endpoint(self.TOKEN_ENDPOINT, domain)

    # -- token requests ----------------------------------------------------

    def _token_request(self, fields: dict[str, str], domain: str | None) -> OutboundRequest:
        url = self.token_endpoint(domain)
        headers = {"Accept": "application/json"}
        if self.TOKEN_ENCODING is BodyEncoding.FORM:
            return OutboundRequest("POST", url, headers=headers, form=fields)
        return OutboundRequest("POST", url, headers=headers, json_body=fields)

    def build_exchange_request(
        self,
        code: str,
        redirect_uri: str,
        credentials: CredentialSet,
    ) -> OutboundRequest:
        """
        Build the authorization-code exchange request.

        Args:
            code: Authorization code from provider
            redirect_uri: Redirect URI used in authorization request
            credentials: Client credentials for this request

        Returns:
            Outbound token request

        Raises:
            RequestValidationFailed: If a tenant domain is required but missing
        """
        fields = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "code": code,
            "grant_type": OAuthGrantType.AUTHORIZATION_CODE.value,
            "redirect_uri": redirect_uri,
        }
        return self._token_request(fields, credentials.auth0_domain)

    def build_refresh_request(
        self,
        refresh_token: str,
        credentials: CredentialSet,
    ) -> OutboundRequest:
        """
        Build the refresh-token grant request.

        Args:
            refresh_token: Refresh token to redeem
            credentials: Client credentials for this request

        Returns:
            Outbound token request
        """
        fields = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "refresh_token": refresh_token,
            "grant_type": OAuthGrantType.REFRESH_TOKEN.value,
        }
        return self._token_request(fields, credentials.auth0_domain)

    def augment_token_response(
        self,
        token_data: dict[str, Any],
        credentials: CredentialSet,
    ) -> dict[str, Any]:
        """Attach provider metadata to a successful token response."""
        return token_data

    # -- revocation --------------------------------------------------------

    def build_revoke_request(
        self,
        token: str,
        credentials: CredentialSet,
        token_type_hint: str | None = None,
    ) -> OutboundRequest:
        """
        Build the token revocation request.

        The default shape posts client credentials and the token as JSON.

        Args:
            token: Token to revoke
            credentials: Client credentials for this request
            token_type_hint: Type of token ("access_token" or "refresh_token")

        Returns:
            Outbound revocation request
        """
        if not self.REVOCATION_ENDPOINT:
            raise NotImplementedError(f"{self.DISPLAY_NAME} has no revocation endpoint")

        return OutboundRequest(
            "POST",
            self._endpoint(self.REVOCATION_ENDPOINT, credentials.auth0_domain),
            headers={"Accept": "application/json"},
            json_body={
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                "token": token,
            },
        )

    def is_revocation_successful(self, status_code: int) -> bool:
        return self.REVOKE_SUCCESS(status_code)

    # -- hosted flow -------------------------------------------------------

    def build_authorization_url(
        self,
        client_id: str,
        redirect_uri: str,
        state: str,
        domain: str | None = None,
    ) -> str:
        """
        Build the hosted authorization URL.

        Args:
            client_id: Hosted OAuth client ID
            redirect_uri: Callback redirect URI
            state: State marker echoed back on the callback
            domain: Tenant domain for tenant-scoped providers

        Returns:
            Authorization URL
        """
        params: dict[str, str] = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            **self.AUTHORIZATION_PARAMS,
            "scope": self.SCOPE_SEPARATOR.join(self.HOSTED_SCOPES),
            "state": state,
        }
        endpoint = self._endpoint(self.AUTHORIZATION_ENDPOINT, domain)
        return f"{endpoint}?{urlencode(params, quote_via=quote)}"

    # -- explore -----------------------------------------------------------

    def api_headers(self, access_token: str, user_agent: str) -> dict[str, str]:
        """Headers for a provider API call made by the explore proxy."""
        return {
            "Authorization": f"Bearer {access_token}",
            "User-Agent": user_agent,
        }
