"""
Auth0 OAuth Provider

Auth0 adapter. Every endpoint lives on the tenant domain, so requests need
``CredentialSet.auth0_domain``; successful token responses are tagged with
the domain so the browser can call tenant APIs afterwards.
"""

from __future__ import annotations

from typing import Any

from oauth_inspector.oauth.models import CredentialSet, ProviderId
from oauth_inspector.oauth.provider import OAuthProviderAdapter, OutboundRequest


class Auth0OAuthProvider(OAuthProviderAdapter):
    """Auth0 tenant adapter."""

    PROVIDER = ProviderId.AUTH0
    DISPLAY_NAME = "Auth0"

    AUTHORIZATION_ENDPOINT = "https://{domain}/authorize"
    TOKEN_ENDPOINT = "https://{domain}/oauth/token"
    REVOCATION_ENDPOINT = "https://{domain}/oauth/revoke"

    REQUIRES_DOMAIN = True

    SECRET_PREFIX = "AUTH0"
    DOMAIN_SECRET = "AUTH0_APP_OAUTH_DOMAIN"
    HOSTED_SCOPES = ["openid", "profile", "email"]

    def required_secrets(self) -> list[str]:
        return [*super().required_secrets(), self.DOMAIN_SECRET]

    def augment_token_response(
        self,
        token_data: dict[str, Any],
        credentials: CredentialSet,
    ) -> dict[str, Any]:
        if credentials.auth0_domain:
            token_data["auth0_domain"] = credentials.auth0_domain
        return token_data

    def build_revoke_request(
        self,
        token: str,
        credentials: CredentialSet,
        token_type_hint: str | None = None,
    ) -> OutboundRequest:
        request = super().build_revoke_request(token, credentials, token_type_hint)
        request.json_body["token_type_hint"] = token_type_hint or "access_token"
        return request
