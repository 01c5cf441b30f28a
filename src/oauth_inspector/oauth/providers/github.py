"""
GitHub OAuth Provider

GitHub OAuth App adapter. GitHub's token endpoint takes form-encoded bodies
without a grant type, OAuth Apps cannot refresh tokens, and revocation goes
through the REST API with HTTP Basic client authentication.
"""

from __future__ import annotations

from oauth_inspector.oauth.models import BodyEncoding, CredentialSet, ProviderId
from oauth_inspector.oauth.provider import (
    OAuthProviderAdapter,
    OutboundRequest,
    status_equals,
)


class GitHubOAuthProvider(OAuthProviderAdapter):
    """GitHub OAuth App adapter."""

    PROVIDER = ProviderId.GITHUB
    DISPLAY_NAME = "GitHub"

    # GitHub OAuth endpoints
    AUTHORIZATION_ENDPOINT = "https://github.com/login/oauth/authorize"
    TOKEN_ENDPOINT = "https://github.com/login/oauth/access_token"
    REVOCATION_ENDPOINT = "https://api.github.com/applications/{client_id}/token"
    API_VERSION = "2022-11-28"

    TOKEN_ENCODING = BodyEncoding.FORM
    SUPPORTS_REFRESH = False
    REFRESH_UNSUPPORTED_MESSAGE = (
        "GitHub OAuth Apps do not support refresh tokens. "
        "Only GitHub Apps support refresh tokens."
    )

    # The applications API answers 204 No Content on success
    REVOKE_SUCCESS = staticmethod(status_equals(204))

    SECRET_PREFIX = "GITHUB"
    HOSTED_SCOPES = ["read:user", "user:email"]
    SCOPE_SEPARATOR = ","
    AUTHORIZATION_PARAMS: dict[str, str] = {}

    def build_exchange_request(
        self,
        code: str,
        redirect_uri: str,
        credentials: CredentialSet,
    ) -> OutboundRequest:
        fields = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        return self._token_request(fields, None)

    def build_revoke_request(
        self,
        token: str,
        credentials: CredentialSet,
        token_type_hint: str | None = None,
    ) -> OutboundRequest:
        """
        Build the GitHub grant revocation request.

        ``DELETE /applications/{client_id}/token`` authenticated with the
        OAuth App's client ID and secret.
        """
        return OutboundRequest(
            "DELETE",
            self.REVOCATION_ENDPOINT.format(client_id=credentials.client_id),
            headers={"Accept": "application/vnd.github.v3+json"},
            json_body={"access_token": token},
            basic_auth=(credentials.client_id, credentials.client_secret),
        )

    def api_headers(self, access_token: str, user_agent: str) -> dict[str, str]:
        headers = super().api_headers(access_token, user_agent)
        headers["Accept"] = "application/vnd.github+json"
        headers["X-GitHub-Api-Version"] = self.API_VERSION
        return headers
