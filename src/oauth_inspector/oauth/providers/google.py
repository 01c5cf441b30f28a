"""
Google OAuth Provider

Google OAuth 2.0 adapter. Token requests are JSON; revocation is a
form-encoded POST carrying only the token and answers 200 on success.
"""

from __future__ import annotations

from oauth_inspector.oauth.models import CredentialSet, ProviderId
from oauth_inspector.oauth.provider import (
    OAuthProviderAdapter,
    OutboundRequest,
    status_equals,
)


class GoogleOAuthProvider(OAuthProviderAdapter):
    """Google OAuth 2.0 adapter."""

    PROVIDER = ProviderId.GOOGLE
    DISPLAY_NAME = "Google"

    # Google OAuth endpoints
    AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
    REVOCATION_ENDPOINT = "https://oauth2.googleapis.com/revoke"

    REVOKE_SUCCESS = staticmethod(status_equals(200))

    SECRET_PREFIX = "GOOGLE"
    HOSTED_SCOPES = [
        "https://www.googleapis.com/auth/userinfo.profile",
        "https://www.googleapis.com/auth/userinfo.email",
    ]

    def build_revoke_request(
        self,
        token: str,
        credentials: CredentialSet,
        token_type_hint: str | None = None,
    ) -> OutboundRequest:
        form = {"token": token}
        if token_type_hint:
            form["token_type_hint"] = token_type_hint

        return OutboundRequest("POST", self.REVOCATION_ENDPOINT, form=form)
