"""
LinkedIn OAuth Provider

LinkedIn OAuth 2.0 adapter. Token requests are form-encoded. LinkedIn has no
token revocation endpoint; tokens simply expire.
"""

from __future__ import annotations

from oauth_inspector.oauth.models import BodyEncoding, ProviderId
from oauth_inspector.oauth.provider import OAuthProviderAdapter


class LinkedInOAuthProvider(OAuthProviderAdapter):
    """LinkedIn OAuth 2.0 adapter."""

    PROVIDER = ProviderId.LINKEDIN
    DISPLAY_NAME = "LinkedIn"

    AUTHORIZATION_ENDPOINT = "https://www.linkedin.com/oauth/v2/authorization"
    TOKEN_ENDPOINT = "https://www.linkedin.com/oauth/v2/accessToken"

    TOKEN_ENCODING = BodyEncoding.FORM
    REVOKE_UNSUPPORTED_MESSAGE = (
        "LinkedIn doesn't provide a token revocation endpoint. The token will "
        "expire naturally according to LinkedIn's token lifetime policy."
    )

    SECRET_PREFIX = "LINKEDIN"
    HOSTED_SCOPES = ["r_liteprofile", "r_emailaddress"]
