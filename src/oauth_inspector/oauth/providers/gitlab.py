"""
GitLab OAuth Provider

GitLab.com OAuth 2.0 adapter. Uses the standard JSON token and revocation
requests of the base adapter.
"""

from __future__ import annotations

from oauth_inspector.oauth.models import ProviderId
from oauth_inspector.oauth.provider import OAuthProviderAdapter


class GitLabOAuthProvider(OAuthProviderAdapter):
    """GitLab.com OAuth 2.0 adapter."""

    PROVIDER = ProviderId.GITLAB
    DISPLAY_NAME = "GitLab"

    AUTHORIZATION_ENDPOINT = "https://gitlab.com/oauth/authorize"
    TOKEN_ENDPOINT = "https://gitlab.com/oauth/token"
    REVOCATION_ENDPOINT = "https://gitlab.com/oauth/revoke"

    SECRET_PREFIX = "GITLAB"
    HOSTED_SCOPES = ["read_user"]
