"""
OAuth Provider Adapters

Concrete adapters for the supported providers (GitHub, Google, GitLab, Auth0,
LinkedIn).
"""

from oauth_inspector.oauth.providers.auth0 import Auth0OAuthProvider
from oauth_inspector.oauth.providers.github import GitHubOAuthProvider
from oauth_inspector.oauth.providers.gitlab import GitLabOAuthProvider
from oauth_inspector.oauth.providers.google import GoogleOAuthProvider
from oauth_inspector.oauth.providers.linkedin import LinkedInOAuthProvider

__all__ = [
    "Auth0OAuthProvider",
    "GitHubOAuthProvider",
    "GitLabOAuthProvider",
    "GoogleOAuthProvider",
    "LinkedInOAuthProvider",
]
