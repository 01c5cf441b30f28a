"""
OAuth Token Proxy

Provider adapters, error classification and hosted credential lookup for the
OAuth token lifecycle (exchange, refresh, revoke) and the API explorer.
"""

from oauth_inspector.oauth.error_guide import (
    OAUTH_ERROR_GUIDES,
    classify,
    get_all_error_guides,
    is_known_oauth_error,
)
from oauth_inspector.oauth.models import (
    ApiExploreRequest,
    ApiExploreResponse,
    CredentialSet,
    EnhancedOAuthError,
    HostedInitRequest,
    OAuthErrorGuide,
    ProviderId,
    TokenExchangeRequest,
    TokenRefreshRequest,
    TokenRevokeRequest,
)
from oauth_inspector.oauth.provider import OAuthProviderAdapter, OutboundRequest
from oauth_inspector.oauth.registry import ProviderRegistry

__all__ = [
    "OAUTH_ERROR_GUIDES",
    "ApiExploreRequest",
    "ApiExploreResponse",
    "CredentialSet",
    "EnhancedOAuthError",
    "HostedInitRequest",
    "OAuthErrorGuide",
    "OAuthProviderAdapter",
    "OutboundRequest",
    "ProviderId",
    "ProviderRegistry",
    "TokenExchangeRequest",
    "TokenRefreshRequest",
    "TokenRevokeRequest",
    "classify",
    "get_all_error_guides",
    "is_known_oauth_error",
]
