"""
OAuth Provider Registry

Maps every ``ProviderId`` to its adapter. The table is built once, is
read-only afterwards, and must cover the whole enum.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import assert_never

import structlog

from oauth_inspector.errors import UnsupportedProviderError
from oauth_inspector.oauth.models import ProviderId
from oauth_inspector.oauth.provider import OAuthProviderAdapter
from oauth_inspector.oauth.providers import (
    Auth0OAuthProvider,
    GitHubOAuthProvider,
    GitLabOAuthProvider,
    GoogleOAuthProvider,
    LinkedInOAuthProvider,
)

logger = structlog.get_logger()


def _create_adapter(provider: ProviderId) -> OAuthProviderAdapter:
    match provider:
        case ProviderId.GITHUB:
            return GitHubOAuthProvider()
        case ProviderId.GOOGLE:
            return GoogleOAuthProvider()
        case ProviderId.GITLAB:
            return GitLabOAuthProvider()
        case ProviderId.AUTH0:
            return Auth0OAuthProvider()
        case ProviderId.LINKEDIN:
            return LinkedInOAuthProvider()
        case _:
            assert_never(provider)


class ProviderRegistry:
    """
    OAuth provider adapter registry.

    Resolves raw provider strings from request payloads to adapters and
    rejects anything outside the supported set.
    """

    def __init__(self) -> None:
        """Build one adapter per supported provider."""
        self._adapters: dict[ProviderId, OAuthProviderAdapter] = {
            provider: _create_adapter(provider) for provider in ProviderId
        }

        for provider, adapter in self._adapters.items():
            if adapter.PROVIDER is not provider:
                raise RuntimeError(
                    f"Adapter {type(adapter).__name__} registered for {provider.value}"
                )

    def get(self, provider: ProviderId) -> OAuthProviderAdapter:
        return self._adapters[provider]

    def resolve(self, provider: str | None) -> OAuthProviderAdapter:
        """
        Resolve a provider string to its adapter.

        Args:
            provider: Provider identifier from the request payload

        Returns:
            Provider adapter

        Raises:
            UnsupportedProviderError: If the provider is not supported
        """
        provider_id = ProviderId.parse(provider)
        if provider_id is None:
            logger.warning("Unsupported provider requested", provider=provider)
            raise UnsupportedProviderError()
        return self._adapters[provider_id]

    def __iter__(self) -> Iterator[OAuthProviderAdapter]:
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)
