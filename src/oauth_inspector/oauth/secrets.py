"""
Hosted Credential Secrets

Secret lookup for hosted OAuth apps. The inspector only reads secrets; two
backends are available:

- ``EnvironmentSecretProvider``: process environment (local development)
- ``GoogleSecretManagerProvider``: Google Cloud Secret Manager (hosted deployment)
"""

from __future__ import annotations

import asyncio
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import structlog

from oauth_inspector.config import InspectorSettings
from oauth_inspector.errors import SecretLookupError
from oauth_inspector.oauth.models import CredentialSet
from oauth_inspector.oauth.provider import OAuthProviderAdapter
from oauth_inspector.oauth.providers import Auth0OAuthProvider

logger = structlog.get_logger()


class SecretProvider(ABC):
    """Read-only named secret lookup."""

    @abstractmethod
    async def get_secret(self, name: str) -> str:
        """
        Resolve a secret value.

        Args:
            name: Secret name

        Returns:
            Secret value

        Raises:
            SecretLookupError: If the secret or its backend is unavailable
        """

    async def secret_exists(self, name: str) -> bool:
        """Check whether a secret resolves to a value."""
        try:
            await self.get_secret(name)
        except SecretLookupError:
            return False
        return True

    async def close(self) -> None:
        """Release backend resources."""


class EnvironmentSecretProvider(SecretProvider):
    """Secrets read from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    async def get_secret(self, name: str) -> str:
        value = self._environ.get(name)
        if not value:
            raise SecretLookupError(
                f"Failed to retrieve secret {name}: environment variable not set"
            )
        return value


class GoogleSecretManagerProvider(SecretProvider):
    """
    Secrets read from Google Cloud Secret Manager.

    Always reads the ``latest`` version of
    ``projects/{project_id}/secrets/{name}``.
    """

    def __init__(self, project_id: str | None, client: Any | None = None) -> None:
        """
        Initialize Secret Manager provider.

        Args:
            project_id: Google Cloud project holding the secrets
            client: Preconfigured ``SecretManagerServiceAsyncClient``
        """
        self.project_id = project_id
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            from google.cloud import secretmanager

            self._client = secretmanager.SecretManagerServiceAsyncClient()
        return self._client

    def secret_path(self, name: str) -> str:
        return f"projects/{self.project_id}/secrets/{name}/versions/latest"

    async def get_secret(self, name: str) -> str:
        try:
            if not self.project_id:
                raise SecretLookupError(
                    "GOOGLE_CLOUD_PROJECT or GCP_PROJECT environment variable not set"
                )

            response = await self._get_client().access_secret_version(
                name=self.secret_path(name)
            )

            payload = response.payload.data if response.payload else None
            if not payload:
                raise SecretLookupError(f"No payload data found for secret: {name}")

            return payload.decode("utf-8")

        except Exception as e:
            logger.error(
                "Failed to retrieve secret from Secret Manager",
                secret_name=name,
                error=str(e),
            )
            raise SecretLookupError(f"Failed to retrieve secret {name}: {e}") from e

    async def close(self) -> None:
        if self._client is not None:
            await self._client.transport.close()


def create_secret_provider(settings: InspectorSettings) -> SecretProvider:
    """
    Create the secret provider selected in configuration.

    Args:
        settings: Inspector settings

    Returns:
        Secret provider instance
    """
    if settings.SECRET_BACKEND == "gcp":
        logger.info("Using Google Secret Manager for hosted credentials", project_id=settings.GCP_PROJECT_ID)
        return GoogleSecretManagerProvider(settings.GCP_PROJECT_ID)

    logger.info("Using environment variables for hosted credentials")
    return EnvironmentSecretProvider()


async def resolve_hosted_credentials(
    secrets: SecretProvider,
    adapter: OAuthProviderAdapter,
) -> CredentialSet:
    """
    Resolve the hosted app's client ID and secret.

    Raises:
        SecretLookupError: If either secret is unavailable
    """
    client_id, client_secret = await asyncio.gather(
        secrets.get_secret(adapter.client_id_secret),
        secrets.get_secret(adapter.client_secret_secret),
    )
    return CredentialSet(client_id=client_id, client_secret=client_secret)


async def resolve_auth0_domain(secrets: SecretProvider) -> str | None:
    """Resolve the hosted Auth0 tenant domain, or None when it is not configured."""
    try:
        return await secrets.get_secret(Auth0OAuthProvider.DOMAIN_SECRET)
    except SecretLookupError as e:
        logger.warning(
            "Hosted Auth0 domain unavailable",
            hint="Ensure AUTH0_APP_OAUTH_DOMAIN exists or pass auth0Domain from the client.",
            error=str(e),
        )
        return None


async def check_availability(
    secrets: SecretProvider,
    adapters: list[OAuthProviderAdapter],
) -> dict[str, bool]:
    """
    Report which providers have every hosted secret configured.

    Args:
        secrets: Secret provider to probe
        adapters: Provider adapters to check

    Returns:
        Mapping of provider name to availability
    """

    async def probe(adapter: OAuthProviderAdapter) -> bool:
        results = await asyncio.gather(
            *(secrets.secret_exists(name) for name in adapter.required_secrets())
        )
        return all(results)

    results = await asyncio.gather(*(probe(adapter) for adapter in adapters))
    return {adapter.name: available for adapter, available in zip(adapters, results)}
