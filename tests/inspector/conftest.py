"""Inspector-specific pytest configuration."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from oauth_inspector.config import InspectorSettings
from oauth_inspector.dependencies import InspectorContext
from oauth_inspector.oauth.registry import ProviderRegistry
from oauth_inspector.oauth.secrets import EnvironmentSecretProvider

HOSTED_SECRETS = {
    "GITHUB_APP_OAUTH_CLIENT_ID": "hosted-github-id",
    "GITHUB_APP_OAUTH_CLIENT_SECRET": "hosted-github-secret",
    "GOOGLE_APP_OAUTH_CLIENT_ID": "hosted-google-id",
    "GOOGLE_APP_OAUTH_CLIENT_SECRET": "hosted-google-secret",
    "GITLAB_APP_OAUTH_CLIENT_ID": "hosted-gitlab-id",
    "GITLAB_APP_OAUTH_CLIENT_SECRET": "hosted-gitlab-secret",
    "AUTH0_APP_OAUTH_CLIENT_ID": "hosted-auth0-id",
    "AUTH0_APP_OAUTH_CLIENT_SECRET": "hosted-auth0-secret",
    "AUTH0_APP_OAUTH_DOMAIN": "hosted-tenant.us.auth0.com",
    "LINKEDIN_APP_OAUTH_CLIENT_ID": "hosted-linkedin-id",
    "LINKEDIN_APP_OAUTH_CLIENT_SECRET": "hosted-linkedin-secret",
}


@pytest.fixture
def secret_values() -> dict[str, str]:
    """Mutable copy of the hosted secrets, so tests can drop entries."""
    return dict(HOSTED_SECRETS)


@pytest.fixture
def secrets(secret_values: dict[str, str]) -> EnvironmentSecretProvider:
    """Secret provider backed by the test secret mapping."""
    return EnvironmentSecretProvider(environ=secret_values)


@pytest.fixture
def test_settings() -> InspectorSettings:
    """Settings isolated from the process environment."""
    return InspectorSettings(
        ENABLE_METRICS=False,
        SECRET_BACKEND="env",
        LOG_LEVEL="WARNING",
        PROVIDER_TIMEOUT_SECONDS=5.0,
    )


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound client; provider calls are intercepted with respx."""
    async with httpx.AsyncClient(timeout=5.0, follow_redirects=True) as client:
        yield client


@pytest.fixture
def context(
    test_settings: InspectorSettings,
    secrets: EnvironmentSecretProvider,
    http_client: httpx.AsyncClient,
) -> InspectorContext:
    """Inspector context wired with test collaborators."""
    return InspectorContext(
        settings=test_settings,
        secrets=secrets,
        registry=ProviderRegistry(),
        http_client=http_client,
    )
