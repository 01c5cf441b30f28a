"""
Integration tests for the inspector FastAPI application.

Drives every endpoint through the full middleware chain with provider HTTP
intercepted by respx.
"""

from __future__ import annotations

import json
from collections.abc import Iterator

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from oauth_inspector.config import InspectorSettings
from oauth_inspector.main import app as default_app
from oauth_inspector.main import create_app
from oauth_inspector.oauth.secrets import EnvironmentSecretProvider

GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"

EXCHANGE_PAYLOAD = {
    "code": "auth-code",
    "provider": "github",
    "redirectUri": "http://localhost:8080/callback",
    "clientId": "client-id",
    "clientSecret": "client-secret",
}


@pytest.fixture
def client(
    test_settings: InspectorSettings,
    secrets: EnvironmentSecretProvider,
) -> Iterator[TestClient]:
    """Test client with lifespan running."""
    app = create_app(settings=test_settings, secret_provider=secrets)
    with TestClient(app) as test_client:
        yield test_client


def test_app_creation(test_settings: InspectorSettings) -> None:
    """Test FastAPI application is created successfully."""
    app = create_app(settings=test_settings)

    assert app.title == "OAuth User Inspector"
    paths = {route.path for route in app.routes}
    assert {
        "/api/health",
        "/api/oauth/token",
        "/api/oauth/refresh",
        "/api/oauth/revoke",
        "/api/oauth-hosted/init",
        "/api/oauth-hosted/availability",
        "/api/explore",
    } <= paths


def test_health_endpoint(client: TestClient) -> None:
    """Test health check reports ok with runtime details."""
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["uptime"] >= 0
    assert data["timestamp"] > 1_600_000_000_000
    assert data["node"].startswith("python-")


def test_request_id_headers(client: TestClient) -> None:
    """Test request ids are echoed or generated."""
    echoed = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    generated = client.get("/api/health")

    assert echoed.headers["X-Request-ID"] == "req-123"
    assert echoed.headers["X-Trace-ID"] == "req-123"
    assert generated.headers["X-Request-ID"]


def test_metrics_endpoint() -> None:
    """Test Prometheus exposition on the default application."""
    with TestClient(default_app) as test_client:
        test_client.get("/api/health")
        response = test_client.get("/metrics")

    assert response.status_code == 200
    assert "inspector_http_requests_total" in response.text


class TestTokenEndpoint:
    """Test POST /api/oauth/token."""

    @respx.mock
    def test_github_exchange(self, client: TestClient) -> None:
        """Test successful GitHub exchange passes the token response through."""
        route = respx.post(GITHUB_TOKEN_URL).mock(
            return_value=httpx.Response(
                200,
                json={"access_token": "gho_1", "token_type": "bearer", "scope": "read:user"},
            )
        )

        response = client.post("/api/oauth/token", json=EXCHANGE_PAYLOAD)

        assert response.status_code == 200
        assert response.json() == {"access_token": "gho_1", "token_type": "bearer", "scope": "read:user"}
        assert route.call_count == 1

    @respx.mock
    def test_invalid_scope_is_classified(self, client: TestClient) -> None:
        """Test provider errors come back with error code and guide."""
        respx.post(GITHUB_TOKEN_URL).mock(
            return_value=httpx.Response(
                400,
                json={"error": "invalid_scope", "error_description": "The requested scope is invalid"},
            )
        )

        response = client.post("/api/oauth/token", json=EXCHANGE_PAYLOAD)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "The requested scope is invalid"
        assert body["errorCode"] == "invalid_scope"
        assert body["guide"]["title"] == "Invalid Scope"
        assert body["guide"]["troubleshooting"]

    def test_missing_parameters(self, client: TestClient) -> None:
        """Test missing fields produce the proxy's own 400."""
        response = client.post("/api/oauth/token", json={"provider": "github"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required parameters: code, provider, redirectUri."}

    def test_empty_body(self, client: TestClient) -> None:
        """Test a request without a body is a missing-parameter error."""
        response = client.post("/api/oauth/token")

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required parameters: code, provider, redirectUri."

    def test_malformed_json(self, client: TestClient) -> None:
        """Test malformed JSON is a 400, not a 422."""
        response = client.post(
            "/api/oauth/token",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body."}

    @pytest.mark.parametrize("path", ["/api/oauth/token", "/api/oauth/refresh", "/api/oauth/revoke"])
    def test_unsupported_provider(self, client: TestClient, path: str) -> None:
        """Test unsupported providers are rejected on every token endpoint."""
        payload = {**EXCHANGE_PAYLOAD, "provider": "facebook", "refreshToken": "r", "token": "t"}

        response = client.post(path, json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported provider."}

    @respx.mock
    def test_provider_unreachable(self, client: TestClient) -> None:
        """Test transport failures are internal errors."""
        respx.post(GITHUB_TOKEN_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

        response = client.post("/api/oauth/token", json=EXCHANGE_PAYLOAD)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error.", "message": "timed out"}


class TestRefreshEndpoint:
    """Test POST /api/oauth/refresh."""

    @respx.mock(assert_all_called=False)
    def test_github_refresh_rejected(self, client: TestClient, respx_mock: respx.MockRouter) -> None:
        """Test GitHub refresh is rejected without contacting GitHub."""
        route = respx_mock.route(host="github.com")

        response = client.post(
            "/api/oauth/refresh",
            json={"provider": "github", "refreshToken": "r", "isHosted": True},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "GitHub OAuth Apps do not support refresh tokens. "
            "Only GitHub Apps support refresh tokens."
        }
        assert route.call_count == 0

    @respx.mock
    def test_hosted_google_refresh(self, client: TestClient) -> None:
        """Test hosted refresh uses the hosted Google app."""
        route = respx.post("https://oauth2.googleapis.com/token").mock(
            return_value=httpx.Response(200, json={"access_token": "new"})
        )

        response = client.post(
            "/api/oauth/refresh",
            json={"provider": "google", "refreshToken": "r", "isHosted": True},
        )

        assert response.status_code == 200
        assert response.json() == {"access_token": "new"}
        assert json.loads(route.calls.last.request.content)["client_id"] == "hosted-google-id"


class TestRevokeEndpoint:
    """Test POST /api/oauth/revoke."""

    @respx.mock
    def test_github_revoke(self, client: TestClient) -> None:
        """Test GitHub revocation succeeds on 204."""
        route = respx.delete("https://api.github.com/applications/client-id/token").mock(
            return_value=httpx.Response(204)
        )

        response = client.post(
            "/api/oauth/revoke",
            json={
                "provider": "github",
                "token": "gho_1",
                "clientId": "client-id",
                "clientSecret": "client-secret",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Token revoked successfully."}
        assert route.call_count == 1

    @respx.mock(assert_all_called=False)
    def test_linkedin_revoke(self, client: TestClient, respx_mock: respx.MockRouter) -> None:
        """Test LinkedIn revocation makes no outbound call."""
        route = respx_mock.route(host="www.linkedin.com")

        response = client.post("/api/oauth/revoke", json={"provider": "linkedin", "token": "li"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == (
            "LinkedIn doesn't provide a token revocation endpoint. The token will "
            "expire naturally according to LinkedIn's token lifetime policy."
        )
        assert route.call_count == 0

    @respx.mock
    def test_revoke_rejected(self, client: TestClient) -> None:
        """Test provider rejection keeps the provider status."""
        respx.post("https://gitlab.com/oauth/revoke").mock(
            return_value=httpx.Response(401, json={"error": "invalid_client"})
        )

        response = client.post(
            "/api/oauth/revoke",
            json={"provider": "gitlab", "token": "t", "isHosted": True},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "invalid_client"}


class TestHostedEndpoints:
    """Test /api/oauth-hosted endpoints."""

    def test_init(self, client: TestClient) -> None:
        """Test hosted bootstrap returns an authorization URL."""
        response = client.post(
            "/api/oauth-hosted/init",
            json={"provider": "gitlab", "redirectUri": "http://localhost:8080/callback"},
        )

        assert response.status_code == 200
        auth_url = response.json()["authUrl"]
        assert auth_url.startswith("https://gitlab.com/oauth/authorize?")
        assert "state=gitlab-hosted" in auth_url
        assert "client_id=hosted-gitlab-id" in auth_url

    def test_init_unsupported_provider(self, client: TestClient) -> None:
        """Test hosted bootstrap rejects unknown providers."""
        response = client.post(
            "/api/oauth-hosted/init",
            json={"provider": "facebook", "redirectUri": "http://localhost:8080/callback"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported provider."}

    def test_init_unconfigured(
        self,
        client: TestClient,
        secret_values: dict[str, str],
    ) -> None:
        """Test hosted bootstrap fails when the app is not configured."""
        secret_values.pop("LINKEDIN_APP_OAUTH_CLIENT_SECRET")

        response = client.post(
            "/api/oauth-hosted/init",
            json={"provider": "linkedin", "redirectUri": "http://localhost:8080/callback"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to initialize hosted OAuth."

    def test_availability(
        self,
        client: TestClient,
        secret_values: dict[str, str],
    ) -> None:
        """Test availability reflects the secret store."""
        secret_values.pop("GITHUB_APP_OAUTH_CLIENT_ID")

        response = client.get("/api/oauth-hosted/availability")

        assert response.status_code == 200
        assert response.json() == {
            "availability": {
                "github": False,
                "google": True,
                "gitlab": True,
                "auth0": True,
                "linkedin": True,
            }
        }


class TestExploreEndpoint:
    """Test POST /api/explore."""

    @respx.mock
    def test_explore(self, client: TestClient) -> None:
        """Test explore proxies the call and returns provider data."""
        respx.get("https://api.github.com/user/emails").mock(
            return_value=httpx.Response(200, json=[{"email": "octocat@github.com", "primary": True}])
        )

        response = client.post(
            "/api/explore",
            json={
                "provider": "github",
                "accessToken": "gho_1",
                "endpoint": {"id": "emails", "url": "https://api.github.com/user/emails", "method": "GET"},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == 200
        assert body["data"] == [{"email": "octocat@github.com", "primary": True}]
        assert "error" not in body

    @respx.mock
    def test_explore_follows_redirects(self, client: TestClient) -> None:
        """Test a moved resource is followed to its final location."""
        respx.get("https://api.github.com/repos/old/name").mock(
            return_value=httpx.Response(
                301, headers={"Location": "https://api.github.com/repositories/1"}
            )
        )
        final = respx.get("https://api.github.com/repositories/1").mock(
            return_value=httpx.Response(200, json={"id": 1, "full_name": "new/name"})
        )

        response = client.post(
            "/api/explore",
            json={
                "provider": "github",
                "accessToken": "gho_1",
                "endpoint": {"id": "repo", "url": "https://api.github.com/repos/old/name", "method": "GET"},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == 200
        assert body["data"] == {"id": 1, "full_name": "new/name"}
        assert final.called

    def test_explore_missing_fields(self, client: TestClient) -> None:
        """Test explore validates its payload."""
        response = client.post("/api/explore", json={"provider": "github"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields: provider, accessToken, endpoint"}

    def test_explore_invalid_endpoint(self, client: TestClient) -> None:
        """Test explore validates the endpoint."""
        response = client.post(
            "/api/explore",
            json={"provider": "github", "accessToken": "t", "endpoint": {"id": "user"}},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid endpoint: missing url or method"}


class TestExchangeAllProviders:
    """Test a valid exchange succeeds for every provider."""

    @pytest.mark.parametrize(
        ("provider", "token_url", "extra"),
        [
            ("github", "https://github.com/login/oauth/access_token", {}),
            ("google", "https://oauth2.googleapis.com/token", {}),
            ("gitlab", "https://gitlab.com/oauth/token", {}),
            ("auth0", "https://tenant.us.auth0.com/oauth/token", {"auth0Domain": "tenant.us.auth0.com"}),
            ("linkedin", "https://www.linkedin.com/oauth/v2/accessToken", {}),
        ],
    )
    @respx.mock
    def test_exchange(
        self,
        client: TestClient,
        provider: str,
        token_url: str,
        extra: dict[str, str],
    ) -> None:
        """Test the mocked access token is returned unchanged."""
        route = respx.post(token_url).mock(
            return_value=httpx.Response(200, json={"access_token": "test_access_token"})
        )

        response = client.post(
            "/api/oauth/token",
            json={**EXCHANGE_PAYLOAD, "provider": provider, "isHosted": False, **extra},
        )

        assert response.status_code == 200
        assert response.json()["access_token"] == "test_access_token"
        assert route.call_count == 1
