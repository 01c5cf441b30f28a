"""
OAuth Models

Pydantic models for the token proxy: provider identifiers, request payloads
sent by the browser, credential sets and the classified error shape.

Request payloads are deliberately lenient (every field optional) so that
missing fields produce the proxy's own 400 messages instead of FastAPI's
generic 422 validation response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProviderId(str, Enum):
    """Supported OAuth providers."""

    GITHUB = "github"
    GOOGLE = "google"
    GITLAB = "gitlab"
    AUTH0 = "auth0"
    LINKEDIN = "linkedin"

    @classmethod
    def parse(cls, value: str | None) -> ProviderId | None:
        """Return the matching provider, or None for anything outside the set."""
        try:
            return cls(value)
        except ValueError:
            return None


class OAuthGrantType(str, Enum):
    """OAuth grant types used against provider token endpoints."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"


class BodyEncoding(str, Enum):
    """Content type of an outbound token request body."""

    FORM = "form"
    JSON = "json"


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with the browser."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


@dataclass(frozen=True)
class CredentialSet:
    """OAuth app credentials held for the duration of one request."""

    client_id: str
    client_secret: str
    auth0_domain: str | None = None

    def __repr__(self) -> str:
        return f"CredentialSet(client_id={self.client_id!r}, auth0_domain={self.auth0_domain!r})"


class CredentialFields(CamelModel):
    """Credential fields shared by exchange, refresh and revoke payloads."""

    provider: str | None = Field(None, description="OAuth provider identifier")
    is_hosted: bool | None = Field(default=False, description="Use server-side app credentials")
    client_id: str | None = Field(None, description="OAuth client ID (non-hosted)")
    client_secret: str | None = Field(None, description="OAuth client secret (non-hosted)")
    auth0_domain: str | None = Field(None, description="Auth0 tenant domain")


class TokenExchangeRequest(CredentialFields):
    """Authorization-code exchange payload."""

    code: str | None = Field(None, description="Authorization code from provider")
    redirect_uri: str | None = Field(None, description="Redirect URI used during authorization")
    scopes: str | list[str] | None = Field(None, description="Scopes requested by the client")


class TokenRefreshRequest(CredentialFields):
    """Refresh-token grant payload."""

    refresh_token: str | None = Field(None, description="Refresh token to redeem")


class TokenRevokeRequest(CredentialFields):
    """Token revocation payload."""

    token: str | None = Field(None, description="Access or refresh token to revoke")
    token_type_hint: str | None = Field(None, description="access_token or refresh_token")


class ExploreEndpoint(CamelModel):
    """Provider API endpoint selected in the explorer."""

    id: str | None = Field(None, description="Endpoint identifier")
    url: str | None = Field(None, description="Absolute URL, or path for Auth0")
    method: str | None = Field(None, description="HTTP method")
    required_scopes: list[str] | None = Field(None, description="Scopes the endpoint needs")


class ApiExploreRequest(CamelModel):
    """API explore proxy payload."""

    provider: str | None = Field(None, description="OAuth provider identifier")
    access_token: str | None = Field(None, description="Bearer token for the provider API")
    endpoint: ExploreEndpoint | None = Field(None, description="Endpoint to call")
    auth0_domain: str | None = Field(None, description="Auth0 tenant domain for relative URLs")


class ApiExploreResponse(CamelModel):
    """API explore proxy result."""

    success: bool = Field(..., description="Whether the provider answered 2xx")
    status: int = Field(..., description="Provider HTTP status")
    data: Any = Field(None, description="Provider response body")
    error: str | None = Field(None, description="Error message when not successful")
    headers: dict[str, str] = Field(default_factory=dict, description="Provider response headers")


class HostedInitRequest(CamelModel):
    """Hosted flow bootstrap payload."""

    provider: str | None = Field(None, description="OAuth provider identifier")
    redirect_uri: str | None = Field(None, description="Callback URI registered with the hosted app")


class OAuthErrorGuide(CamelModel):
    """Troubleshooting guide for a well-known OAuth error code."""

    model_config = ConfigDict(frozen=True)

    error_code: str = Field(..., description="OAuth error code")
    title: str = Field(..., description="Short human readable title")
    description: str = Field(..., description="What the error means")
    troubleshooting: tuple[str, ...] = Field(..., description="Steps to resolve the error")
    common_causes: tuple[str, ...] = Field(..., description="Typical causes")


class EnhancedOAuthError(CamelModel):
    """Classified provider error returned to the browser."""

    error: str = Field(..., description="Human readable error message")
    error_code: str | None = Field(None, description="OAuth error code")
    guide: OAuthErrorGuide | None = Field(None, description="Troubleshooting guide")

    def to_body(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
