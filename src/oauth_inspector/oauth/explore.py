"""
API Explore Proxy

Forwards a provider API call selected in the browser's explorer, so the
browser avoids the provider's CORS policy. The access token is passed
through as a bearer token and the provider answer is returned with its
status and headers.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from oauth_inspector.errors import InspectorError, RequestValidationFailed
from oauth_inspector.monitoring.metrics import record_provider_call
from oauth_inspector.oauth.models import ApiExploreRequest, ApiExploreResponse
from oauth_inspector.oauth.provider import OAuthProviderAdapter

if TYPE_CHECKING:
    from oauth_inspector.dependencies import InspectorContext

logger = structlog.get_logger()


def _parse_body(response: httpx.Response) -> Any:
    """Decode a provider body as JSON, falling back to text (None when empty)."""
    text = response.text
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if message:
            return message if isinstance(message, str) else json.dumps(message)
    return "API call failed"


class ApiExploreProxy:
    """Single-call proxy for provider REST APIs."""

    def __init__(self, context: InspectorContext) -> None:
        self.context = context

    def _target_url(
        self,
        adapter: OAuthProviderAdapter,
        url: str,
        auth0_domain: str | None,
    ) -> str:
        # Tenant-scoped providers accept paths relative to the tenant domain
        if adapter.REQUIRES_DOMAIN and url.startswith("/"):
            if not auth0_domain:
                raise RequestValidationFailed("Auth0 domain required for Auth0 API calls")
            return f"https://{auth0_domain}{url}"
        return url

    async def call(self, payload: ApiExploreRequest) -> dict[str, Any]:
        """
        Perform the provider API call.

        Args:
            payload: Explore request

        Returns:
            ``{"success", "status", "data", "error"?, "headers"}``

        Raises:
            InspectorError: On validation failure or transport failure
        """
        endpoint = payload.endpoint
        if not payload.provider or not payload.access_token or endpoint is None:
            raise RequestValidationFailed("Missing required fields: provider, accessToken, endpoint")

        if not endpoint.url or not endpoint.method:
            raise RequestValidationFailed("Invalid endpoint: missing url or method")

        adapter = self.context.registry.resolve(payload.provider)
        target_url = self._target_url(adapter, endpoint.url, payload.auth0_domain)

        logger.info(
            "API explore request",
            provider=adapter.name,
            endpoint_id=endpoint.id,
            url=target_url,
            method=endpoint.method,
        )

        headers = adapter.api_headers(payload.access_token, self.context.settings.EXPLORE_USER_AGENT)
        start_time = time.perf_counter()
        try:
            response = await self.context.http_client.request(
                endpoint.method.upper(), target_url, headers=headers
            )
        except Exception as e:
            record_provider_call(adapter.name, "explore", "failure", time.perf_counter() - start_time)
            logger.error(
                "API explore call failed",
                provider=adapter.name,
                endpoint_id=endpoint.id,
                error=str(e),
                exc_info=True,
            )
            raise InspectorError(str(e) or type(e).__name__, success=False) from e

        outcome = "success" if response.is_success else "provider_error"
        record_provider_call(adapter.name, "explore", outcome, time.perf_counter() - start_time)

        data = _parse_body(response)
        result = ApiExploreResponse(
            success=response.is_success,
            status=response.status_code,
            data=data,
            error=None if response.is_success else _error_message(data),
            headers=dict(response.headers),
        )

        logger.info(
            "API explore response",
            provider=adapter.name,
            endpoint_id=endpoint.id,
            status=response.status_code,
            success=response.is_success,
        )

        body = result.model_dump(by_alias=True)
        if body["error"] is None:
            del body["error"]
        return body
