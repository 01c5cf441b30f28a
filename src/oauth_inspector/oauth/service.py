"""
OAuth Token Service

Token lifecycle proxy: authorization-code exchange, refresh and revocation.
Each operation validates the payload, resolves client credentials (from the
request or, for hosted apps, from the secret store), performs one call to the
provider and shapes the result for the browser.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from oauth_inspector.errors import (
    InspectorError,
    RefreshNotSupportedError,
    RequestValidationFailed,
    SecretLookupError,
    UpstreamOAuthError,
)
from oauth_inspector.monitoring.metrics import record_provider_call
from oauth_inspector.oauth.error_guide import classify
from oauth_inspector.oauth.models import (
    CredentialFields,
    CredentialSet,
    TokenExchangeRequest,
    TokenRefreshRequest,
    TokenRevokeRequest,
)
from oauth_inspector.oauth.provider import OAuthProviderAdapter, OutboundRequest
from oauth_inspector.oauth.secrets import resolve_auth0_domain, resolve_hosted_credentials

if TYPE_CHECKING:
    from oauth_inspector.dependencies import InspectorContext

logger = structlog.get_logger()

INTERNAL_ERROR = "Internal server error."
REVOKE_FAILED = "Failed to revoke token."


class TokenService:
    """
    Token exchange, refresh and revocation against OAuth providers.

    Credentials live only for the duration of one call and are never logged;
    log events carry presence flags instead.
    """

    def __init__(self, context: InspectorContext) -> None:
        self.context = context

    # -- credentials -------------------------------------------------------

    async def _resolve_credentials(
        self,
        adapter: OAuthProviderAdapter,
        payload: CredentialFields,
    ) -> CredentialSet:
        """
        Resolve the credential set for one request.

        Args:
            adapter: Provider adapter
            payload: Request credential fields

        Returns:
            Credential set

        Raises:
            SecretLookupError: If hosted credentials cannot be resolved
            RequestValidationFailed: If non-hosted credentials are missing
        """
        if payload.is_hosted:
            hosted = await resolve_hosted_credentials(self.context.secrets, adapter)
            domain = None
            if adapter.REQUIRES_DOMAIN:
                # The hosted tenant wins; the caller's domain covers a missing secret
                domain = await resolve_auth0_domain(self.context.secrets) or payload.auth0_domain
            return CredentialSet(hosted.client_id, hosted.client_secret, domain)

        if not payload.client_id or not payload.client_secret:
            logger.warning(
                "Missing client credentials for non-hosted flow",
                provider=adapter.name,
                has_client_id=bool(payload.client_id),
                has_client_secret=bool(payload.client_secret),
            )
            raise RequestValidationFailed(
                "Missing required parameters for non-hosted auth: clientId, clientSecret."
            )

        return CredentialSet(payload.client_id, payload.client_secret, payload.auth0_domain)

    # -- provider calls ----------------------------------------------------

    async def _send(
        self,
        adapter: OAuthProviderAdapter,
        operation: str,
        request: OutboundRequest,
    ) -> httpx.Response:
        logger.info(
            "Calling OAuth provider",
            provider=adapter.name,
            operation=operation,
            method=request.method,
            url=request.url,
        )
        start_time = time.perf_counter()
        try:
            response = await request.send(self.context.http_client)
        except httpx.HTTPError:
            record_provider_call(
                adapter.name, operation, "failure", time.perf_counter() - start_time
            )
            raise

        outcome = "success" if response.is_success else "provider_error"
        record_provider_call(adapter.name, operation, outcome, time.perf_counter() - start_time)
        logger.info(
            "OAuth provider response received",
            provider=adapter.name,
            operation=operation,
            status_code=response.status_code,
        )
        return response

    def _raise_for_provider_error(
        self,
        adapter: OAuthProviderAdapter,
        operation: str,
        response: httpx.Response,
    ) -> None:
        if response.is_success:
            return

        classified = classify(response.text, response.status_code, adapter.PROVIDER)
        logger.error(
            "OAuth provider error response",
            provider=adapter.name,
            operation=operation,
            status_code=response.status_code,
            error_code=classified.error_code,
            response_text=response.text[:500],
        )
        raise UpstreamOAuthError(response.status_code, classified.to_body())

    async def _token_call(
        self,
        adapter: OAuthProviderAdapter,
        operation: str,
        request: OutboundRequest,
        credentials: CredentialSet,
    ) -> dict[str, Any]:
        response = await self._send(adapter, operation, request)
        self._raise_for_provider_error(adapter, operation, response)

        token_data = response.json()
        if not isinstance(token_data, dict):
            raise ValueError("Token response is not a JSON object")

        token_data = adapter.augment_token_response(token_data, credentials)
        logger.info(
            "OAuth token call successful",
            provider=adapter.name,
            operation=operation,
            has_access_token=bool(token_data.get("access_token")),
            has_refresh_token=bool(token_data.get("refresh_token")),
        )
        return token_data

    # -- operations --------------------------------------------------------

    async def exchange(self, payload: TokenExchangeRequest) -> dict[str, Any]:
        """
        Exchange an authorization code for tokens.

        Args:
            payload: Exchange request

        Returns:
            Provider token response (Auth0 responses carry ``auth0_domain``)

        Raises:
            InspectorError: On validation failure, provider error or internal error
        """
        if not payload.code or not payload.provider or not payload.redirect_uri:
            logger.warning(
                "Token exchange missing required parameters",
                has_code=bool(payload.code),
                has_provider=bool(payload.provider),
                has_redirect_uri=bool(payload.redirect_uri),
            )
            raise RequestValidationFailed(
                "Missing required parameters: code, provider, redirectUri."
            )

        adapter = self.context.registry.resolve(payload.provider)

        if adapter.REQUIRES_DOMAIN and not payload.auth0_domain and not payload.is_hosted:
            raise RequestValidationFailed("Auth0 domain is required for non-hosted auth.")

        logger.info(
            "Token exchange requested",
            provider=adapter.name,
            is_hosted=bool(payload.is_hosted),
            has_scopes=bool(payload.scopes),
        )

        try:
            credentials = await self._resolve_credentials(adapter, payload)
            request = adapter.build_exchange_request(payload.code, payload.redirect_uri, credentials)
            return await self._token_call(adapter, "exchange", request, credentials)
        except InspectorError:
            raise
        except Exception as e:
            logger.error(
                "Token exchange failed",
                provider=adapter.name,
                error=str(e),
                exc_info=not isinstance(e, SecretLookupError),
            )
            raise InspectorError(INTERNAL_ERROR, message=str(e)) from e

    async def refresh(self, payload: TokenRefreshRequest) -> dict[str, Any]:
        """
        Redeem a refresh token for a new access token.

        GitHub OAuth Apps are rejected before any secret lookup or provider
        call.

        Args:
            payload: Refresh request

        Returns:
            Provider token response

        Raises:
            InspectorError: On validation failure, provider error or internal error
        """
        if not payload.refresh_token or not payload.provider:
            raise RequestValidationFailed("Missing required parameters: refreshToken, provider.")

        adapter = self.context.registry.resolve(payload.provider)

        if not adapter.SUPPORTS_REFRESH:
            logger.info("Refresh not supported by provider", provider=adapter.name)
            raise RefreshNotSupportedError(adapter.REFRESH_UNSUPPORTED_MESSAGE)

        if adapter.REQUIRES_DOMAIN and not payload.auth0_domain and not payload.is_hosted:
            raise RequestValidationFailed("Auth0 domain is required for non-hosted auth.")

        logger.info("Token refresh requested", provider=adapter.name, is_hosted=bool(payload.is_hosted))

        try:
            credentials = await self._resolve_credentials(adapter, payload)
            request = adapter.build_refresh_request(payload.refresh_token, credentials)
            return await self._token_call(adapter, "refresh", request, credentials)
        except InspectorError:
            raise
        except Exception as e:
            logger.error(
                "Token refresh failed",
                provider=adapter.name,
                error=str(e),
                exc_info=not isinstance(e, SecretLookupError),
            )
            raise InspectorError(INTERNAL_ERROR, message=str(e)) from e

    async def revoke(self, payload: TokenRevokeRequest) -> dict[str, Any]:
        """
        Revoke an access or refresh token.

        Providers without a revocation endpoint answer success immediately
        with an explanatory message and no outbound call.

        Args:
            payload: Revocation request

        Returns:
            ``{"success": True, "message": ...}``

        Raises:
            InspectorError: On validation failure, rejected revocation or internal error
        """
        if not payload.token or not payload.provider:
            raise RequestValidationFailed("Missing required parameters: token, provider.")

        adapter = self.context.registry.resolve(payload.provider)

        if adapter.REVOKE_UNSUPPORTED_MESSAGE:
            logger.info("Revocation not supported by provider", provider=adapter.name)
            return {"success": True, "message": adapter.REVOKE_UNSUPPORTED_MESSAGE}

        logger.info(
            "Token revocation requested",
            provider=adapter.name,
            is_hosted=bool(payload.is_hosted),
            token_type_hint=payload.token_type_hint,
        )

        try:
            credentials = await self._resolve_credentials(adapter, payload)
            request = adapter.build_revoke_request(
                payload.token, credentials, payload.token_type_hint
            )
            response = await self._send(adapter, "revoke", request)
        except InspectorError:
            raise
        except Exception as e:
            logger.error(
                "Token revocation failed",
                provider=adapter.name,
                error=str(e),
                exc_info=not isinstance(e, SecretLookupError),
            )
            raise InspectorError(INTERNAL_ERROR, success=False, message=str(e)) from e

        if adapter.is_revocation_successful(response.status_code):
            logger.info("Token revoked", provider=adapter.name, status_code=response.status_code)
            return {"success": True, "message": "Token revoked successfully."}

        logger.error(
            "OAuth provider revocation error response",
            provider=adapter.name,
            status_code=response.status_code,
        )
        # A 1xx-3xx status cannot carry the failure body back to the browser
        status_code = response.status_code if response.status_code >= 400 else 502
        raise InspectorError(
            _revocation_error(response),
            status_code=status_code,
            success=False,
        )


def _revocation_error(response: httpx.Response) -> str:
    """Best-effort error message from a rejected revocation response."""
    if "application/json" not in response.headers.get("content-type", ""):
        return REVOKE_FAILED
    try:
        data = response.json()
    except ValueError:
        return REVOKE_FAILED
    if not isinstance(data, dict):
        return REVOKE_FAILED
    return str(data.get("error") or data.get("error_description") or REVOKE_FAILED)
