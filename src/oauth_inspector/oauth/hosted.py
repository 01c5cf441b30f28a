"""
Hosted OAuth Apps

Bootstrap for the hosted flow, where the inspector's own OAuth apps are used
instead of credentials pasted by the user. The browser asks for an
authorization URL, then completes the flow through the token endpoints with
``isHosted`` set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from oauth_inspector.errors import InspectorError, RequestValidationFailed
from oauth_inspector.oauth.models import HostedInitRequest
from oauth_inspector.oauth.secrets import check_availability, resolve_hosted_credentials

if TYPE_CHECKING:
    from oauth_inspector.dependencies import InspectorContext

logger = structlog.get_logger()

HOSTED_INIT_FAILED = "Failed to initialize hosted OAuth."
AVAILABILITY_FAILED = "Failed to check availability."


class HostedOAuthService:
    """Authorization URL bootstrap and availability report for hosted apps."""

    def __init__(self, context: InspectorContext) -> None:
        self.context = context

    async def init(self, payload: HostedInitRequest) -> dict[str, str]:
        """
        Build the authorization URL for a hosted OAuth app.

        The URL carries the app's client ID, the fixed hosted scopes and
        ``state={provider}-hosted``.

        Args:
            payload: Hosted init request

        Returns:
            ``{"authUrl": ...}``

        Raises:
            InspectorError: On validation failure or when the hosted app is not configured
        """
        if not payload.provider or not payload.redirect_uri:
            logger.warning(
                "Hosted OAuth initialization missing parameters",
                has_provider=bool(payload.provider),
                has_redirect_uri=bool(payload.redirect_uri),
            )
            raise RequestValidationFailed("Missing required parameters: provider and redirectUri.")

        adapter = self.context.registry.resolve(payload.provider)
        secrets = self.context.secrets

        try:
            credentials = await resolve_hosted_credentials(secrets, adapter)
            domain = await secrets.get_secret(adapter.DOMAIN_SECRET) if adapter.REQUIRES_DOMAIN else None
            auth_url = adapter.build_authorization_url(
                credentials.client_id,
                payload.redirect_uri,
                state=f"{adapter.name}-hosted",
                domain=domain,
            )
        except Exception as e:
            logger.error(
                "Hosted OAuth initialization failed",
                provider=adapter.name,
                error=str(e),
            )
            raise InspectorError(HOSTED_INIT_FAILED, message=str(e)) from e

        logger.info("Hosted OAuth authorization URL generated", provider=adapter.name)
        return {"authUrl": auth_url}

    async def availability(self) -> dict[str, Any]:
        """
        Report which hosted apps are fully configured.

        Returns:
            ``{"availability": {provider: bool, ...}}`` covering every provider

        Raises:
            InspectorError: If the secret backend cannot be probed
        """
        try:
            availability = await check_availability(self.context.secrets, list(self.context.registry))
        except Exception as e:
            logger.error("Hosted availability check failed", error=str(e), exc_info=True)
            raise InspectorError(AVAILABILITY_FAILED) from e

        logger.info("Hosted availability computed", availability=availability)
        return {"availability": availability}
