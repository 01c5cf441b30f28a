"""
Hosted OAuth Routes

Bootstrap and availability endpoints for the inspector's hosted OAuth apps.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from oauth_inspector.dependencies import Context
from oauth_inspector.oauth.hosted import HostedOAuthService
from oauth_inspector.oauth.models import HostedInitRequest

router = APIRouter(prefix="/api/oauth-hosted")


@router.post("/init")
async def init_hosted(
    context: Context,
    payload: HostedInitRequest | None = None,
) -> dict[str, str]:
    """Build the hosted authorization URL for a provider."""
    return await HostedOAuthService(context).init(payload or HostedInitRequest())


@router.get("/availability")
async def hosted_availability(context: Context) -> dict[str, Any]:
    """Report which providers have a fully configured hosted app."""
    return await HostedOAuthService(context).availability()
