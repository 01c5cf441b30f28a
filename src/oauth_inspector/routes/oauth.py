"""
OAuth Routes

FastAPI endpoints for the token lifecycle: authorization-code exchange,
refresh and revocation.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from oauth_inspector.dependencies import Context
from oauth_inspector.oauth.models import (
    TokenExchangeRequest,
    TokenRefreshRequest,
    TokenRevokeRequest,
)
from oauth_inspector.oauth.service import TokenService

router = APIRouter(prefix="/api/oauth")


@router.post("/token")
async def exchange_token(
    context: Context,
    payload: TokenExchangeRequest | None = None,
) -> dict[str, Any]:
    """
    Exchange an authorization code for tokens.

    Args:
        context: Inspector context
        payload: Exchange request (code, provider, redirectUri and credentials)

    Returns:
        Provider token response
    """
    return await TokenService(context).exchange(payload or TokenExchangeRequest())


@router.post("/refresh")
async def refresh_token(
    context: Context,
    payload: TokenRefreshRequest | None = None,
) -> dict[str, Any]:
    """
    Redeem a refresh token.

    Args:
        context: Inspector context
        payload: Refresh request (refreshToken, provider and credentials)

    Returns:
        Provider token response
    """
    return await TokenService(context).refresh(payload or TokenRefreshRequest())


@router.post("/revoke")
async def revoke_token(
    context: Context,
    payload: TokenRevokeRequest | None = None,
) -> dict[str, Any]:
    """
    Revoke an access or refresh token.

    Args:
        context: Inspector context
        payload: Revoke request (token, provider, tokenTypeHint and credentials)

    Returns:
        Revocation outcome
    """
    return await TokenService(context).revoke(payload or TokenRevokeRequest())
