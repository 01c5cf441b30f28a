"""
API Explorer Routes

Proxy endpoint for provider API calls made from the browser's explorer.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from oauth_inspector.dependencies import Context
from oauth_inspector.oauth.explore import ApiExploreProxy
from oauth_inspector.oauth.models import ApiExploreRequest

router = APIRouter(prefix="/api")


@router.post("/explore")
async def explore(
    context: Context,
    payload: ApiExploreRequest | None = None,
) -> dict[str, Any]:
    """Call a provider API endpoint with the user's access token."""
    return await ApiExploreProxy(context).call(payload or ApiExploreRequest())
