"""
FastAPI Inspector Dependencies

Request-scoped access to the shared inspector context built in the
application lifespan.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import httpx
from fastapi import Depends, Request

from oauth_inspector.config import InspectorSettings
from oauth_inspector.oauth.registry import ProviderRegistry
from oauth_inspector.oauth.secrets import SecretProvider


@dataclass
class InspectorContext:
    """Shared collaborators for every proxy operation."""

    settings: InspectorSettings
    secrets: SecretProvider
    registry: ProviderRegistry
    http_client: httpx.AsyncClient


def get_context(request: Request) -> InspectorContext:
    """
    Get the inspector context stored on the application state.

    Args:
        request: FastAPI request object

    Returns:
        Inspector context created during startup
    """
    return request.app.state.context


# Type alias for dependency injection
Context = Annotated[InspectorContext, Depends(get_context)]
