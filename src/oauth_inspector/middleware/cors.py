"""
CORS Middleware

Cross-Origin Resource Sharing for the inspector's browser frontend.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oauth_inspector.config import InspectorSettings


def setup_cors(app: FastAPI, settings: InspectorSettings) -> None:
    """
    Configure CORS middleware for the inspector.

    The frontend calls the proxy with JSON bodies only, so credentials are not
    allowed and only the proxy's methods are exposed.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID", "X-Request-ID"],
    )
