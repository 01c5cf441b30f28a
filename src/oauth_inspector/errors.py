"""
Inspector Errors

Exception hierarchy for the token proxy. Every exception carries the HTTP
status code and the JSON body the client receives; the FastAPI exception
handler in ``oauth_inspector.main`` renders them verbatim.
"""

from __future__ import annotations

from typing import Any


class InspectorError(Exception):
    """Base error rendered as ``{"error": message, **extra}``."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        /,
        status_code: int | None = None,
        **extra: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_body(self) -> dict[str, Any]:
        """Build the JSON response body."""
        return {"error": self.message, **self.extra}


class RequestValidationFailed(InspectorError):
    """Missing or malformed request fields."""

    status_code = 400


class UnsupportedProviderError(InspectorError):
    """Provider outside the supported set."""

    status_code = 400

    def __init__(self, **extra: Any) -> None:
        super().__init__("Unsupported provider.", **extra)


class RefreshNotSupportedError(InspectorError):
    """Provider cannot refresh tokens at all."""

    status_code = 400


class UpstreamOAuthError(InspectorError):
    """
    Non-2xx response from an OAuth provider.

    The status code mirrors the provider's and the body is the classified
    error (``error``, ``errorCode``, ``guide``).
    """

    def __init__(self, status_code: int, body: dict[str, Any]) -> None:
        super().__init__(body.get("error", "Authentication failed"), status_code=status_code)
        self.body = body

    def to_body(self) -> dict[str, Any]:
        return dict(self.body)


class SecretLookupError(Exception):
    """A named secret could not be resolved from the configured backend."""
