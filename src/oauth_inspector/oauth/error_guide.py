"""
OAuth Error Guide

Detects OAuth error codes in raw provider error payloads and attaches
troubleshooting guidance for the well-known codes of RFC 6749 section 5.2
and 4.1.2.1.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qs

from oauth_inspector.oauth.models import EnhancedOAuthError, OAuthErrorGuide, ProviderId

_CODE_FIELDS = ("error", "error_code", "code")
_MESSAGE_FIELDS = ("error_description", "message", "description")

OAUTH_ERROR_GUIDES: dict[str, OAuthErrorGuide] = {
    "invalid_scope": OAuthErrorGuide(
        error_code="invalid_scope",
        title="Invalid Scope",
        description="The requested scope is invalid, unknown, or malformed.",
        troubleshooting=(
            "Check that all requested scopes are supported by the OAuth provider",
            "Verify scope names are spelled correctly (case-sensitive)",
            "Remove any unsupported or deprecated scopes from your request",
            "Consult the provider's documentation for valid scope values",
        ),
        common_causes=(
            "Typo in scope name",
            "Using deprecated or removed scopes",
            "Requesting scopes not available to your application type",
            "Mixing scopes from different OAuth versions",
        ),
    ),
    "unauthorized_client": OAuthErrorGuide(
        error_code="unauthorized_client",
        title="Unauthorized Client",
        description="The client is not authorized to request an access token using this method.",
        troubleshooting=(
            "Verify your Client ID and Client Secret are correct",
            "Check that your application is properly registered with the OAuth provider",
            "Ensure your redirect URI matches exactly what's registered",
            "Confirm your application type supports the requested grant type",
            "Check if your application needs approval from the OAuth provider",
        ),
        common_causes=(
            "Incorrect Client ID or Client Secret",
            "Application not approved or verified",
            "Redirect URI mismatch",
            "Using wrong grant type for application",
            "Application suspended or disabled",
        ),
    ),
    "access_denied": OAuthErrorGuide(
        error_code="access_denied",
        title="Access Denied",
        description="The resource owner or authorization server denied the request.",
        troubleshooting=(
            "User may have clicked 'Cancel' or 'Deny' during authorization",
            "Try the authorization flow again",
            "Ensure you're requesting appropriate permissions for your use case",
            "Check if the user account has sufficient privileges",
            "Verify the application is approved for the requested scopes",
        ),
        common_causes=(
            "User denied authorization",
            "Requesting excessive permissions",
            "User account restrictions",
            "Application not trusted by user",
            "Organizational policies blocking access",
        ),
    ),
    "invalid_client": OAuthErrorGuide(
        error_code="invalid_client",
        title="Invalid Client",
        description="Client authentication failed or client credentials are invalid.",
        troubleshooting=(
            "Double-check your Client ID and Client Secret",
            "Ensure credentials are not expired or revoked",
            "Verify you're using the correct authentication method",
            "Check if your application needs to be re-registered",
            "Confirm your application is active and not suspended",
        ),
        common_causes=(
            "Wrong Client ID or Client Secret",
            "Expired client credentials",
            "Application deleted or suspended",
            "Incorrect authentication method",
            "Client credentials leaked and revoked",
        ),
    ),
    "invalid_grant": OAuthErrorGuide(
        error_code="invalid_grant",
        title="Invalid Grant",
        description="The provided authorization grant is invalid, expired, or revoked.",
        troubleshooting=(
            "Authorization code may have expired (typically valid for 10 minutes)",
            "Code may have already been used (codes are single-use)",
            "Verify the redirect URI matches the one used in authorization",
            "Check that the authorization code wasn't tampered with",
            "Ensure system clocks are synchronized",
        ),
        common_causes=(
            "Authorization code expired",
            "Code already exchanged for token",
            "Redirect URI mismatch",
            "Clock skew between systems",
            "Code parameter modified or corrupted",
        ),
    ),
    "invalid_request": OAuthErrorGuide(
        error_code="invalid_request",
        title="Invalid Request",
        description=(
            "The request is missing a required parameter, includes invalid values, "
            "or is malformed."
        ),
        troubleshooting=(
            "Check that all required parameters are included",
            "Verify parameter names and values are correct",
            "Ensure proper encoding of special characters",
            "Review the OAuth provider's API documentation",
            "Check request content-type and format",
        ),
        common_causes=(
            "Missing required parameters",
            "Malformed parameter values",
            "Incorrect content-type header",
            "URL encoding issues",
            "Using wrong parameter names",
        ),
    ),
    "server_error": OAuthErrorGuide(
        error_code="server_error",
        title="Server Error",
        description="The authorization server encountered an unexpected condition.",
        troubleshooting=(
            "Wait a few minutes and retry the request",
            "Check the OAuth provider's status page for outages",
            "Verify your request is not malformed",
            "Contact the OAuth provider if issue persists",
            "Implement exponential backoff for retries",
        ),
        common_causes=(
            "Temporary server overload",
            "OAuth provider infrastructure issues",
            "Database connectivity problems",
            "Rate limiting on provider side",
            "Maintenance windows",
        ),
    ),
    "temporarily_unavailable": OAuthErrorGuide(
        error_code="temporarily_unavailable",
        title="Temporarily Unavailable",
        description=(
            "The authorization server is currently unable to handle the request "
            "due to temporary overloading."
        ),
        troubleshooting=(
            "Wait and retry after a brief delay",
            "Implement exponential backoff strategy",
            "Check if you're hitting rate limits",
            "Monitor OAuth provider status pages",
            "Consider caching tokens to reduce requests",
        ),
        common_causes=(
            "Rate limiting exceeded",
            "Server overload",
            "Temporary maintenance",
            "Traffic spikes",
            "Resource exhaustion",
        ),
    ),
}


def _as_text(value: Any) -> str | None:
    """Normalize a scalar payload field to a non-empty string."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    return None


def _first_text(data: dict[str, Any], fields: tuple[str, ...]) -> str | None:
    for field in fields:
        text = _as_text(data.get(field))
        if text:
            return text
    return None


def _parse_json(raw_body: str) -> tuple[str | None, str | None] | None:
    try:
        data = json.loads(raw_body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return _first_text(data, _CODE_FIELDS), _first_text(data, _MESSAGE_FIELDS)


def _parse_form(raw_body: str) -> tuple[str | None, str | None] | None:
    params = parse_qs(raw_body, keep_blank_values=True)
    if "error" not in params:
        return None
    code = _as_text(params["error"][0])
    description = params.get("error_description", [None])[0]
    return code, _as_text(description)


def classify(
    raw_body: str,
    status: int | None = None,
    provider: ProviderId | None = None,
) -> EnhancedOAuthError:
    """
    Classify a raw provider error payload.

    The body is read as JSON, then as ``application/x-www-form-urlencoded``,
    then as plain text. Classification never raises and always yields a
    non-empty ``error`` message; ``status`` and ``provider`` describe where the
    payload came from and do not change the outcome.

    Args:
        raw_body: Response body exactly as received from the provider
        status: Provider HTTP status code
        provider: Provider that produced the payload

    Returns:
        Enhanced error with error code and troubleshooting guide when known
    """
    raw_body = raw_body or ""

    parsed = _parse_json(raw_body) or _parse_form(raw_body)
    if parsed is None:
        plain = raw_body.strip() or None
        parsed = (plain, plain)

    code, description = parsed
    guide = OAUTH_ERROR_GUIDES.get(code.lower()) if code else None

    if description:
        message = description
    elif code:
        message = f"OAuth error: {code}"
    else:
        message = "Authentication failed"

    return EnhancedOAuthError(error=message, error_code=code, guide=guide)


def is_known_oauth_error(error_code: str | None) -> bool:
    """Check whether an error code has a troubleshooting guide (case-insensitive)."""
    return bool(error_code) and error_code.lower() in OAUTH_ERROR_GUIDES


def get_all_error_guides() -> dict[str, OAuthErrorGuide]:
    """Return a copy of every available error guide."""
    return dict(OAUTH_ERROR_GUIDES)
