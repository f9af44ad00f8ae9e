"""Response classification

Maps an HTTP status and response body to the error taxonomy in
``spotify_web_api.exceptions``. Spotify reports two error shapes:

- API errors: ``{"error": {"status": 404, "message": "...", "reason": "..."}}``
- Account (OAuth) errors: ``{"error": "invalid_grant", "error_description": "..."}``

The English ``error_description`` literals Spotify uses for auth failures
live in AUTH_ERROR_KINDS and nowhere else.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

from spotify_web_api.exceptions import (
    TOKEN_EXPIRED,
    UNKNOWN_ERROR,
    ApiError,
    AuthError,
    AuthErrorKind,
    RateLimitedError,
    RATE_LIMIT_STATUS,
)

logger = logging.getLogger(__name__)

ACCOUNT_ENDPOINT = "account"
API_ENDPOINT = "api"

AUTH_ERROR_KINDS: Dict[str, AuthErrorKind] = {
    TOKEN_EXPIRED: AuthErrorKind.EXPIRED_TOKEN,
    "Invalid client": AuthErrorKind.INVALID_CREDENTIALS,
    "Invalid client secret": AuthErrorKind.INVALID_CREDENTIALS,
    "Invalid refresh token": AuthErrorKind.INVALID_REFRESH_TOKEN,
    "Refresh token revoked": AuthErrorKind.INVALID_REFRESH_TOKEN,
}


def auth_error_kind(description: str) -> AuthErrorKind:
    """Look up the auth error kind for an error description"""
    return AUTH_ERROR_KINDS.get(description.strip(), AuthErrorKind.OTHER)


def is_success(status: int) -> bool:
    return 200 <= status <= 299


def _parse_error_body(body_text: str) -> Dict[str, Any]:
    """Parse an error body, returning an empty dict for anything but a JSON object"""
    if not body_text:
        return {}
    try:
        parsed = json.loads(body_text)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def parse_retry_after(headers: Optional[Mapping[str, str]]) -> int:
    """Read the retry-after header as whole seconds (0 when missing or malformed)"""
    if not headers:
        return 0
    value = headers.get("retry-after")
    if value is None:
        return 0
    try:
        return max(0, int(float(str(value).strip())))
    except ValueError:
        logger.warning(f"Ignoring malformed retry-after header: {value!r}")
        return 0


def classify_response(
    status: int,
    body_text: str,
    headers: Optional[Mapping[str, str]] = None,
    endpoint: Optional[str] = None,
) -> Optional[ApiError]:
    """Classify a response

    Args:
        status: HTTP status code
        body_text: Raw response body decoded as text
        headers: Response headers with lower-cased names
        endpoint: "account", "api" or None for raw requests

    Returns:
        None for a successful response, otherwise the error to raise
    """
    if is_success(status):
        return None

    parsed = _parse_error_body(body_text)
    error = parsed.get("error")
    error = error if isinstance(error, dict) else {}

    api_message = error.get("message") if isinstance(error.get("message"), str) else None
    reason = error.get("reason") if isinstance(error.get("reason"), str) else ""
    description = parsed.get("error_description")
    description = description if isinstance(description, str) else None

    if status == RATE_LIMIT_STATUS:
        return RateLimitedError(
            api_message or description or body_text.strip() or UNKNOWN_ERROR,
            status=status,
            retry_after=parse_retry_after(headers),
            reason=reason,
        )

    if description is not None:
        return AuthError(description, status, auth_error_kind(description), reason)

    if status == 401 and api_message == TOKEN_EXPIRED:
        return AuthError(api_message, status, AuthErrorKind.EXPIRED_TOKEN, reason)

    message = api_message or body_text.strip() or UNKNOWN_ERROR

    if endpoint == ACCOUNT_ENDPOINT:
        return AuthError(message, status, AuthErrorKind.OTHER, reason)

    return ApiError(message, status, reason)
