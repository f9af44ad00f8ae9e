"""OAuth token requests against the Spotify accounts service"""

import base64
import logging
import time
from typing import Any, Dict, Optional

from spotify_web_api.http import Request
from spotify_web_api.settings import TOKEN_PATH
from .models import Credentials, TokenState

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600


def basic_auth_header(credentials: Credentials) -> Dict[str, str]:
    """Build the Basic Authorization header for confidential token requests"""
    payload = f"{credentials.client_id}:{credentials.client_secret}".encode("utf-8")
    return {"Authorization": "Basic " + base64.b64encode(payload).decode("utf-8")}


def token_payload(body: Any) -> Dict[str, Any]:
    """Normalize a token response body to a dict

    The request layer may hand back a dict or a SimpleNamespace depending on
    its return_assoc option. Anything else yields an empty dict.
    """
    if isinstance(body, dict):
        return body
    if hasattr(body, "__dict__"):
        return dict(vars(body))
    return {}


def parse_expires_in(value: Any) -> int:
    """Read expires_in as whole seconds, falling back to DEFAULT_EXPIRES_IN"""
    if value is None or value == "":
        return DEFAULT_EXPIRES_IN
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Ignoring malformed expires_in {value!r}, using {DEFAULT_EXPIRES_IN} seconds")
        return DEFAULT_EXPIRES_IN


def parse_token_response(
    payload: Dict[str, Any],
    previous: TokenState,
    refresh_token_fallback: str = "",
    now: Optional[float] = None,
) -> TokenState:
    """Build the new token state from a token endpoint response

    Args:
        payload: Token response as a dict, must contain access_token
        previous: Current token state, used for fields the response omits
        refresh_token_fallback: Refresh token to keep when none is returned
        now: Current unix time (defaults to time.time())

    Returns:
        New token state; ``previous`` is left untouched
    """
    issued_at = int(time.time() if now is None else now)
    expires_in = parse_expires_in(payload.get("expires_in"))

    scope = payload.get("scope")
    if isinstance(scope, str):
        scopes = scope.split()
    else:
        scopes = list(previous.scope)

    return TokenState(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token") or refresh_token_fallback,
        expiration=issued_at + expires_in,
        scope=scopes,
    )


def exchange_code(
    request: Request,
    credentials: Credentials,
    code: str,
    code_verifier: str = "",
) -> Dict[str, Any]:
    """Exchange an authorization code for tokens

    With a code verifier the request is a PKCE exchange and the client secret
    is not sent. Without one the client secret authenticates the request.

    Args:
        request: Request facade used to reach the accounts service
        credentials: Application credentials
        code: Authorization code from the redirect
        code_verifier: PKCE code verifier, if PKCE was used

    Returns:
        Token response as a dict

    Raises:
        AuthError: If Spotify rejected the request
        ApiError: For other error statuses
        TransportError: If the request could not be sent
    """
    parameters = {"client_id": credentials.client_id}
    if code_verifier:
        parameters["code_verifier"] = code_verifier
    else:
        parameters["client_secret"] = credentials.client_secret
    parameters.update({
        "code": code,
        "grant_type": "authorization_code",
        "redirect_uri": credentials.redirect_uri,
    })

    logger.info(f"Exchanging authorization code for tokens ({'PKCE' if code_verifier else 'client secret'})")
    response = request.account("POST", TOKEN_PATH, parameters)
    return token_payload(response.body)


def request_client_credentials(request: Request, credentials: Credentials) -> Dict[str, Any]:
    """Request an app-only access token with the client credentials flow

    Returns:
        Token response as a dict

    Raises:
        AuthError: If Spotify rejected the credentials
        ApiError: For other error statuses
        TransportError: If the request could not be sent
    """
    logger.info("Requesting client credentials token")
    response = request.account(
        "POST",
        TOKEN_PATH,
        {"grant_type": "client_credentials"},
        basic_auth_header(credentials),
    )
    return token_payload(response.body)
