"""OAuth token refresh"""

import logging
from typing import Any, Dict

from spotify_web_api.http import Request
from spotify_web_api.settings import TOKEN_PATH
from .models import Credentials
from .token_exchange import basic_auth_header, token_payload

logger = logging.getLogger(__name__)


def refresh_tokens(request: Request, credentials: Credentials, refresh_token: str) -> Dict[str, Any]:
    """Exchange a refresh token for a new access token

    Refresh tokens issued through PKCE are refreshed without a client secret;
    the client ID travels in the body instead of a Basic header.

    Args:
        request: Request facade used to reach the accounts service
        credentials: Application credentials
        refresh_token: The refresh token to use

    Returns:
        Token response as a dict

    Raises:
        AuthError: If the refresh token or credentials were rejected
        ApiError: For other error statuses
        TransportError: If the request could not be sent
    """
    parameters = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }

    if credentials.client_secret:
        headers = basic_auth_header(credentials)
    else:
        headers = {}
        parameters["client_id"] = credentials.client_id

    logger.info("Attempting to refresh access token...")
    response = request.account("POST", TOKEN_PATH, parameters, headers)
    return token_payload(response.body)
