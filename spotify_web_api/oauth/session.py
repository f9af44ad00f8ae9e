"""OAuth session: credentials, token state and the token flows"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from spotify_web_api.exceptions import ApiError
from spotify_web_api.http import Request
from spotify_web_api.settings import DEFAULT_CODE_VERIFIER_LENGTH, DEFAULT_STATE_LENGTH
from spotify_web_api.utils.logging_utils import redact_token
from . import pkce
from .authorization import build_authorize_url
from .models import AuthorizeOptions, Credentials, PkceCodes, TokenState
from .token_exchange import exchange_code, parse_token_response, request_client_credentials
from .token_refresh import refresh_tokens

logger = logging.getLogger(__name__)


class Session:
    """Holds application credentials and the current token state

    The token operations return True/False instead of raising for errors
    reported by Spotify; the cause is logged at WARNING. Transport errors
    propagate. A failed operation never modifies the stored tokens.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str = "",
        redirect_uri: str = "",
        request: Optional[Request] = None,
    ):
        """Initialize session

        Args:
            client_id: The application's client ID
            client_secret: The client secret, empty for PKCE-only use
            redirect_uri: Callback URI registered for the application
            request: Request facade for the accounts service (creates new if None)
        """
        self.credentials = Credentials(client_id, client_secret, redirect_uri)
        self.tokens = TokenState()
        self._owns_request = request is None
        self.request = request or Request()

    def close(self) -> None:
        """Close the request facade if this session created it"""
        if self._owns_request:
            self.request.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Credentials

    @property
    def client_id(self) -> str:
        return self.credentials.client_id

    @property
    def client_secret(self) -> str:
        return self.credentials.client_secret

    @property
    def redirect_uri(self) -> str:
        return self.credentials.redirect_uri

    def get_client_id(self) -> str:
        return self.credentials.client_id

    def get_client_secret(self) -> str:
        return self.credentials.client_secret

    def get_redirect_uri(self) -> str:
        return self.credentials.redirect_uri

    def set_client_id(self, client_id: str) -> "Session":
        self.credentials.client_id = client_id
        return self

    def set_client_secret(self, client_secret: str) -> "Session":
        self.credentials.client_secret = client_secret
        return self

    def set_redirect_uri(self, redirect_uri: str) -> "Session":
        self.credentials.redirect_uri = redirect_uri
        return self

    # Token state

    @property
    def access_token(self) -> str:
        return self.tokens.access_token

    @property
    def refresh_token(self) -> str:
        return self.tokens.refresh_token

    def get_access_token(self) -> str:
        return self.tokens.access_token

    def get_refresh_token(self) -> str:
        return self.tokens.refresh_token

    def get_token_expiration(self) -> int:
        """Get the access token expiration time as a unix timestamp"""
        return self.tokens.expiration

    def get_scope(self) -> List[str]:
        """Get the scopes granted to the current access token"""
        return list(self.tokens.scope)

    def set_access_token(self, access_token: str) -> "Session":
        self.tokens.access_token = access_token
        return self

    def set_refresh_token(self, refresh_token: str) -> "Session":
        self.tokens.refresh_token = refresh_token
        return self

    # Authorization

    def get_authorize_url(self, options: Optional[Union[AuthorizeOptions, Mapping[str, Any]]] = None) -> str:
        """Get the authorization URL

        Args:
            options: AuthorizeOptions or a mapping with the keys scope, state,
                code_challenge, code_challenge_method and show_dialog

        Returns:
            The URL to send the user to
        """
        return build_authorize_url(self.credentials, options)

    @staticmethod
    def generate_state(length: int = DEFAULT_STATE_LENGTH) -> str:
        return pkce.generate_state(length)

    @staticmethod
    def generate_code_verifier(length: int = DEFAULT_CODE_VERIFIER_LENGTH) -> str:
        return pkce.generate_code_verifier(length)

    @staticmethod
    def generate_code_challenge(code_verifier: str, hash_algo: str = "sha256") -> str:
        return pkce.generate_code_challenge(code_verifier, hash_algo)

    @staticmethod
    def generate_pkce(length: int = DEFAULT_CODE_VERIFIER_LENGTH) -> PkceCodes:
        return pkce.generate_pkce(length)

    # Token flows

    def request_access_token(self, code: str, code_verifier: str = "") -> bool:
        """Exchange an authorization code for access and refresh tokens

        Args:
            code: Authorization code from the redirect
            code_verifier: PKCE code verifier; when empty the client secret is sent

        Returns:
            True if tokens were obtained, False otherwise
        """
        try:
            payload = exchange_code(self.request, self.credentials, code, code_verifier)
        except ApiError as e:
            logger.warning(f"Authorization code exchange failed: {e.message} (status {e.status})")
            return False

        return self._store(payload, "authorization code", refresh_token_fallback="")

    def request_credentials_token(self) -> bool:
        """Request an access token using the client credentials flow

        Returns:
            True if a token was obtained, False otherwise
        """
        try:
            payload = request_client_credentials(self.request, self.credentials)
        except ApiError as e:
            logger.warning(f"Client credentials request failed: {e.message} (status {e.status})")
            return False

        return self._store(payload, "client credentials", refresh_token_fallback=self.tokens.refresh_token)

    def refresh_access_token(self, refresh_token: str = "") -> bool:
        """Refresh the access token

        Args:
            refresh_token: Refresh token to use, defaults to the stored one

        Returns:
            True if the token was refreshed, False otherwise
        """
        token = refresh_token or self.tokens.refresh_token
        if not token:
            logger.warning("No refresh token available for refresh")
            return False

        try:
            payload = refresh_tokens(self.request, self.credentials, token)
        except ApiError as e:
            logger.warning(f"Token refresh failed: {e.message} (status {e.status})")
            return False

        # Spotify may omit the refresh token; keep the one we have
        return self._store(payload, "refresh", refresh_token_fallback=self.tokens.refresh_token or token)

    def _store(self, payload: Dict[str, Any], flow: str, refresh_token_fallback: str) -> bool:
        if not payload.get("access_token"):
            logger.warning(f"Token response for {flow} flow has no access_token")
            return False

        self.tokens = parse_token_response(payload, self.tokens, refresh_token_fallback)
        logger.info(
            f"Obtained access token {redact_token(self.tokens.access_token)} via {flow} flow, "
            f"expires at {self.tokens.expiration}"
        )
        return True
