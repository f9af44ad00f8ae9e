"""Request facade for the Spotify account and API hosts"""

import json
import logging
from types import SimpleNamespace
from typing import Any, Mapping, Optional, Union

from spotify_web_api.options import Options
from spotify_web_api.settings import ACCOUNT_URL, API_URL
from .classifier import ACCOUNT_ENDPOINT, API_ENDPOINT, classify_response
from .models import Response
from .transport import Transport

logger = logging.getLogger(__name__)


def parse_body(raw: bytes, return_assoc: bool = False) -> Any:
    """Decode a response body

    Args:
        raw: Raw response bytes
        return_assoc: Return JSON objects as dicts instead of SimpleNamespace objects

    Returns:
        Parsed JSON, the raw text if it is not JSON, or None for an empty body
    """
    text = raw.decode("utf-8", errors="replace") if raw else ""
    if not text.strip():
        return None

    try:
        if return_assoc:
            return json.loads(text)
        return json.loads(text, object_hook=lambda obj: SimpleNamespace(**obj))
    except ValueError:
        logger.debug("Response body is not JSON, returning raw text")
        return text


class Request:
    """Sends requests to Spotify and normalizes the responses

    This layer adds no authentication headers. Every call overwrites
    ``last_response``, so an instance shared between threads only reflects
    whichever call finished last.
    """

    def __init__(
        self,
        options: Optional[Union[Options, Mapping[str, Any]]] = None,
        transport: Optional[Transport] = None,
    ):
        """Initialize the request facade

        Args:
            options: Options (only return_assoc is used here)
            transport: Transport instance (creates new if None)
        """
        self.options = Options().merged(options)
        self._owns_transport = transport is None
        self.transport = transport or Transport()
        self.last_response: Optional[Response] = None

    def set_options(self, options: Union[Options, Mapping[str, Any]]) -> "Request":
        """Set options; unknown keys are ignored

        Returns:
            This instance, for chaining
        """
        self.options = self.options.merged(options)
        return self

    def get_last_response(self) -> Optional[Response]:
        """Get the latest full response"""
        return self.last_response

    def close(self) -> None:
        """Close the transport if this facade created it"""
        if self._owns_transport:
            self.transport.close()

    def account(
        self,
        method: str,
        uri: str,
        parameters: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Make a request to the "account" host

        Args:
            method: The HTTP method to use
            uri: The URI to request, e.g. "/api/token"
            parameters: Query string parameters or HTTP body, depending on method
            headers: HTTP headers

        Returns:
            Response envelope

        Raises:
            AuthError: For authentication failures
            ApiError: For other error statuses
            TransportError: If the request could not be sent
        """
        return self._send(method, ACCOUNT_URL + uri, parameters, headers, ACCOUNT_ENDPOINT)

    def api(
        self,
        method: str,
        uri: str,
        parameters: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Make a request to the "api" host

        Args:
            method: The HTTP method to use
            uri: The URI to request, e.g. "/v1/tracks/{id}"
            parameters: Query string parameters or HTTP body, depending on method
            headers: HTTP headers

        Returns:
            Response envelope

        Raises:
            AuthError: For an expired token
            RateLimitedError: When rate limited
            ApiError: For other error statuses
            TransportError: If the request could not be sent
        """
        return self._send(method, API_URL + uri, parameters, headers, API_ENDPOINT)

    def send(
        self,
        method: str,
        url: str,
        parameters: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Make a request to an arbitrary URL

        You'll probably want to use account() or api() instead.
        """
        return self._send(method, url, parameters, headers, None)

    def _send(
        self,
        method: str,
        url: str,
        parameters: Optional[Any],
        headers: Optional[Mapping[str, str]],
        endpoint: Optional[str],
    ) -> Response:
        prepared = self.transport.prepare(method, url, parameters, headers)
        status, response_headers, raw_body = self.transport.execute(
            prepared.method, prepared.url, prepared.body, prepared.headers
        )

        response = Response(
            body=parse_body(raw_body, self.options.return_assoc),
            headers=response_headers,
            status=status,
            url=prepared.url,
        )
        self.last_response = response

        error = classify_response(
            status,
            raw_body.decode("utf-8", errors="replace") if raw_body else "",
            response_headers,
            endpoint,
        )
        if error is not None:
            logger.debug(f"{prepared.method} {prepared.url} failed: {error!r}")
            raise error

        return response
