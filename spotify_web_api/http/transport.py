"""HTTP transport built on httpx"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

import httpx

from spotify_web_api.exceptions import TransportError
from spotify_web_api.settings import CONNECT_TIMEOUT, REQUEST_TIMEOUT, USER_AGENT
from spotify_web_api.utils.logging_utils import log_request, log_response
from .models import RequestDescriptor

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Verbs whose parameters travel in the body; everything else uses the query string
BODY_METHODS = {"POST", "PUT", "DELETE"}


def _serialize_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_serialize_value(item) for item in value)
    return str(value)


def serialize_parameters(parameters: Optional[Any]) -> str:
    """Serialize request parameters

    Mappings become a form encoded string (``{"foo": "bar"}`` -> ``foo=bar``),
    None values are dropped. Strings are treated as an already serialized
    body (e.g. a JSON document) and returned unchanged.
    """
    if parameters is None:
        return ""
    if isinstance(parameters, bytes):
        return parameters.decode("utf-8")
    if isinstance(parameters, str):
        return parameters
    if isinstance(parameters, Mapping):
        return urlencode({key: _serialize_value(value) for key, value in parameters.items() if value is not None})
    raise TypeError(f"Unsupported parameters type: {type(parameters).__name__}")


class Transport:
    """Executes single HTTP requests

    No retries happen at this layer.
    """

    def __init__(self, client: Optional[httpx.Client] = None):
        """Initialize transport

        Args:
            client: httpx client to use (creates one with default timeouts if None)
        """
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            headers={"User-Agent": USER_AGENT},
        )

    def prepare(
        self,
        method: str,
        url: str,
        parameters: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestDescriptor:
        """Place parameters in the query string or the body depending on the verb

        Args:
            method: HTTP verb, any case
            url: Full URL without query string
            parameters: Mapping of parameters or a pre-serialized body
            headers: Request headers

        Returns:
            Prepared request descriptor
        """
        method = method.upper()
        serialized = serialize_parameters(parameters)
        merged_headers = dict(headers or {})

        if method in BODY_METHODS:
            body = serialized or None
            if body and isinstance(parameters, Mapping) and not any(
                name.lower() == "content-type" for name in merged_headers
            ):
                merged_headers["Content-Type"] = FORM_CONTENT_TYPE
            return RequestDescriptor(method=method, url=url, body=body, headers=merged_headers)

        if serialized:
            url = url.rstrip("/") + "/?" + serialized
        return RequestDescriptor(method=method, url=url, body=None, headers=merged_headers)

    def execute(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Tuple[int, Dict[str, str], bytes]:
        """Execute a request

        Args:
            method: HTTP verb
            url: Full URL
            body: Serialized body or None
            headers: Request headers

        Returns:
            Tuple of (status, headers with lower-cased names, raw body)

        Raises:
            TransportError: If no HTTP response could be obtained
        """
        method = method.upper()
        log_request(method, url, headers, body)

        try:
            response = self.client.request(
                method,
                url,
                content=body.encode("utf-8") if body else None,
                headers=dict(headers or {}),
            )
        except httpx.TransportError as e:
            logger.error(f"Transport failure for {method} {url}: {type(e).__name__}: {e}")
            raise TransportError(str(e)) from e

        response_headers = {name.lower(): value for name, value in response.headers.items()}
        log_response(method, url, response.status_code, response_headers)

        return response.status_code, response_headers, response.content

    def close(self) -> None:
        """Close the underlying client if this transport created it"""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
