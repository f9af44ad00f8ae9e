"""Spotify Web API client with OAuth session management"""

import logging

from .client import SpotifyWebAPI
from .exceptions import (
    ApiError,
    AuthError,
    AuthErrorKind,
    RateLimitedError,
    SpotifyWebAPIError,
    TransportError,
)
from .http import Request, Response, Transport
from .oauth import AuthorizeOptions, PkceCodes, Session
from .options import Options
from .utils.logging_utils import configure_logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ApiError",
    "AuthError",
    "AuthErrorKind",
    "AuthorizeOptions",
    "Options",
    "PkceCodes",
    "RateLimitedError",
    "Request",
    "Response",
    "Session",
    "SpotifyWebAPI",
    "SpotifyWebAPIError",
    "Transport",
    "TransportError",
    "configure_logging",
]
