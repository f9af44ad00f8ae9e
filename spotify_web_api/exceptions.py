"""Exception hierarchy for Spotify Web API operations

    SpotifyWebAPIError
    ├── TransportError        request never produced an HTTP response
    └── ApiError              Spotify answered with a non-2xx status
        ├── RateLimitedError  429, carries retry_after
        └── AuthError         token / credential problems, carries kind
"""

from enum import Enum
from typing import Optional

TOKEN_EXPIRED = "The access token expired"
RATE_LIMIT_STATUS = 429
UNKNOWN_ERROR = "An unknown error occurred."


class AuthErrorKind(Enum):
    """Sub-classification of authentication failures"""

    EXPIRED_TOKEN = "expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REFRESH_TOKEN = "invalid_refresh_token"
    OTHER = "other"


class SpotifyWebAPIError(Exception):
    """Base exception for all Spotify Web API errors

    Attributes:
        message: Human-readable error message
        status: HTTP status code, or None when no response was received
        reason: Machine-readable reason from the API (e.g. ``NO_ACTIVE_DEVICE``)
    """

    def __init__(self, message: str, status: Optional[int] = None, reason: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason

    def has_expired_token(self) -> bool:
        """Whether the error was caused by an expired access token"""
        return self.message == TOKEN_EXPIRED

    def is_rate_limited(self) -> bool:
        """Whether the error was caused by hitting the rate limit"""
        return self.status == RATE_LIMIT_STATUS

    def get_reason(self) -> str:
        return self.reason

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status={self.status!r}, reason={self.reason!r})"


class TransportError(SpotifyWebAPIError):
    """Raised on network level failures (DNS, refused connection, TLS, timeout)"""


class ApiError(SpotifyWebAPIError):
    """Raised when the API answers with an error status"""

    def __init__(self, message: str, status: int, reason: str = ""):
        super().__init__(message, status, reason)


class RateLimitedError(ApiError):
    """Raised when rate limited by the API"""

    def __init__(self, message: str, status: int = RATE_LIMIT_STATUS, retry_after: int = 0, reason: str = ""):
        super().__init__(message, status, reason)
        self.retry_after = retry_after


class AuthError(ApiError):
    """Raised when authentication or authorization fails"""

    def __init__(self, message: str, status: int, kind: AuthErrorKind = AuthErrorKind.OTHER, reason: str = ""):
        super().__init__(message, status, reason)
        self.kind = kind

    def has_expired_token(self) -> bool:
        return self.kind is AuthErrorKind.EXPIRED_TOKEN

    def has_invalid_credentials(self) -> bool:
        return self.kind is AuthErrorKind.INVALID_CREDENTIALS

    def has_invalid_refresh_token(self) -> bool:
        return self.kind is AuthErrorKind.INVALID_REFRESH_TOKEN
