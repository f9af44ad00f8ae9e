"""Data models for Spotify OAuth authentication"""

from dataclasses import dataclass, field, fields
from typing import Any, Iterable, List, Mapping, Optional, Union


@dataclass
class Credentials:
    """Application credentials registered with Spotify

    Attributes:
        client_id: The application's client ID
        client_secret: The client secret, empty for PKCE-only use
        redirect_uri: Callback URI registered for the application
    """
    client_id: str
    client_secret: str = ""
    redirect_uri: str = ""


@dataclass
class TokenState:
    """Token state held by a session

    Attributes:
        access_token: Bearer token for API requests
        refresh_token: Token used to obtain a new access token
        expiration: Unix timestamp (seconds) when the access token expires
        scope: Scopes granted to the access token
    """
    access_token: str = ""
    refresh_token: str = ""
    expiration: int = 0
    scope: List[str] = field(default_factory=list)


@dataclass
class PkceCodes:
    """PKCE (Proof Key for Code Exchange) codes for the authorization code flow

    Attributes:
        code_verifier: Random string kept by the client until the token exchange
        code_challenge: SHA256 hash of code_verifier, sent in the authorize URL
    """
    code_verifier: str
    code_challenge: str


@dataclass
class AuthorizeOptions:
    """Optional parameters for the authorize URL

    Attributes:
        scope: Scopes to request, duplicates are dropped
        state: Opaque value echoed back on the redirect
        code_challenge: PKCE code challenge
        code_challenge_method: How the challenge was derived
        show_dialog: Force the user to approve the app again
    """
    scope: Iterable[str] = field(default_factory=list)
    state: Optional[str] = None
    code_challenge: Optional[str] = None
    code_challenge_method: str = "S256"
    show_dialog: bool = False

    @classmethod
    def from_value(cls, value: Optional[Union["AuthorizeOptions", Mapping[str, Any]]]) -> "AuthorizeOptions":
        """Accept an AuthorizeOptions, a plain mapping with the same keys, or None"""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        known = {f.name for f in fields(cls)}
        return cls(**{key: item for key, item in value.items() if key in known})
