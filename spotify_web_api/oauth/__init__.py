"""OAuth authentication package for the Spotify accounts service"""

from .authorization import build_authorize_url
from .models import AuthorizeOptions, Credentials, PkceCodes, TokenState
from .pkce import generate_code_challenge, generate_code_verifier, generate_pkce, generate_state
from .session import Session

__all__ = [
    "AuthorizeOptions",
    "Credentials",
    "PkceCodes",
    "Session",
    "TokenState",
    "build_authorize_url",
    "generate_code_challenge",
    "generate_code_verifier",
    "generate_pkce",
    "generate_state",
]
