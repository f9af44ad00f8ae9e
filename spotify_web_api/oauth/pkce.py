"""PKCE (Proof Key for Code Exchange) and state generation"""

import base64
import hashlib
import secrets
import string

from spotify_web_api.settings import (
    DEFAULT_CODE_VERIFIER_LENGTH,
    DEFAULT_STATE_LENGTH,
    MAX_CODE_VERIFIER_LENGTH,
    MIN_CODE_VERIFIER_LENGTH,
)
from .models import PkceCodes

# RFC 7636 unreserved characters
UNRESERVED_CHARACTERS = string.ascii_letters + string.digits + "-._~"


def _random_string(length: int) -> str:
    return "".join(secrets.choice(UNRESERVED_CHARACTERS) for _ in range(length))


def generate_state(length: int = DEFAULT_STATE_LENGTH) -> str:
    """Generate a random state value

    Args:
        length: Length of the state string

    Returns:
        A URL-safe random string of exactly ``length`` characters

    Raises:
        ValueError: If length is not positive
    """
    if length < 1:
        raise ValueError(f"State length must be positive, got {length}")
    return _random_string(length)


def generate_code_verifier(length: int = DEFAULT_CODE_VERIFIER_LENGTH) -> str:
    """Generate a PKCE code verifier

    Args:
        length: Length of the verifier, between 43 and 128

    Returns:
        A random string of exactly ``length`` unreserved characters

    Raises:
        ValueError: If length is outside the allowed range
    """
    if not MIN_CODE_VERIFIER_LENGTH <= length <= MAX_CODE_VERIFIER_LENGTH:
        raise ValueError(
            f"Code verifier length must be between {MIN_CODE_VERIFIER_LENGTH} "
            f"and {MAX_CODE_VERIFIER_LENGTH}, got {length}"
        )
    return _random_string(length)


def generate_code_challenge(code_verifier: str, hash_algo: str = "sha256") -> str:
    """Derive a PKCE code challenge from a verifier

    Args:
        code_verifier: The code verifier
        hash_algo: hashlib algorithm name, or "plain" to use the verifier as is

    Returns:
        Base64url encoded digest without padding

    Raises:
        ValueError: If hash_algo is not supported
    """
    if hash_algo == "plain":
        return code_verifier

    try:
        digest = hashlib.new(hash_algo, code_verifier.encode("utf-8")).digest()
    except (ValueError, TypeError) as e:
        raise ValueError(f"Unsupported hash algorithm: {hash_algo}") from e

    return base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")


def generate_pkce(length: int = DEFAULT_CODE_VERIFIER_LENGTH) -> PkceCodes:
    """Generate a code verifier and its S256 challenge"""
    code_verifier = generate_code_verifier(length)
    return PkceCodes(code_verifier=code_verifier, code_challenge=generate_code_challenge(code_verifier))
