import base64
import hashlib
import re

import pytest

from spotify_web_api.oauth import (
    PkceCodes,
    generate_code_challenge,
    generate_code_verifier,
    generate_pkce,
    generate_state,
)

URL_SAFE = re.compile(r"^[A-Za-z0-9\-._~]+$")


def test_generate_state_default_length():
    state = generate_state()
    assert len(state) == 16
    assert URL_SAFE.match(state)


def test_generate_state_custom_length():
    assert len(generate_state(32)) == 32


def test_generate_state_is_random():
    assert generate_state() != generate_state()


@pytest.mark.parametrize("length", [43, 64, 128])
def test_generate_code_verifier_lengths(length):
    verifier = generate_code_verifier(length)
    assert len(verifier) == length
    assert URL_SAFE.match(verifier)


@pytest.mark.parametrize("length", [0, 42, 129])
def test_generate_code_verifier_rejects_bad_length(length):
    with pytest.raises(ValueError):
        generate_code_verifier(length)


def test_code_challenge_matches_rfc_example():
    # RFC 7636 appendix B
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
    assert generate_code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_code_challenge_is_unpadded_base64url_of_sha256():
    verifier = generate_code_verifier()
    expected = base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest()).decode().rstrip("=")

    challenge = generate_code_challenge(verifier)

    assert challenge == expected
    assert "=" not in challenge
    assert generate_code_challenge(verifier) == challenge


def test_code_challenge_differs_per_verifier():
    assert generate_code_challenge(generate_code_verifier()) != generate_code_challenge(generate_code_verifier())


def test_code_challenge_other_algorithm():
    verifier = generate_code_verifier()
    assert generate_code_challenge(verifier, "sha512") != generate_code_challenge(verifier)


def test_code_challenge_plain():
    assert generate_code_challenge("verifier", "plain") == "verifier"


def test_code_challenge_unsupported_algorithm():
    with pytest.raises(ValueError):
        generate_code_challenge("verifier", "not-a-hash")


def test_generate_pkce():
    codes = generate_pkce(64)

    assert isinstance(codes, PkceCodes)
    assert len(codes.code_verifier) == 64
    assert codes.code_challenge == generate_code_challenge(codes.code_verifier)
