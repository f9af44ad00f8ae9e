import logging

from spotify_web_api.utils.logging_utils import log_request, redact_headers, redact_token


def test_redact_headers():
    headers = redact_headers({"Authorization": "Bearer secret", "Content-Type": "application/json"})
    assert headers == {"Authorization": "[REDACTED]", "Content-Type": "application/json"}


def test_redact_token():
    assert redact_token("NgCXRKcMzYjw") == "NgCXRK..."
    assert redact_token("") == "<none>"


def test_log_request_hides_secrets(caplog):
    with caplog.at_level(logging.DEBUG, logger="spotify_web_api.utils.logging_utils"):
        log_request(
            "POST",
            "https://accounts.spotify.com/api/token",
            {"Authorization": "Basic abc123"},
            "grant_type=refresh_token&refresh_token=secret-token",
        )

    assert "abc123" not in caplog.text
    assert "secret-token" not in caplog.text
    assert "POST https://accounts.spotify.com/api/token" in caplog.text
