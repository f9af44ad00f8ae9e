import time
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from spotify_web_api.exceptions import TransportError
from spotify_web_api.oauth import AuthorizeOptions, Session

CLIENT_ID = "b777292af0def22f9257991fc770b520"
CLIENT_SECRET = "6a0419f43d0aa93b2ae881429b6b9bc2"
REDIRECT_URI = "https://example.com/callback"
BASIC_AUTH = "Basic Yjc3NzI5MmFmMGRlZjIyZjkyNTc5OTFmYzc3MGI1MjA6NmEwNDE5ZjQzZDBhYTkzYjJhZTg4MTQyOWI2YjliYzI="


@pytest.fixture
def make_session(make_request):
    def _make(*responses, client_secret=CLIENT_SECRET):
        request, handler = make_request(*responses)
        return Session(CLIENT_ID, client_secret, REDIRECT_URI, request=request), handler

    return _make


def query_of(url):
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


class TestAccessors:
    def test_setters_chain(self):
        session = Session(CLIENT_ID)

        result = (
            session.set_client_id("id")
            .set_client_secret("secret")
            .set_redirect_uri(REDIRECT_URI)
            .set_access_token("access")
            .set_refresh_token("refresh")
        )

        assert result is session
        assert session.get_client_id() == "id"
        assert session.get_client_secret() == "secret"
        assert session.get_redirect_uri() == REDIRECT_URI
        assert session.get_access_token() == "access"
        assert session.get_refresh_token() == "refresh"
        assert session.client_id == "id"
        assert session.access_token == "access"

    def test_empty_token_state(self):
        session = Session(CLIENT_ID)
        assert session.get_access_token() == ""
        assert session.get_refresh_token() == ""
        assert session.get_token_expiration() == 0
        assert session.get_scope() == []


class TestAuthorizeUrl:
    def test_basic_parameters(self):
        session = Session(CLIENT_ID, CLIENT_SECRET, REDIRECT_URI)

        url = session.get_authorize_url({
            "scope": ["user-read-email", "user-library-modify"],
            "state": "state_value",
            "show_dialog": True,
        })

        assert url.startswith("https://accounts.spotify.com/authorize?")
        assert "scope=user-read-email+user-library-modify" in url
        assert query_of(url) == {
            "client_id": CLIENT_ID,
            "redirect_uri": REDIRECT_URI,
            "response_type": "code",
            "scope": "user-read-email user-library-modify",
            "show_dialog": "true",
            "state": "state_value",
        }

    def test_duplicate_scopes_are_dropped_in_order(self):
        url = Session(CLIENT_ID).get_authorize_url(AuthorizeOptions(scope=["b", "a", "b"]))
        assert query_of(url)["scope"] == "b a"

    def test_code_challenge(self):
        url = Session(CLIENT_ID).get_authorize_url({"code_challenge": "challenge"})
        query = query_of(url)

        assert query["code_challenge"] == "challenge"
        assert query["code_challenge_method"] == "S256"

    def test_optional_parameters_are_omitted(self):
        query = query_of(Session(CLIENT_ID, redirect_uri=REDIRECT_URI).get_authorize_url())

        assert "state" not in query
        assert "show_dialog" not in query
        assert "code_challenge_method" not in query


class TestRequestAccessToken:
    def test_with_client_secret(self, make_session, json_response):
        session, handler = make_session(json_response("access-token"))

        assert session.request_access_token("code") is True

        assert handler.form() == {
            "client_id": CLIENT_ID,
            "client_secret": CLIENT_SECRET,
            "code": "code",
            "grant_type": "authorization_code",
            "redirect_uri": REDIRECT_URI,
        }
        assert "authorization" not in handler.requests[0].headers
        assert session.get_access_token() == "NgCXRKc...MzYjw"
        assert session.get_refresh_token() == "NgAagA...Um_SHo"
        assert session.get_token_expiration() == pytest.approx(time.time() + 3600, abs=5)
        assert session.get_scope() == [
            "user-follow-read",
            "user-follow-modify",
            "user-library-read",
            "user-library-modify",
        ]

    def test_with_code_verifier(self, make_session, json_response):
        session, handler = make_session(json_response("access-token"))

        assert session.request_access_token("code", "verifier") is True

        form = handler.form()
        assert form["code_verifier"] == "verifier"
        assert "client_secret" not in form

    def test_failure_leaves_tokens_untouched(self, make_session):
        session, _ = make_session(
            httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid authorization code"})
        )
        session.set_access_token("old-access").set_refresh_token("old-refresh")

        assert session.request_access_token("bad-code") is False

        assert session.get_access_token() == "old-access"
        assert session.get_refresh_token() == "old-refresh"

    def test_response_without_access_token(self, make_session):
        session, _ = make_session(httpx.Response(200, json={"token_type": "Bearer"}))

        assert session.request_access_token("code") is False
        assert session.get_access_token() == ""


class TestRequestCredentialsToken:
    def test_success(self, make_session, json_response):
        session, handler = make_session(json_response("client-credentials"))

        assert session.request_credentials_token() is True

        assert handler.requests[0].headers["authorization"] == BASIC_AUTH
        assert handler.form() == {"grant_type": "client_credentials"}
        assert session.get_access_token() == "BQBWPw...4k7Fg"
        assert session.get_refresh_token() == ""
        assert session.get_token_expiration() == pytest.approx(time.time() + 3600, abs=5)

    def test_invalid_client(self, make_session):
        session, _ = make_session(
            httpx.Response(400, json={"error": "invalid_client", "error_description": "Invalid client"})
        )

        assert session.request_credentials_token() is False
        assert session.get_access_token() == ""


class TestRefreshAccessToken:
    def test_with_client_secret(self, make_session, json_response):
        session, handler = make_session(json_response("refresh-token"))

        assert session.refresh_access_token("refresh-token") is True

        assert handler.requests[0].headers["authorization"] == BASIC_AUTH
        assert handler.form() == {"grant_type": "refresh_token", "refresh_token": "refresh-token"}
        assert session.get_access_token() == "NgCXRKc...MzYjw"
        assert session.get_refresh_token() == "NgAagA...Um_SHo"
        assert session.get_scope() == ["user-follow-read", "user-follow-modify"]

    def test_without_client_secret(self, make_session, json_response):
        session, handler = make_session(json_response("refresh-token"), client_secret="")

        assert session.refresh_access_token("refresh-token") is True

        assert "authorization" not in handler.requests[0].headers
        assert handler.form() == {
            "grant_type": "refresh_token",
            "refresh_token": "refresh-token",
            "client_id": CLIENT_ID,
        }

    def test_uses_stored_refresh_token(self, make_session, json_response):
        session, handler = make_session(json_response("refresh-token"))
        session.set_refresh_token("stored-token")

        assert session.refresh_access_token() is True
        assert handler.form()["refresh_token"] == "stored-token"

    def test_keeps_refresh_token_when_none_returned(self, make_session, json_response):
        session, _ = make_session(json_response("refresh-token-no-refresh-token"))
        session.set_refresh_token("stored-token")

        assert session.refresh_access_token() is True

        assert session.get_access_token() == "NgCXRKc...MzYjw"
        assert session.get_refresh_token() == "stored-token"

    def test_keeps_used_token_when_none_stored(self, make_session, json_response):
        session, _ = make_session(json_response("refresh-token-no-refresh-token"))

        assert session.refresh_access_token("passed-token") is True
        assert session.get_refresh_token() == "passed-token"

    def test_keeps_scope_when_none_returned(self, make_session):
        session, _ = make_session(httpx.Response(200, json={"access_token": "new", "expires_in": 3600}))
        session.tokens.scope = ["user-read-email"]

        assert session.refresh_access_token("token") is True
        assert session.get_scope() == ["user-read-email"]

    def test_no_refresh_token_makes_no_request(self, make_session):
        session, handler = make_session()

        assert session.refresh_access_token() is False
        assert handler.requests == []

    def test_revoked_refresh_token(self, make_session):
        session, _ = make_session(
            httpx.Response(400, json={"error": "invalid_grant", "error_description": "Refresh token revoked"})
        )
        session.set_access_token("old-access").set_refresh_token("old-refresh")

        assert session.refresh_access_token() is False

        assert session.get_access_token() == "old-access"
        assert session.get_refresh_token() == "old-refresh"

    def test_transport_error_propagates(self, make_session):
        session, _ = make_session(httpx.ConnectError("Connection refused"))

        with pytest.raises(TransportError):
            session.refresh_access_token("token")


class TestTokenResponseParsing:
    @pytest.mark.parametrize("expires_in", ["soon", None, "", [3600]])
    def test_malformed_expires_in_falls_back_to_an_hour(self, make_session, expires_in):
        session, _ = make_session(httpx.Response(200, json={"access_token": "a", "expires_in": expires_in}))

        assert session.request_access_token("code") is True

        assert session.get_access_token() == "a"
        assert session.get_token_expiration() == pytest.approx(time.time() + 3600, abs=5)

    def test_numeric_string_expires_in(self, make_session):
        session, _ = make_session(httpx.Response(200, json={"access_token": "a", "expires_in": "60"}))

        assert session.refresh_access_token("token") is True
        assert session.get_token_expiration() == pytest.approx(time.time() + 60, abs=5)


class TestClose:
    def test_closes_request_it_created(self):
        session = Session(CLIENT_ID)
        client = session.request.transport.client

        with session:
            pass

        assert client.is_closed

    def test_leaves_injected_request_open(self, make_request):
        request, _ = make_request()

        Session(CLIENT_ID, request=request).close()

        assert not request.transport.client.is_closed
