from types import SimpleNamespace

import pytest

from spotify_web_api.utils import get_snapshot_id, id_to_uri, to_comma_string, uri_to_id


def test_id_to_uri_single():
    assert id_to_uri("7EjyzZcbLxW7PaaLua9Ksb", "track") == "spotify:track:7EjyzZcbLxW7PaaLua9Ksb"


def test_id_to_uri_keeps_existing_uris():
    uris = id_to_uri(["spotify:track:7EjyzZcbLxW7PaaLua9Ksb", "1301WleyT98MSxVHPZCA6M"], "track")
    assert uris == ["spotify:track:7EjyzZcbLxW7PaaLua9Ksb", "spotify:track:1301WleyT98MSxVHPZCA6M"]


def test_uri_to_id():
    assert uri_to_id("spotify:album:4Hjqdhj5rh816i1dfcUEaM", "album") == "4Hjqdhj5rh816i1dfcUEaM"
    assert uri_to_id(["spotify:track:a", "b"], "track") == ["a", "b"]


def test_to_comma_string():
    assert to_comma_string(["a", "b", "c"]) == "a,b,c"
    assert to_comma_string("a,b") == "a,b"


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"snapshot_id": "abc"}, "abc"),
        (SimpleNamespace(snapshot_id="abc"), "abc"),
        ({}, False),
        (None, False),
    ],
)
def test_get_snapshot_id(body, expected):
    assert get_snapshot_id(body) == expected
